from pydantic import AliasChoices, BaseModel, Field
from typing import Dict, List, Optional

from gradebook.models.student_schemas import SemesterRecord, Student


class CourseMark(BaseModel):
    course_code: str
    marks: Optional[float] = None


class MarksSubmission(BaseModel):
    roll_number: str
    semester: int
    year: int
    course_marks: List[CourseMark]


class MarksSubmitResponse(BaseModel):
    message: str
    semester_data: SemesterRecord


class StudentMarksResponse(BaseModel):
    name: str
    roll_number: str
    semester_data: SemesterRecord


class SemesterRank(BaseModel):
    semester: int
    year: int
    sgpa: float
    sgpa_rank: Optional[int] = None


class RanksResponse(BaseModel):
    name: str
    roll_number: str
    cgpa: float
    cgpa_rank: Optional[int] = None
    semester_ranks: List[SemesterRank]


class TopSGPAEntry(BaseModel):
    name: str
    roll_number: str
    semester: int
    year: int
    sgpa: float


class TopPerformersResponse(BaseModel):
    top_cgpa: List[Student]
    top_sgpa: List[TopSGPAEntry]


class ImportRow(BaseModel):
    """One parsed CSV row: student identity plus marks keyed by course code."""
    roll_number: str = Field(validation_alias=AliasChoices("roll_number", "rollNumber"))
    name: str = ""
    email: str = ""
    marks: Dict[str, Optional[float]] = {}


class ImportResult(BaseModel):
    message: str
    semester: int
    year: int
    rows_processed: int
    students_created: int
    students_updated: int
