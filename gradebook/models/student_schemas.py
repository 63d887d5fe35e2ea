from pydantic import BaseModel, EmailStr
from typing import List, Optional, Tuple


class GradeRecord(BaseModel):
    course_code: str
    course_title: str
    credits: float
    # None when an import column was blank and strict parsing is off
    marks: Optional[float] = None
    grade: str
    grade_points: int
    credit_points: float


class SemesterRecord(BaseModel):
    semester: int
    year: int
    grades: List[GradeRecord]
    sgpa: float
    sgpa_rank: Optional[int] = None

    @property
    def key(self) -> Tuple[int, int]:
        return self.semester, self.year


class Student(BaseModel):
    id: Optional[str] = None
    roll_number: str
    name: str
    email: str
    semesters: List[SemesterRecord] = []
    cgpa: float = 0.0
    cgpa_rank: Optional[int] = None

    def find_semester(self, semester: int, year: int) -> Optional[SemesterRecord]:
        for record in self.semesters:
            if record.key == (semester, year):
                return record
        return None


class StudentCreate(BaseModel):
    name: str
    roll_number: str
    email: EmailStr


class StudentCreatedResponse(BaseModel):
    message: str
    student: Student


class StudentSummary(BaseModel):
    id: Optional[str] = None
    name: str
    roll_number: str
    email: str
    cgpa: float = 0.0
    cgpa_rank: Optional[int] = None
