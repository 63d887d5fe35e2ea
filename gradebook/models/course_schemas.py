from pydantic import BaseModel, Field
from typing import List, Optional


class Course(BaseModel):
    course_code: str = Field(..., min_length=1)
    course_title: str
    credits: float = Field(..., gt=0)


class CourseCatalog(BaseModel):
    """All courses offered for one (semester, year)."""
    semester: int
    year: int
    courses: List[Course] = []

    def find_course(self, course_code: str) -> Optional[Course]:
        for course in self.courses:
            if course.course_code == course_code:
                return course
        return None


class CoursesCreate(BaseModel):
    semester: int
    year: int
    courses: List[Course]


class CoursesResponse(BaseModel):
    message: str
    courses: List[Course]
