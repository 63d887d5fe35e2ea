# gradebook/models/__init__.py

from .course_schemas import Course, CourseCatalog
from .student_schemas import GradeRecord, SemesterRecord, Student

__all__ = [
    "Course",
    "CourseCatalog",
    "GradeRecord",
    "SemesterRecord",
    "Student",
]
