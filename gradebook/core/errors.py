# gradebook/core/errors.py
"""
Error taxonomy of the grading engine.

Every error carries the HTTP status it maps to; the FastAPI exception
handler in ``gradebook.main`` renders them as ``{"detail": message}``.
"""


class GradebookError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(GradebookError):
    status_code = 404


class StudentNotFoundError(NotFoundError):
    def __init__(self, roll_number: str):
        super().__init__("Student not found")
        self.roll_number = roll_number


class CatalogNotFoundError(NotFoundError):
    def __init__(self, semester: int, year: int):
        super().__init__("Courses not found for the given semester and year")
        self.semester = semester
        self.year = year


class SemesterNotFoundError(NotFoundError):
    def __init__(self, roll_number: str, semester: int, year: int):
        super().__init__("Semester data not found")
        self.roll_number = roll_number
        self.semester = semester
        self.year = year


class UnknownCourseError(NotFoundError):
    def __init__(self, course_code: str):
        super().__init__(f"Course {course_code} not found")
        self.course_code = course_code


class ValidationError(GradebookError):
    status_code = 400


class DuplicateStudentError(ValidationError):
    def __init__(self, roll_number: str):
        super().__init__(f"Student with roll number {roll_number} already exists")
        self.roll_number = roll_number


class MarksParseError(ValidationError):
    def __init__(self, row_number: int, column: str, value: str | None):
        super().__init__(
            f"Row {row_number}: invalid marks {value!r} in column {column!r}"
        )
        self.row_number = row_number
        self.column = column
        self.value = value


class ComputationError(GradebookError):
    status_code = 422


class EmptySemesterError(ComputationError):
    def __init__(self, semester: int, year: int):
        super().__init__(
            f"No courses to grade for semester {semester}, year {year}: total credits is zero"
        )
        self.semester = semester
        self.year = year
