# gradebook/services/marks_service.py
from typing import List

from gradebook.core.errors import SemesterNotFoundError, StudentNotFoundError
from gradebook.core.logger import get_logger
from gradebook.models.marks_schemas import (
    CourseMark,
    RanksResponse,
    SemesterRank,
    StudentMarksResponse,
    TopPerformersResponse,
)
from gradebook.models.student_schemas import SemesterRecord, Student, StudentCreate, StudentSummary
from gradebook.services.catalog import get_catalog
from gradebook.services.grading import compute_semester, update_cgpa, upsert_semester
from gradebook.services.ranking import refresh_ranks

logger = get_logger("marks")


def create_student(student_repo, payload: StudentCreate) -> Student:
    student = Student(
        name=payload.name,
        roll_number=payload.roll_number,
        email=payload.email,
        cgpa=0.0,
        semesters=[],
    )
    student_repo.insert(student)
    logger.info("Student %s created", student.roll_number)
    return student


def list_students(student_repo) -> List[StudentSummary]:
    return student_repo.list_summaries()


def get_student(student_repo, roll_number: str) -> Student:
    student = student_repo.find_one(roll_number)
    if student is None:
        raise StudentNotFoundError(roll_number)
    return student


def record_semester(student: Student, semester: int, year: int, course_marks: List[CourseMark], catalog) -> SemesterRecord:
    """Grade one semester into the student (in memory) and refresh its CGPA."""
    record = compute_semester(semester, year, course_marks, catalog)
    replaced = upsert_semester(student, record)
    update_cgpa(student)
    logger.info(
        "%s semester %s/%s for %s: sgpa=%.3f cgpa=%.3f",
        "Replaced" if replaced else "Added", semester, year,
        student.roll_number, record.sgpa, student.cgpa,
    )
    return record


def submit_marks(
    student_repo,
    catalog_repo,
    roll_number: str,
    semester: int,
    year: int,
    course_marks: List[CourseMark],
    rank: bool = True,
) -> SemesterRecord:
    """
    Full single-student pipeline: grade, store, re-rank.

    The semester is computed completely before the student is saved, so an
    unknown course or an empty list leaves the stored student untouched.
    With rank=False the caller is responsible for running refresh_ranks.
    """
    student = get_student(student_repo, roll_number)
    catalog = get_catalog(catalog_repo, semester, year)

    record = record_semester(student, semester, year, course_marks, catalog)
    student_repo.save(student)

    if rank:
        refresh_ranks(student_repo, semester, year)
        # ranks were written after the save; reflect them in the response
        stored = student_repo.find_one(roll_number)
        if stored is not None:
            record = stored.find_semester(semester, year) or record
    return record


def get_marks(student_repo, roll_number: str, semester: int, year: int) -> StudentMarksResponse:
    student = get_student(student_repo, roll_number)
    record = student.find_semester(semester, year)
    if record is None:
        raise SemesterNotFoundError(roll_number, semester, year)
    return StudentMarksResponse(
        name=student.name,
        roll_number=student.roll_number,
        semester_data=record,
    )


def get_ranks(student_repo, roll_number: str) -> RanksResponse:
    student = get_student(student_repo, roll_number)
    return RanksResponse(
        name=student.name,
        roll_number=student.roll_number,
        cgpa=student.cgpa,
        cgpa_rank=student.cgpa_rank,
        semester_ranks=[
            SemesterRank(semester=s.semester, year=s.year, sgpa=s.sgpa, sgpa_rank=s.sgpa_rank)
            for s in student.semesters
        ],
    )


def top_performers(student_repo, limit: int = 10) -> TopPerformersResponse:
    return TopPerformersResponse(
        top_cgpa=student_repo.top_by_cgpa(limit),
        top_sgpa=student_repo.top_semesters(limit),
    )
