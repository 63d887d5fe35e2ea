# gradebook/services/grading.py
from __future__ import annotations

import math
from typing import Iterable, Optional, Tuple

from gradebook.core.errors import EmptySemesterError, UnknownCourseError
from gradebook.models.constants import FAIL_GRADE, GRADE_BANDS
from gradebook.models.course_schemas import CourseCatalog
from gradebook.models.marks_schemas import CourseMark
from gradebook.models.student_schemas import GradeRecord, SemesterRecord, Student


def grade_of(marks: Optional[float]) -> Tuple[str, int]:
    """
    Map raw marks to (letter grade, grade points).
    No range check: anything below the lowest band, blanks and NaN are F.
    """
    if marks is None or math.isnan(marks):
        return FAIL_GRADE
    for threshold, grade, points in GRADE_BANDS:
        if marks >= threshold:
            return grade, points
    return FAIL_GRADE


def compute_semester(
    semester: int,
    year: int,
    course_marks: Iterable[CourseMark],
    catalog: CourseCatalog,
) -> SemesterRecord:
    """
    Grade every (course_code, marks) pair against the catalog and aggregate
    them into an unranked SemesterRecord.

    Raises UnknownCourseError for a course code missing from the catalog and
    EmptySemesterError when there is nothing to divide by. Nothing is
    returned (and so nothing can be persisted) if either is raised.
    """
    total_credit_points = 0.0
    total_credits = 0.0
    grades = []

    for mark in course_marks:
        course = catalog.find_course(mark.course_code)
        if course is None:
            raise UnknownCourseError(mark.course_code)

        grade, grade_points = grade_of(mark.marks)
        credit_points = grade_points * course.credits
        total_credit_points += credit_points
        total_credits += course.credits

        grades.append(GradeRecord(
            course_code=course.course_code,
            course_title=course.course_title,
            credits=course.credits,
            marks=mark.marks,
            grade=grade,
            grade_points=grade_points,
            credit_points=credit_points,
        ))

    if total_credits <= 0:
        raise EmptySemesterError(semester, year)

    return SemesterRecord(
        semester=semester,
        year=year,
        grades=grades,
        sgpa=total_credit_points / total_credits,
    )


def upsert_semester(student: Student, record: SemesterRecord) -> bool:
    """Replace the student's record for the same (semester, year), or append. Returns True on replace."""
    for idx, existing in enumerate(student.semesters):
        if existing.key == record.key:
            student.semesters[idx] = record
            return True
    student.semesters.append(record)
    return False


def update_cgpa(student: Student) -> float:
    # Unweighted mean of SGPA across semesters
    if not student.semesters:
        student.cgpa = 0.0
        return student.cgpa
    student.cgpa = sum(s.sgpa for s in student.semesters) / len(student.semesters)
    return student.cgpa
