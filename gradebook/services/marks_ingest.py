import csv
import math
import os
import re
import shutil
import tempfile
from contextlib import contextmanager
from typing import BinaryIO, Dict, Iterator, List, Optional

from pydantic import ValidationError as PydanticValidationError

from gradebook.core.config import ensure_upload_dir
from gradebook.core.errors import MarksParseError, ValidationError
from gradebook.core.logger import get_logger
from gradebook.models.course_schemas import CourseCatalog
from gradebook.models.marks_schemas import CourseMark, ImportResult, ImportRow
from gradebook.models.student_schemas import Student
from gradebook.services.catalog import get_catalog
from gradebook.services.marks_service import record_semester
from gradebook.services.ranking import refresh_ranks

logger = get_logger("marks_ingest")

LEADING_INT = re.compile(r"\s*[+-]?\d+")


@contextmanager
def spooled_upload(source: BinaryIO, suffix: str = ".csv") -> Iterator[str]:
    """
    Copy an uploaded stream into a temp file under UPLOAD_DIR and yield its path.
    The file is removed when the block exits, whether or not it raised.
    """
    fd, path = tempfile.mkstemp(suffix=suffix, dir=ensure_upload_dir())
    try:
        with os.fdopen(fd, "wb") as out:
            shutil.copyfileobj(source, out)
        yield path
    finally:
        if os.path.exists(path):
            os.remove(path)
            logger.debug("Removed upload %s", path)


def read_rows(path: str) -> List[Dict[str, Optional[str]]]:
    # utf-8-sig drops the BOM spreadsheet exports put in front of the first header
    try:
        with open(path, newline="", encoding="utf-8-sig") as f:
            reader = csv.DictReader(f)
            rows = []
            for row in reader:
                rows.append({
                    (k or "").strip(): (v.strip() if isinstance(v, str) else v)
                    for k, v in row.items()
                })
    except (UnicodeDecodeError, csv.Error) as e:
        logger.warning("Rejected import file %s: %s", path, e)
        raise ValidationError("Import file is not valid UTF-8 CSV")
    return rows


def parse_mark(raw: Optional[str], row_number: int, column: str, strict: bool = True) -> Optional[float]:
    """
    Integer marks; a decimal is truncated toward zero.
    Strict mode requires the whole cell to be a number and raises
    MarksParseError otherwise. Lenient mode takes the leading integer
    ("85abc" -> 85) and returns None (graded F) when there is none.
    """
    if not strict:
        match = LEADING_INT.match(raw or "")
        return float(int(match.group(0))) if match else None

    try:
        value = float(raw)
    except (TypeError, ValueError):
        value = None

    if value is None or not math.isfinite(value):
        raise MarksParseError(row_number, column, raw)
    return float(int(value))


def parse_row(raw: Dict[str, Optional[str]], row_number: int, catalog: CourseCatalog, strict: bool = True) -> ImportRow:
    marks = {
        course.course_code: parse_mark(raw.get(course.course_code), row_number, course.course_code, strict)
        for course in catalog.courses
    }
    try:
        row = ImportRow.model_validate({
            "roll_number": raw.get("roll_number") or raw.get("rollNumber"),
            "name": raw.get("name") or "",
            "email": raw.get("email") or "",
            "marks": marks,
        })
    except PydanticValidationError:
        raise ValidationError(f"Row {row_number}: roll number is required")
    if not row.roll_number:
        raise ValidationError(f"Row {row_number}: roll number is required")
    return row


def _cohort_of(first_row: Dict[str, Optional[str]]) -> tuple:
    try:
        return int(first_row.get("semester")), int(first_row.get("year"))
    except (TypeError, ValueError):
        raise ValidationError("Invalid semester or year")


def import_students(
    student_repo,
    catalog_repo,
    rows: List[Dict[str, Optional[str]]],
    strict: bool = True,
    rank: bool = True,
) -> ImportResult:
    """
    Grade one (semester, year) for every row, then rank the cohort and
    everyone's CGPA once.

    The first row decides the semester/year for the whole batch. Rows are
    saved one by one; a failing row stops the import and earlier rows stay
    saved.
    """
    if not rows:
        raise ValidationError("Import file contains no rows")

    semester, year = _cohort_of(rows[0])
    catalog = get_catalog(catalog_repo, semester, year)

    created = updated = 0
    for idx, raw in enumerate(rows, start=1):
        row = parse_row(raw, idx, catalog, strict)
        course_marks = [CourseMark(course_code=code, marks=m) for code, m in row.marks.items()]

        student = student_repo.find_one(row.roll_number)
        if student is None:
            student = Student(roll_number=row.roll_number, name=row.name, email=row.email, semesters=[])
            created += 1
        else:
            updated += 1

        record_semester(student, semester, year, course_marks, catalog)
        student_repo.save(student)

    if rank:
        refresh_ranks(student_repo, semester, year)

    logger.info(
        "Imported %d rows for semester %s/%s (%d new, %d updated)",
        len(rows), semester, year, created, updated,
    )
    return ImportResult(
        message="Students imported successfully",
        semester=semester,
        year=year,
        rows_processed=len(rows),
        students_created=created,
        students_updated=updated,
    )


def import_students_file(student_repo, catalog_repo, path: str, strict: bool = True, rank: bool = True) -> ImportResult:
    return import_students(student_repo, catalog_repo, read_rows(path), strict=strict, rank=rank)
