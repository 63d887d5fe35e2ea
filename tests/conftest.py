from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from gradebook.core import config
from gradebook.core.dependencies import get_catalog_repository, get_student_repository
from gradebook.core.errors import DuplicateStudentError
from gradebook.main import app
from gradebook.models.course_schemas import Course, CourseCatalog
from gradebook.models.marks_schemas import TopSGPAEntry
from gradebook.models.student_schemas import Student, StudentSummary


class InMemoryStudentRepository:
    """Dict-backed stand-in for StudentRepository; keeps insertion order like _id order."""

    def __init__(self):
        self._students: Dict[str, Student] = {}
        self.saves = 0

    def _assign_id(self, student: Student) -> None:
        if student.id is None:
            student.id = f"id-{len(self._students) + 1}"

    def find_one(self, roll_number: str) -> Optional[Student]:
        student = self._students.get(roll_number)
        return student.model_copy(deep=True) if student else None

    def find_all(self) -> List[Student]:
        return [s.model_copy(deep=True) for s in self._students.values()]

    def find_by_semester(self, semester: int, year: int) -> List[Student]:
        return [s for s in self.find_all() if s.find_semester(semester, year) is not None]

    def list_summaries(self) -> List[StudentSummary]:
        return [
            StudentSummary(
                id=s.id, name=s.name, roll_number=s.roll_number,
                email=s.email, cgpa=s.cgpa, cgpa_rank=s.cgpa_rank,
            )
            for s in self._students.values()
        ]

    def insert(self, student: Student) -> Student:
        if student.roll_number in self._students:
            raise DuplicateStudentError(student.roll_number)
        self._assign_id(student)
        self._students[student.roll_number] = student.model_copy(deep=True)
        return student

    def save(self, student: Student) -> None:
        existing = self._students.get(student.roll_number)
        stored = student.model_copy(deep=True)
        if existing is not None:
            stored.id = existing.id
        else:
            self._assign_id(stored)
        self._students[student.roll_number] = stored
        self.saves += 1

    def set_sgpa_ranks(self, semester: int, year: int, ranks: Dict[str, int]) -> None:
        for roll, rank in ranks.items():
            record = self._students[roll].find_semester(semester, year)
            if record is not None:
                record.sgpa_rank = rank

    def set_cgpa_ranks(self, ranks: Dict[str, int]) -> None:
        for roll, rank in ranks.items():
            self._students[roll].cgpa_rank = rank

    def top_by_cgpa(self, limit: int) -> List[Student]:
        return sorted(self.find_all(), key=lambda s: s.cgpa, reverse=True)[:limit]

    def top_semesters(self, limit: int) -> List[TopSGPAEntry]:
        entries = [
            TopSGPAEntry(name=s.name, roll_number=s.roll_number, semester=r.semester, year=r.year, sgpa=r.sgpa)
            for s in self._students.values()
            for r in s.semesters
        ]
        return sorted(entries, key=lambda e: e.sgpa, reverse=True)[:limit]


class InMemoryCatalogRepository:

    def __init__(self):
        self._catalogs: Dict[tuple, CourseCatalog] = {}

    def find_one(self, semester: int, year: int) -> Optional[CourseCatalog]:
        catalog = self._catalogs.get((semester, year))
        return catalog.model_copy(deep=True) if catalog else None

    def save(self, catalog: CourseCatalog) -> None:
        self._catalogs[(catalog.semester, catalog.year)] = catalog.model_copy(deep=True)


@pytest.fixture
def student_repo():
    return InMemoryStudentRepository()


@pytest.fixture
def catalog_repo():
    return InMemoryCatalogRepository()


@pytest.fixture
def catalog():
    return CourseCatalog(
        semester=1,
        year=2024,
        courses=[
            Course(course_code="CS101", course_title="Programming", credits=4),
            Course(course_code="MA101", course_title="Calculus", credits=3),
            Course(course_code="PH101", course_title="Physics", credits=2),
        ],
    )


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    target = tmp_path / "uploads"
    monkeypatch.setattr(config, "UPLOAD_DIR", str(target))
    return target


@pytest.fixture
def client(student_repo, catalog_repo, upload_dir):
    app.dependency_overrides[get_student_repository] = lambda: student_repo
    app.dependency_overrides[get_catalog_repository] = lambda: catalog_repo
    yield TestClient(app)
    app.dependency_overrides.clear()
