# gradebook/services/repositories.py
from typing import Dict, List, Optional

from pymongo import ASCENDING, DESCENDING, UpdateOne
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from gradebook.core.database import COURSES_COLLECTION, STUDENTS_COLLECTION
from gradebook.core.errors import DuplicateStudentError
from gradebook.models.course_schemas import CourseCatalog
from gradebook.models.marks_schemas import TopSGPAEntry
from gradebook.models.student_schemas import Student, StudentSummary

SUMMARY_PROJECTION = {"name": 1, "roll_number": 1, "email": 1, "cgpa": 1, "cgpa_rank": 1}

# Natural insertion order; ranking relies on it for stable tie breaks
INSERTION_ORDER = [("_id", ASCENDING)]


def _to_student(doc: dict) -> Student:
    doc = dict(doc)
    doc["id"] = str(doc.pop("_id"))
    return Student.model_validate(doc)


def _to_document(student: Student) -> dict:
    return student.model_dump(exclude={"id"})


class StudentRepository:
    """Student documents with their embedded semester records."""

    def __init__(self, db: Database):
        self.collection = db[STUDENTS_COLLECTION]

    def ensure_indexes(self) -> None:
        self.collection.create_index("roll_number", unique=True)
        self.collection.create_index([("semesters.semester", ASCENDING), ("semesters.year", ASCENDING)])

    def find_one(self, roll_number: str) -> Optional[Student]:
        doc = self.collection.find_one({"roll_number": roll_number})
        return _to_student(doc) if doc else None

    def find_all(self) -> List[Student]:
        return [_to_student(d) for d in self.collection.find({}).sort(INSERTION_ORDER)]

    def find_by_semester(self, semester: int, year: int) -> List[Student]:
        cursor = self.collection.find(
            {"semesters": {"$elemMatch": {"semester": semester, "year": year}}}
        ).sort(INSERTION_ORDER)
        return [_to_student(d) for d in cursor]

    def list_summaries(self) -> List[StudentSummary]:
        summaries = []
        for doc in self.collection.find({}, SUMMARY_PROJECTION).sort(INSERTION_ORDER):
            doc["id"] = str(doc.pop("_id"))
            summaries.append(StudentSummary.model_validate(doc))
        return summaries

    def insert(self, student: Student) -> Student:
        if self.collection.find_one({"roll_number": student.roll_number}, {"_id": 1}):
            raise DuplicateStudentError(student.roll_number)
        try:
            result = self.collection.insert_one(_to_document(student))
        except DuplicateKeyError:
            raise DuplicateStudentError(student.roll_number)
        student.id = str(result.inserted_id)
        return student

    def save(self, student: Student) -> None:
        self.collection.replace_one(
            {"roll_number": student.roll_number},
            _to_document(student),
            upsert=True,
        )

    def set_sgpa_ranks(self, semester: int, year: int, ranks: Dict[str, int]) -> None:
        """Write sgpa_rank onto the matching semester record only."""
        if not ranks:
            return
        self.collection.bulk_write([
            UpdateOne(
                {
                    "roll_number": roll,
                    "semesters": {"$elemMatch": {"semester": semester, "year": year}},
                },
                {"$set": {"semesters.$.sgpa_rank": rank}},
            )
            for roll, rank in ranks.items()
        ], ordered=False)

    def set_cgpa_ranks(self, ranks: Dict[str, int]) -> None:
        if not ranks:
            return
        self.collection.bulk_write([
            UpdateOne({"roll_number": roll}, {"$set": {"cgpa_rank": rank}})
            for roll, rank in ranks.items()
        ], ordered=False)

    def top_by_cgpa(self, limit: int) -> List[Student]:
        cursor = self.collection.find({}).sort([("cgpa", DESCENDING), ("_id", ASCENDING)]).limit(limit)
        return [_to_student(d) for d in cursor]

    def top_semesters(self, limit: int) -> List[TopSGPAEntry]:
        # Global across cohorts, one entry per semester record
        pipeline = [
            {"$unwind": "$semesters"},
            {"$sort": {"semesters.sgpa": -1, "_id": 1}},
            {"$limit": limit},
            {
                "$project": {
                    "_id": 0,
                    "name": 1,
                    "roll_number": 1,
                    "semester": "$semesters.semester",
                    "year": "$semesters.year",
                    "sgpa": "$semesters.sgpa",
                }
            },
        ]
        return [TopSGPAEntry.model_validate(d) for d in self.collection.aggregate(pipeline)]


class CourseCatalogRepository:
    """One catalog document per (semester, year)."""

    def __init__(self, db: Database):
        self.collection = db[COURSES_COLLECTION]

    def ensure_indexes(self) -> None:
        self.collection.create_index([("semester", ASCENDING), ("year", ASCENDING)], unique=True)

    def find_one(self, semester: int, year: int) -> Optional[CourseCatalog]:
        doc = self.collection.find_one({"semester": semester, "year": year}, {"_id": 0})
        return CourseCatalog.model_validate(doc) if doc else None

    def save(self, catalog: CourseCatalog) -> None:
        self.collection.replace_one(
            {"semester": catalog.semester, "year": catalog.year},
            catalog.model_dump(),
            upsert=True,
        )
