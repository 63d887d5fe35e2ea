# gradebook/core/dependencies.py
from gradebook.core.database import get_db
from gradebook.services.repositories import CourseCatalogRepository, StudentRepository


def get_student_repository() -> StudentRepository:
    return StudentRepository(get_db())


def get_catalog_repository() -> CourseCatalogRepository:
    return CourseCatalogRepository(get_db())
