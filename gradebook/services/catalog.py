# gradebook/services/catalog.py
from typing import List

from gradebook.core.errors import CatalogNotFoundError
from gradebook.core.logger import get_logger
from gradebook.models.course_schemas import Course, CourseCatalog

logger = get_logger("catalog")


def add_courses(catalog_repo, semester: int, year: int, courses: List[Course]) -> CourseCatalog:
    """
    Create the catalog for (semester, year) on first use, otherwise append.
    A course code already in the catalog is replaced, keeping codes unique.
    Grade records computed earlier keep their own copy of title/credits.
    """
    catalog = catalog_repo.find_one(semester, year)
    if catalog is None:
        catalog = CourseCatalog(semester=semester, year=year, courses=[])

    for course in courses:
        for idx, existing in enumerate(catalog.courses):
            if existing.course_code == course.course_code:
                catalog.courses[idx] = course
                break
        else:
            catalog.courses.append(course)

    catalog_repo.save(catalog)
    logger.info(
        "Catalog %s/%s now has %d courses (%d submitted)",
        semester, year, len(catalog.courses), len(courses),
    )
    return catalog


def get_catalog(catalog_repo, semester: int, year: int) -> CourseCatalog:
    catalog = catalog_repo.find_one(semester, year)
    if catalog is None:
        raise CatalogNotFoundError(semester, year)
    return catalog
