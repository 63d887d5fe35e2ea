from fastapi import APIRouter, Depends, Query
from typing import List

from gradebook.core.dependencies import get_catalog_repository
from gradebook.models.course_schemas import Course, CoursesCreate, CoursesResponse
from gradebook.services.catalog import add_courses, get_catalog

router = APIRouter(tags=["Courses"])


@router.post("/courses", response_model=CoursesResponse, status_code=201)
def create_courses(payload: CoursesCreate, catalog_repo=Depends(get_catalog_repository)):
    """
    Create the course catalog for a semester/year, or append to it.
    """
    catalog = add_courses(catalog_repo, payload.semester, payload.year, payload.courses)
    return CoursesResponse(message="Courses added successfully", courses=catalog.courses)


@router.get("/courses", response_model=List[Course])
def list_courses(
    semester: int = Query(..., description="Semester number"),
    year: int = Query(..., description="Academic year"),
    catalog_repo=Depends(get_catalog_repository),
):
    return get_catalog(catalog_repo, semester, year).courses
