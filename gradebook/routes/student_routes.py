from fastapi import APIRouter, BackgroundTasks, Depends, File, HTTPException, Query, UploadFile
from typing import List

from gradebook.core.config import CONFIG
from gradebook.core.dependencies import get_catalog_repository, get_student_repository
from gradebook.models.marks_schemas import (
    ImportResult,
    MarksSubmission,
    MarksSubmitResponse,
    RanksResponse,
    StudentMarksResponse,
    TopPerformersResponse,
)
from gradebook.models.student_schemas import Student, StudentCreate, StudentCreatedResponse, StudentSummary
from gradebook.services import marks_service
from gradebook.services.marks_ingest import import_students_file, spooled_upload
from gradebook.services.ranking import refresh_ranks

router = APIRouter(tags=["Students"])


@router.post("/students", response_model=StudentCreatedResponse, status_code=201)
def create_student(payload: StudentCreate, student_repo=Depends(get_student_repository)):
    student = marks_service.create_student(student_repo, payload)
    return StudentCreatedResponse(message="Student added successfully", student=student)


@router.get("/students", response_model=List[StudentSummary])
def list_students(student_repo=Depends(get_student_repository)):
    return marks_service.list_students(student_repo)


@router.get("/students/{roll_number}", response_model=Student)
def get_student(roll_number: str, student_repo=Depends(get_student_repository)):
    return marks_service.get_student(student_repo, roll_number)


@router.post("/marks", response_model=MarksSubmitResponse)
def submit_marks(
    payload: MarksSubmission,
    background_tasks: BackgroundTasks,
    student_repo=Depends(get_student_repository),
    catalog_repo=Depends(get_catalog_repository),
):
    """
    Grade one semester for a student, recompute CGPA and re-rank.
    With RANK_IN_BACKGROUND the ranking passes run after the response is sent.
    """
    deferred = CONFIG.RANK_IN_BACKGROUND
    record = marks_service.submit_marks(
        student_repo,
        catalog_repo,
        payload.roll_number,
        payload.semester,
        payload.year,
        payload.course_marks,
        rank=not deferred,
    )
    if deferred:
        background_tasks.add_task(refresh_ranks, student_repo, payload.semester, payload.year)
    return MarksSubmitResponse(message="Student marks added successfully", semester_data=record)


@router.get("/marks", response_model=StudentMarksResponse)
def get_marks(
    roll_number: str = Query(...),
    semester: int = Query(...),
    year: int = Query(...),
    student_repo=Depends(get_student_repository),
):
    return marks_service.get_marks(student_repo, roll_number, semester, year)


@router.get("/ranks", response_model=RanksResponse)
def get_ranks(roll_number: str = Query(...), student_repo=Depends(get_student_repository)):
    return marks_service.get_ranks(student_repo, roll_number)


@router.get("/topperformers", response_model=TopPerformersResponse)
def get_top_performers(student_repo=Depends(get_student_repository)):
    return marks_service.top_performers(student_repo, CONFIG.TOP_PERFORMERS_LIMIT)


@router.post("/import-students", response_model=ImportResult)
def import_students(
    background_tasks: BackgroundTasks,
    file: UploadFile = File(...),
    student_repo=Depends(get_student_repository),
    catalog_repo=Depends(get_catalog_repository),
):
    """
    Bulk import one semester of marks from a CSV upload.
    Columns: rollNumber (or roll_number), name, email, semester, year, and one column per course code.
    """
    if not file.filename or not file.filename.lower().endswith(".csv"):
        raise HTTPException(status_code=400, detail="Only CSV files are allowed.")

    deferred = CONFIG.RANK_IN_BACKGROUND
    with spooled_upload(file.file) as path:
        result = import_students_file(
            student_repo,
            catalog_repo,
            path,
            strict=CONFIG.IMPORT_STRICT_MARKS,
            rank=not deferred,
        )
    if deferred:
        background_tasks.add_task(refresh_ranks, student_repo, result.semester, result.year)
    return result
