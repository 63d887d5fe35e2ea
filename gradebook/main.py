# gradebook/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gradebook.core.config import CONFIG
from gradebook.core.dependencies import get_catalog_repository, get_student_repository
from gradebook.core.errors import GradebookError
from gradebook.core.logger import get_logger
from gradebook.routes.course_routes import router as course_router
from gradebook.routes.student_routes import router as student_router

logger = get_logger("api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    get_student_repository().ensure_indexes()
    get_catalog_repository().ensure_indexes()
    logger.info("Indexes ensured on database %r", CONFIG.MONGO_DB)
    yield


app = FastAPI(
    title="Gradebook – grades, SGPA/CGPA and ranks",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CONFIG.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(GradebookError)
async def gradebook_error_handler(request: Request, exc: GradebookError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Malformed query/body values (e.g. non-integer semester) are client errors
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.get("/")
def root_index():
    return {"message": "Gradebook service is running", "docs": "/docs"}


app.include_router(student_router)
app.include_router(course_router)
