# gradebook/core/database.py
from functools import lru_cache

from pymongo import MongoClient
from pymongo.database import Database

from gradebook.core.config import CONFIG
from gradebook.core.logger import get_logger

logger = get_logger("database")

STUDENTS_COLLECTION = "students"
COURSES_COLLECTION = "courses"


@lru_cache(maxsize=1)
def get_client() -> MongoClient:
    client = MongoClient(CONFIG.MONGO_URI)
    logger.info("MongoDB client created for database %r", CONFIG.MONGO_DB)
    return client


def get_db() -> Database:
    return get_client()[CONFIG.MONGO_DB]
