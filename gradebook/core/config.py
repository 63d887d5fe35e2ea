# gradebook/core/config.py

import threading
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    # MongoDB connection
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB: str = "gradebook"

    # Where uploaded import files are spooled before parsing
    UPLOAD_DIR: str = "uploads"

    # Defer SGPA/CGPA ranking passes to a background task after the response
    RANK_IN_BACKGROUND: bool = False

    # Reject import rows whose course columns are missing or non-numeric
    IMPORT_STRICT_MARKS: bool = True

    TOP_PERFORMERS_LIMIT: int = 10

    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        env_prefix = "GRADEBOOK_"
        case_sensitive = False


CONFIG = Settings()

# Upload dir as Path
UPLOAD_DIR = str(Path(CONFIG.UPLOAD_DIR))

# Ranking passes read then write every affected student; serialize them
# within this process.
RANKING_LOCK = threading.Lock()


def ensure_upload_dir() -> str:
    Path(UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
    return UPLOAD_DIR
