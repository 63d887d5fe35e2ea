import os
import sys

# Ensure project root is in path
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from gradebook.core.config import CONFIG
from gradebook.core.dependencies import get_catalog_repository, get_student_repository
from gradebook.services.marks_ingest import import_students_file


def main():
    csv_path = sys.argv[1] if len(sys.argv) > 1 else "test_marks.csv"
    if not os.path.exists(csv_path):
        print(f"Error: {csv_path} not found.")
        return 1

    student_repo = get_student_repository()
    catalog_repo = get_catalog_repository()
    student_repo.ensure_indexes()
    catalog_repo.ensure_indexes()

    print(f"Importing {csv_path} into MongoDB ({CONFIG.MONGO_DB})...")
    result = import_students_file(
        student_repo,
        catalog_repo,
        csv_path,
        strict=CONFIG.IMPORT_STRICT_MARKS,
    )

    print("Success!")
    print(f"Result: {result.model_dump()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
