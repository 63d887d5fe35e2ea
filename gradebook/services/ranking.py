# gradebook/services/ranking.py
"""
Batch SGPA / CGPA ranking.

Both passes are full recomputations: load the population, stable-sort it
descending, hand out ranks 1..N and write only the rank fields back. Equal
scores keep repository (insertion) order, so re-running a pass over
unchanged data assigns the same ranks.

Passes are serialized inside one process by ``RANKING_LOCK``. Separate
processes (several workers) can still interleave; whichever pass finishes
last determines the stored ranks.
"""
from __future__ import annotations

import time
from typing import Dict, Iterable

from gradebook.core.config import RANKING_LOCK
from gradebook.core.logger import get_logger
from gradebook.models.student_schemas import Student

logger = get_logger("ranking")


def rank_sgpa_cohort(students: Iterable[Student], semester: int, year: int) -> Dict[str, int]:
    """Rank students holding a (semester, year) record by that record's SGPA."""
    cohort = []
    for student in students:
        record = student.find_semester(semester, year)
        if record is not None:
            cohort.append((student.roll_number, record.sgpa))

    ordered = sorted(cohort, key=lambda item: item[1], reverse=True)
    return {roll: rank for rank, (roll, _) in enumerate(ordered, start=1)}


def rank_cgpa(students: Iterable[Student]) -> Dict[str, int]:
    ordered = sorted(students, key=lambda s: s.cgpa, reverse=True)
    return {s.roll_number: rank for rank, s in enumerate(ordered, start=1)}


def update_sgpa_ranks(student_repo, semester: int, year: int) -> Dict[str, int]:
    started = time.perf_counter()
    with RANKING_LOCK:
        ranks = rank_sgpa_cohort(student_repo.find_by_semester(semester, year), semester, year)
        student_repo.set_sgpa_ranks(semester, year, ranks)
    logger.info(
        "SGPA ranks updated for semester %s/%s: %d students in %.3fs",
        semester, year, len(ranks), time.perf_counter() - started,
    )
    return ranks


def update_cgpa_ranks(student_repo) -> Dict[str, int]:
    started = time.perf_counter()
    with RANKING_LOCK:
        ranks = rank_cgpa(student_repo.find_all())
        student_repo.set_cgpa_ranks(ranks)
    logger.info("CGPA ranks updated: %d students in %.3fs", len(ranks), time.perf_counter() - started)
    return ranks


def refresh_ranks(student_repo, semester: int, year: int) -> None:
    """Cohort SGPA pass, then the global CGPA pass."""
    update_sgpa_ranks(student_repo, semester, year)
    update_cgpa_ranks(student_repo)
