from gradebook.models.marks_schemas import CourseMark
from gradebook.models.student_schemas import SemesterRecord, Student
from gradebook.services import ranking
from gradebook.services.marks_service import submit_marks


def _student(roll, cgpa=0.0, semesters=()):
    return Student(
        roll_number=roll,
        name=f"Student {roll}",
        email=f"{roll.lower()}@example.org",
        cgpa=cgpa,
        semesters=[SemesterRecord(semester=s, year=y, grades=[], sgpa=g) for s, y, g in semesters],
    )


def test_sgpa_ranks_are_a_permutation_led_by_the_maximum():
    students = [
        _student("R1", semesters=[(1, 2024, 6.5)]),
        _student("R2", semesters=[(1, 2024, 9.1)]),
        _student("R3", semesters=[(1, 2024, 7.0)]),
    ]
    ranks = ranking.rank_sgpa_cohort(students, 1, 2024)

    assert sorted(ranks.values()) == [1, 2, 3]
    assert ranks == {"R2": 1, "R3": 2, "R1": 3}


def test_sgpa_cohort_only_includes_exact_semester_and_year():
    students = [
        _student("R1", semesters=[(1, 2024, 8.0)]),
        _student("R2", semesters=[(1, 2023, 9.0)]),
        _student("R3", semesters=[(2, 2024, 9.5)]),
    ]
    assert ranking.rank_sgpa_cohort(students, 1, 2024) == {"R1": 1}


def test_ties_keep_input_order():
    students = [
        _student("R1", cgpa=8.0, semesters=[(1, 2024, 8.0)]),
        _student("R2", cgpa=9.0, semesters=[(1, 2024, 8.0)]),
        _student("R3", cgpa=8.0, semesters=[(1, 2024, 8.0)]),
    ]
    assert ranking.rank_sgpa_cohort(students, 1, 2024) == {"R1": 1, "R2": 2, "R3": 3}
    assert ranking.rank_cgpa(students) == {"R2": 1, "R1": 2, "R3": 3}


def test_cgpa_pass_ranks_every_student(student_repo):
    for s in [_student("R1", cgpa=6.0), _student("R2", cgpa=0.0), _student("R3", cgpa=8.5)]:
        student_repo.save(s)

    ranks = ranking.update_cgpa_ranks(student_repo)

    assert ranks == {"R3": 1, "R1": 2, "R2": 3}
    assert [s.cgpa_rank for s in student_repo.find_all()] == [2, 3, 1]


def test_passes_are_idempotent(student_repo):
    student_repo.save(_student("R1", cgpa=7.0, semesters=[(1, 2024, 7.0)]))
    student_repo.save(_student("R2", cgpa=7.0, semesters=[(1, 2024, 7.0)]))

    first = (ranking.update_sgpa_ranks(student_repo, 1, 2024), ranking.update_cgpa_ranks(student_repo))
    second = (ranking.update_sgpa_ranks(student_repo, 1, 2024), ranking.update_cgpa_ranks(student_repo))

    assert first == second


def test_sgpa_pass_touches_only_the_cohort_record(student_repo):
    student_repo.save(_student("R1", semesters=[(1, 2024, 7.0), (2, 2024, 9.0)]))

    ranking.update_sgpa_ranks(student_repo, 1, 2024)

    stored = student_repo.find_one("R1")
    assert stored.find_semester(1, 2024).sgpa_rank == 1
    assert stored.find_semester(2, 2024).sgpa_rank is None


def test_end_to_end_cohort_ranking(student_repo, catalog_repo, catalog):
    catalog_repo.save(catalog.model_copy(update={"courses": catalog.courses[:1]}))
    student_repo.save(_student("R1"))
    student_repo.save(_student("R2"))

    r1 = submit_marks(student_repo, catalog_repo, "R1", 1, 2024, [CourseMark(course_code="CS101", marks=95)])
    r2 = submit_marks(student_repo, catalog_repo, "R2", 1, 2024, [CourseMark(course_code="CS101", marks=45)])

    assert r1.grades[0].grade == "O"
    assert r1.grades[0].grade_points == 10
    assert r1.grades[0].credit_points == 40
    assert r1.sgpa == 10.0
    assert r2.sgpa == 4.0

    ranking.update_sgpa_ranks(student_repo, 1, 2024)
    assert student_repo.find_one("R1").find_semester(1, 2024).sgpa_rank == 1
    assert student_repo.find_one("R2").find_semester(1, 2024).sgpa_rank == 2
    assert student_repo.find_one("R1").cgpa_rank == 1
    assert student_repo.find_one("R2").cgpa_rank == 2
