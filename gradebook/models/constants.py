# gradebook/models/constants.py

# Grade bands, evaluated top-down: (minimum marks, letter grade, grade points)
GRADE_BANDS = [
    (90, "O", 10),
    (80, "A+", 9),
    (70, "A", 8),
    (60, "B+", 7),
    (55, "B", 6),
    (50, "C", 5),
    (40, "P", 4),
]

# Below every band
FAIL_GRADE = ("F", 0)
