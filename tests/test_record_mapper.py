import pytest

from app.schemas.grade_entry import GradeEntry
from app.services.mapper import header_to_key
from app.store.schema import TableSchema

NOW = "2026-10-16T12:00:00.000Z"


def sample_entry(**overrides) -> GradeEntry:
    data = dict(
        timestamp="2026-09-01T08:00:00.000Z",
        teacher_email="teacher1@school.edu",
        teacher_name="Ms. Johnson",
        course="Math 7A",
        student_name="Test Student",
        percentage_mark=85.5,
        classes_missed=2,
        times_late=0,
        skills={"Responsibility": "Excellent", "Organization": "Good"},
        comment='Hello, "world"\n',
    )
    data.update(overrides)
    return GradeEntry(**data)


def test_headers_follow_fixed_layout(schema):
    assert schema.headers[:8] == (
        "Timestamp",
        "TeacherEmail",
        "TeacherName",
        "Course",
        "StudentName",
        "PercentageMark",
        "ClassesMissed",
        "TimesLate",
    )
    assert schema.headers[8:14] == schema.skills
    assert schema.headers[-2:] == ("Comment", "LastModified")


@pytest.mark.parametrize(
    "header, key",
    [
        ("TeacherEmail", "teacher_email"),
        ("Teacher Email", "teacher_email"),
        ("PercentageMark", "percentage_mark"),
        ("Course", "course"),
        ("LastModified", "last_modified"),
    ],
)
def test_header_to_key(header, key):
    assert header_to_key(header) == key


def test_record_to_row_aligns_with_headers(mapper, schema):
    row = mapper.record_to_row(sample_entry(), now=NOW)

    assert len(row) == len(schema.headers)
    cells = dict(zip(schema.headers, row))
    assert cells["StudentName"] == "Test Student"
    assert cells["PercentageMark"] == "85.5"
    assert cells["ClassesMissed"] == "2"
    assert cells["Responsibility"] == "Excellent"
    # skills not supplied become empty cells
    assert cells["Initiative"] == ""


def test_zero_is_kept_and_missing_numbers_are_empty(mapper, schema):
    row = mapper.record_to_row(sample_entry(times_late=0, classes_missed=None, percentage_mark=None), now=NOW)
    cells = dict(zip(schema.headers, row))

    assert cells["TimesLate"] == "0"
    assert cells["ClassesMissed"] == ""
    assert cells["PercentageMark"] == ""


def test_integral_marks_have_no_decimal_point(mapper, schema):
    row = mapper.record_to_row(sample_entry(percentage_mark=85), now=NOW)
    assert mapper.value(row, "PercentageMark") == "85"


def test_last_modified_is_always_stamped(mapper):
    entry = sample_entry(last_modified="2000-01-01T00:00:00.000Z")
    row = mapper.record_to_row(entry, now=NOW)

    assert mapper.value(row, "LastModified") == NOW
    assert mapper.value(row, "Timestamp") == "2026-09-01T08:00:00.000Z"


def test_timestamp_defaults_to_now_when_missing(mapper):
    row = mapper.record_to_row(sample_entry(timestamp=None), now=NOW)
    assert mapper.value(row, "Timestamp") == NOW


def test_round_trip_keeps_every_field_but_times(mapper, schema):
    entry = sample_entry(skills={s: "Good" for s in schema.skills})

    back = mapper.row_to_record(mapper.record_to_row(entry, now=NOW))

    skip = {"timestamp", "last_modified"}
    assert back.model_dump(exclude=skip) == entry.model_dump(exclude=skip)
    assert back.last_modified == NOW


def test_row_to_record_groups_skills(mapper, schema):
    row = mapper.record_to_row(sample_entry(), now=NOW)
    record = mapper.row_to_record(row)

    assert set(record.skills) == set(schema.skills)
    assert record.skills["Organization"] == "Good"
    assert record.times_late == 0
    assert record.classes_missed == 2


def test_custom_skill_set_changes_layout():
    schema = TableSchema(table_name="Term2", skills=("Effort", "Focus"))

    assert schema.headers[8:10] == ("Effort", "Focus")
    assert len(schema.headers) == 12


@pytest.mark.parametrize(
    "skills",
    [(), ("Effort", "Effort"), ("Comment",), ("row_id",)],
)
def test_invalid_skill_sets_are_rejected(skills):
    with pytest.raises(ValueError):
        TableSchema(table_name="Grades", skills=skills)
