import math
from typing import Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


def _grade_as_mark(grade) -> Optional[float]:
    if grade is None:
        return None
    try:
        mark = float(grade)
    except ValueError:
        return None
    return mark if math.isfinite(mark) else None


class GradeEntry(BaseModel):
    """One stored report-card entry, keyed by (student_name, course)."""

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    timestamp: Optional[str] = None
    teacher_email: str = ""
    teacher_name: str = ""
    course: str = ""
    student_name: str = ""

    # None means "not recorded"; 0 is a recorded value
    percentage_mark: Optional[float] = None
    classes_missed: Optional[int] = None
    times_late: Optional[int] = None

    skills: dict[str, str] = Field(default_factory=dict)
    comment: str = ""
    last_modified: Optional[str] = None

    blank_to_none = field_validator(
        "percentage_mark", "classes_missed", "times_late", "timestamp", "last_modified", mode="before"
    )(_blank_to_none)


class GradeEntrySubmission(BaseModel):
    """Inbound write payload, in the front-end's camelCase keys."""

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    teacher_email: str = Field(validation_alias=AliasChoices("teacherEmail", "teacher"))
    teacher_name: str = Field("", validation_alias="teacherName")
    course: str = ""
    student: str

    percentage_mark: Optional[float] = Field(None, validation_alias="percentageMark")
    # stands in for percentageMark only when that is absent and grade is numeric;
    # letter grades are accepted but not stored
    grade: Optional[Union[float, str]] = None
    classes_missed: Optional[int] = Field(None, validation_alias="classesMissed")
    times_late: Optional[int] = Field(None, validation_alias="timesLate")

    skills: dict[str, str] = Field(default_factory=dict)
    comment: str = ""
    timestamp: Optional[str] = None

    blank_to_none = field_validator(
        "percentage_mark", "grade", "classes_missed", "times_late", "timestamp", mode="before"
    )(_blank_to_none)

    @field_validator("course", mode="before")
    @classmethod
    def _course_none_to_empty(cls, v):
        return "" if v is None else v

    def to_entry(self) -> GradeEntry:
        mark = self.percentage_mark if self.percentage_mark is not None else _grade_as_mark(self.grade)
        return GradeEntry(
            timestamp=self.timestamp,
            teacher_email=self.teacher_email,
            teacher_name=self.teacher_name,
            course=self.course,
            student_name=self.student,
            percentage_mark=mark,
            classes_missed=self.classes_missed,
            times_late=self.times_late,
            skills=dict(self.skills),
            comment=self.comment,
        )


class UpsertResult(BaseModel):
    action: Literal["created", "updated"]
    student: str
    course: str


class SubmitResponse(UpsertResult):
    success: bool = True


class EntriesResponse(BaseModel):
    success: bool = True
    entries: list[GradeEntry]
