from pydantic import BaseModel, ConfigDict, field_validator, model_validator

TIMESTAMP = "Timestamp"
TEACHER_EMAIL = "TeacherEmail"
TEACHER_NAME = "TeacherName"
COURSE = "Course"
STUDENT_NAME = "StudentName"
PERCENTAGE_MARK = "PercentageMark"
CLASSES_MISSED = "ClassesMissed"
TIMES_LATE = "TimesLate"
COMMENT = "Comment"
LAST_MODIFIED = "LastModified"

LEADING_COLUMNS = (
    TIMESTAMP,
    TEACHER_EMAIL,
    TEACHER_NAME,
    COURSE,
    STUDENT_NAME,
    PERCENTAGE_MARK,
    CLASSES_MISSED,
    TIMES_LATE,
)
TRAILING_COLUMNS = (COMMENT, LAST_MODIFIED)

# surrogate key used by the SQL host to keep storage order
ROW_ID_COLUMN = "row_id"


class TableSchema(BaseModel):
    """
    Identity and column layout of one grades table.

    Headers are fixed at creation:
    the leading columns, one column per skill (in skill order), then the trailing columns.
    """

    model_config = ConfigDict(frozen=True)

    table_name: str = "Grades"
    skills: tuple[str, ...]

    @field_validator("table_name")
    @classmethod
    def _table_name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("table_name must not be empty")
        return v

    @model_validator(mode="after")
    def _check_skills(self) -> "TableSchema":
        if not self.skills:
            raise ValueError("at least one learning skill is required")
        if len(set(self.skills)) != len(self.skills):
            raise ValueError("learning skills must be unique")

        reserved = set(LEADING_COLUMNS) | set(TRAILING_COLUMNS) | {ROW_ID_COLUMN}
        clashes = [s for s in self.skills if s in reserved]
        if clashes:
            raise ValueError(f"skill names clash with fixed columns: {', '.join(clashes)}")
        return self

    @property
    def headers(self) -> tuple[str, ...]:
        return LEADING_COLUMNS + self.skills + TRAILING_COLUMNS

    def index_of(self, header: str) -> int:
        return self.headers.index(header)

    def is_skill(self, header: str) -> bool:
        return header in self.skills
