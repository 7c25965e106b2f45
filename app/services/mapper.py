import re
from datetime import datetime, timezone

from app.schemas.grade_entry import GradeEntry
from app.store.base import Row
from app.store.schema import LAST_MODIFIED, TIMESTAMP, TableSchema

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_SEPARATORS = re.compile(r"[\s\-]+")


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def header_to_key(header: str) -> str:
    """'TeacherEmail' / 'Teacher Email' -> 'teacher_email'."""
    return _SEPARATORS.sub("_", _CAMEL_BOUNDARY.sub("_", header.strip())).lower()


def format_cell(value) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class RecordMapper:
    """Translates between flat rows and GradeEntry records using the table schema."""

    def __init__(self, schema: TableSchema):
        self.schema = schema

    def record_to_row(self, entry: GradeEntry, now: str | None = None) -> Row:
        """
        Build a row in header order.

        LastModified is always stamped with `now`; Timestamp only falls back to it
        when the entry carries none.
        """
        now = now or now_iso()
        row: Row = []

        for header in self.schema.headers:
            if self.schema.is_skill(header):
                row.append(format_cell(entry.skills.get(header, "")))
            elif header == TIMESTAMP:
                row.append(entry.timestamp or now)
            elif header == LAST_MODIFIED:
                row.append(now)
            else:
                row.append(format_cell(getattr(entry, header_to_key(header))))

        return row

    def row_to_record(self, row: Row) -> GradeEntry:
        data: dict = {"skills": {}}
        for header, value in zip(self.schema.headers, row):
            if self.schema.is_skill(header):
                data["skills"][header] = value
            else:
                data[header_to_key(header)] = value
        return GradeEntry.model_validate(data)

    def value(self, row: Row, header: str) -> str:
        return row[self.schema.index_of(header)]
