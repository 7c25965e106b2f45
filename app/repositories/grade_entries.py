import csv
import io
import logging
import math
from collections import Counter

from app.schemas.grade_entry import GradeEntry, UpsertResult
from app.schemas.summary import SummaryReport
from app.services.mapper import RecordMapper, format_cell
from app.store.base import Row, TabularStore
from app.store.schema import COURSE, STUDENT_NAME

logger = logging.getLogger(__name__)


class GradeEntryRepository:
    """
    Grade entries over a tabular store, one row per (student, course).

    upsert() is find-then-write and is not atomic: two concurrent first
    submissions for the same key can both append. Requests are expected to
    run one at a time against a given table.
    """

    def __init__(self, store: TabularStore, mapper: RecordMapper):
        self.store = store
        self.mapper = mapper

    def upsert(self, entry: GradeEntry) -> UpsertResult:
        self.store.ensure_initialized()

        row = self.mapper.record_to_row(entry)
        position = self.store.find_position(self._key_matches(entry.student_name, entry.course))

        if position is not None:
            self.store.replace_row(position, row)
            action = "updated"
        else:
            self.store.append_row(row)
            action = "created"

        logger.info("%s entry student=%r course=%r", action, entry.student_name, entry.course)
        return UpsertResult(action=action, student=entry.student_name, course=entry.course)

    def list_all(self) -> list[GradeEntry]:
        self.store.ensure_initialized()
        return [self.mapper.row_to_record(r) for r in self.store.scan_all()]

    def filter_by_teacher(self, teacher_email: str) -> list[GradeEntry]:
        return [e for e in self.list_all() if e.teacher_email == teacher_email]

    def filter_by_student(self, student_name: str) -> list[GradeEntry]:
        return [e for e in self.list_all() if e.student_name == student_name]

    def clear_all(self) -> None:
        self.store.ensure_initialized()
        self.store.delete_all_data_rows()
        logger.warning("Cleared all grade entries from %r", self.store.schema.table_name)

    def export_delimited(self) -> str:
        self.store.ensure_initialized()

        out = io.StringIO()
        writer = csv.writer(out, lineterminator="\n")
        writer.writerow(self.store.headers())
        writer.writerows(self.store.scan_all())
        return out.getvalue()

    def summarize(self) -> SummaryReport:
        entries = self.list_all()

        by_teacher = Counter(e.teacher_name for e in entries)
        by_grade = Counter(format_cell(e.percentage_mark) for e in entries)
        total_comment_length = sum(len(e.comment) for e in entries)

        average = 0
        if entries:
            # half-up, not banker's rounding
            average = math.floor(total_comment_length / len(entries) + 0.5)

        return SummaryReport(
            total_entries=len(entries),
            by_teacher=dict(by_teacher),
            by_grade=dict(by_grade),
            average_comment_length=average,
        )

    def _key_matches(self, student_name: str, course: str):
        def predicate(row: Row) -> bool:
            return (
                self.mapper.value(row, STUDENT_NAME) == student_name
                and self.mapper.value(row, COURSE) == course
            )

        return predicate
