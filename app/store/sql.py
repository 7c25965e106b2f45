import logging
from contextlib import contextmanager
from functools import lru_cache

from sqlalchemy import Column, Integer, MetaData, Table, Text, delete, inspect, insert, select, update
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.core.errors import RowNotFoundError, SchemaMismatchError, StorageUnavailableError
from app.store.base import Row, TabularStore
from app.store.schema import ROW_ID_COLUMN, TableSchema

logger = logging.getLogger(__name__)


@lru_cache
def build_table(schema: TableSchema) -> Table:
    """One Text column per header, plus an autoincrement row_id that fixes storage order."""
    columns = [Column(h, Text, nullable=False, default="") for h in schema.headers]
    return Table(
        schema.table_name,
        MetaData(),
        Column(ROW_ID_COLUMN, Integer, primary_key=True, autoincrement=True),
        *columns,
    )


@contextmanager
def _storage_errors():
    try:
        yield
    except OperationalError as exc:
        raise StorageUnavailableError(f"Storage unavailable: {exc.orig}") from exc


class SqlTabularStore(TabularStore):
    def __init__(self, db: Session, schema: TableSchema):
        super().__init__(schema)
        self.db = db
        self.table = build_table(schema)
        self._initialized = False

    def ensure_initialized(self) -> None:
        if self._initialized:
            return

        with _storage_errors():
            conn = self.db.connection()
            inspector = inspect(conn)

            if not inspector.has_table(self.table.name):
                self.table.create(bind=conn)
                self._commit()
                logger.info("Created table %r with %d columns", self.table.name, len(self.schema.headers))
            else:
                existing = [c["name"] for c in inspector.get_columns(self.table.name) if c["name"] != ROW_ID_COLUMN]
                if existing != list(self.schema.headers):
                    raise SchemaMismatchError(
                        f"Table {self.table.name!r} has columns {existing}, expected {list(self.schema.headers)}"
                    )

        self._initialized = True

    def scan_all(self) -> list[Row]:
        data_columns = [self.table.c[h] for h in self.schema.headers]
        stmt = select(*data_columns).order_by(self.table.c[ROW_ID_COLUMN])

        with _storage_errors():
            rows = self.db.execute(stmt).all()
        return [list(r) for r in rows]

    def append_row(self, row: Row) -> None:
        self._check_width(row)
        with _storage_errors():
            self.db.execute(insert(self.table).values(self._values(row)))
            self._commit()

    def replace_row(self, position: int, row: Row) -> None:
        self._check_width(row)
        with _storage_errors():
            row_id = self._row_id_at(position)
            if row_id is None:
                raise RowNotFoundError(f"No data row at position {position}")

            self.db.execute(
                update(self.table)
                .where(self.table.c[ROW_ID_COLUMN] == row_id)
                .values(self._values(row))
            )
            self._commit()

    def delete_all_data_rows(self) -> None:
        with _storage_errors():
            self.db.execute(delete(self.table))
            self._commit()

    def _row_id_at(self, position: int) -> int | None:
        if position < 1:
            return None
        stmt = (
            select(self.table.c[ROW_ID_COLUMN])
            .order_by(self.table.c[ROW_ID_COLUMN])
            .offset(position - 1)
            .limit(1)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def _values(self, row: Row) -> dict[str, str]:
        return dict(zip(self.schema.headers, row))

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
