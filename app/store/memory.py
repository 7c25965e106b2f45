from app.core.errors import RowNotFoundError
from app.store.base import Row, TabularStore
from app.store.schema import TableSchema


class InMemoryTabularStore(TabularStore):
    """Spreadsheet-like host: row 1 is the header, data rows follow."""

    def __init__(self, schema: TableSchema):
        super().__init__(schema)
        self._rows: list[Row] = []

    def ensure_initialized(self) -> None:
        if not self._rows:
            self._rows.append(list(self.schema.headers))

    def headers(self) -> list[str]:
        self.ensure_initialized()
        return list(self._rows[0])

    def scan_all(self) -> list[Row]:
        return [list(r) for r in self._rows[1:]]

    def append_row(self, row: Row) -> None:
        self._check_width(row)
        self.ensure_initialized()
        self._rows.append(list(row))

    def replace_row(self, position: int, row: Row) -> None:
        self._check_width(row)
        if position < 1 or position >= len(self._rows):
            raise RowNotFoundError(f"No data row at position {position}")
        self._rows[position] = list(row)

    def delete_all_data_rows(self) -> None:
        del self._rows[1:]
