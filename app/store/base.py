from abc import ABC, abstractmethod
from typing import Callable

from app.store.schema import TableSchema

Row = list[str]
RowPredicate = Callable[[Row], bool]


class TabularStore(ABC):
    """
    Ordered rows under a fixed header row.

    Data rows are addressed by 1-based position (the header row is not counted).
    Key uniqueness is the caller's job; the store appends whatever it is given.
    """

    def __init__(self, schema: TableSchema):
        self.schema = schema

    @abstractmethod
    def ensure_initialized(self) -> None:
        """Create the header row if the table is empty. Safe to call repeatedly."""

    def headers(self) -> list[str]:
        return list(self.schema.headers)

    @abstractmethod
    def scan_all(self) -> list[Row]:
        """Every data row in storage order."""

    @abstractmethod
    def append_row(self, row: Row) -> None: ...

    @abstractmethod
    def replace_row(self, position: int, row: Row) -> None:
        """Overwrite the data row at `position`; raises RowNotFoundError when out of range."""

    def find_position(self, predicate: RowPredicate) -> int | None:
        # linear scan; tables are class-roster sized
        for position, row in enumerate(self.scan_all(), start=1):
            if predicate(row):
                return position
        return None

    @abstractmethod
    def delete_all_data_rows(self) -> None: ...

    def _check_width(self, row: Row) -> None:
        expected = len(self.schema.headers)
        if len(row) != expected:
            raise ValueError(f"row has {len(row)} cells, expected {expected}")
