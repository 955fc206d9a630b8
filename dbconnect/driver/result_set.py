"""Forward-only result set over rows fetched in full at execution time."""
from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Sequence

from ..domain.models import Value, ValueKind
from .marshalling import from_native


class CursorState(str, Enum):
    """Position of a :class:`MaterializedResultSet` cursor."""
    BEFORE_FIRST = "before_first"
    ON_ROW = "on_row"
    EXHAUSTED = "exhausted"


class MaterializedResultSet:
    """Result set owning a snapshot of every row returned by the backend.

    The cursor starts before the first row. ``next()`` moves it forward one
    row at a time; once it returns False the result set is exhausted and
    stays that way. Accessors return None whenever no row is positioned.
    """

    def __init__(
        self,
        rows: Sequence[Sequence[Any]],
        column_names: Sequence[str] = (),
    ) -> None:
        """Initialize result set.

        Args:
            rows: Native rows, copied into an owned tuple
            column_names: Names from the cursor description, if any
        """
        self._rows = tuple(tuple(row) for row in rows)
        self._column_names = tuple(column_names)
        # 0 means before the first row; row i is at position i
        self._position = 0
        self._exhausted = False

    @property
    def state(self) -> CursorState:
        if self._exhausted:
            return CursorState.EXHAUSTED
        if self._position == 0:
            return CursorState.BEFORE_FIRST
        return CursorState.ON_ROW

    @property
    def column_names(self) -> tuple[str, ...]:
        return self._column_names

    @property
    def column_count(self) -> int:
        if self._column_names:
            return len(self._column_names)
        return len(self._rows[0]) if self._rows else 0

    def __len__(self) -> int:
        return len(self._rows)

    def next(self) -> bool:
        if self._exhausted:
            return False
        if self._position < len(self._rows):
            self._position += 1
            return True
        self._exhausted = True
        return False

    def _current_row(self) -> Optional[tuple[Any, ...]]:
        if self.state != CursorState.ON_ROW:
            return None
        return self._rows[self._position - 1]

    def get_value(self, index: int, kind: ValueKind) -> Optional[Value]:
        row = self._current_row()
        if row is None:
            return None
        return from_native(row, index, kind)

    def _get_payload(self, index: int, kind: ValueKind) -> Any:
        value = self.get_value(index, kind)
        return None if value is None else value.value

    def get_string(self, index: int) -> Optional[str]:
        return self._get_payload(index, ValueKind.STRING)

    def get_i32(self, index: int) -> Optional[int]:
        return self._get_payload(index, ValueKind.INT32)

    def get_u32(self, index: int) -> Optional[int]:
        return self._get_payload(index, ValueKind.UINT32)
