"""Conversion between :class:`Value` and PostgreSQL-native psycopg types.

Both directions must cover every :class:`ValueKind`.
"""
from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

from psycopg.types.numeric import Int4, Oid

from ..domain.models import INT32_MAX, INT32_MIN, UINT32_MAX, Value, ValueKind
from ..errors import ColumnIndexError

_TO_NATIVE: dict[ValueKind, Callable[[Any], Any]] = {
    ValueKind.STRING: str,
    ValueKind.INT32: Int4,
    # oid is the only unsigned 32-bit type PostgreSQL has
    ValueKind.UINT32: Oid,
}


def _is_int(obj: Any) -> bool:
    return isinstance(obj, int) and not isinstance(obj, bool)


def _string_from_native(obj: Any) -> Optional[Value]:
    return Value.string(obj) if isinstance(obj, str) else None


def _int32_from_native(obj: Any) -> Optional[Value]:
    if _is_int(obj) and INT32_MIN <= obj <= INT32_MAX:
        return Value.int32(int(obj))
    return None


def _uint32_from_native(obj: Any) -> Optional[Value]:
    if _is_int(obj) and 0 <= obj <= UINT32_MAX:
        return Value.uint32(int(obj))
    return None


_FROM_NATIVE: dict[ValueKind, Callable[[Any], Optional[Value]]] = {
    ValueKind.STRING: _string_from_native,
    ValueKind.INT32: _int32_from_native,
    ValueKind.UINT32: _uint32_from_native,
}


def to_native(values: Sequence[Value]) -> list[Any]:
    """Convert values into psycopg parameters, preserving order.

    ``Int32`` is bound as ``int4`` and ``UInt32`` as ``oid`` so the server
    sees the exact width rather than whatever psycopg would infer for a
    plain ``int``.

    Args:
        values: Parameters in placeholder order

    Returns:
        Native parameters aligned 1:1 with ``values``
    """
    return [_TO_NATIVE[value.kind](value.value) for value in values]


def from_native(row: Sequence[Any], column_index: int, kind: ValueKind) -> Optional[Value]:
    """Extract column ``column_index`` (1-based) of a native row as ``kind``.

    Args:
        row: Native row as returned by the backend cursor
        column_index: 1-based column position
        kind: Requested variant

    Returns:
        The converted value, or None when the column is NULL or does not fit
        the requested variant

    Raises:
        ColumnIndexError: If ``column_index`` is outside ``1..len(row)``
    """
    if column_index < 1 or column_index > len(row):
        raise ColumnIndexError(
            f"Column index {column_index} out of range (row has {len(row)} columns)"
        )
    native = row[column_index - 1]
    if native is None:
        return None
    return _FROM_NATIVE[kind](native)
