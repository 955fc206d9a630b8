"""Domain models for bound parameters and column values."""
from dataclasses import dataclass
from enum import Enum
from typing import Union

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
UINT32_MAX = 2**32 - 1


class ValueKind(str, Enum):
    """Variant tag of a :class:`Value`.

    The set is closed: every kind must have a marshalling rule in
    ``dbconnect.driver.marshalling`` in both directions.
    """
    STRING = "string"
    INT32 = "int32"
    UINT32 = "uint32"


@dataclass(frozen=True)
class Value:
    """Immutable parameter or column value carried across the driver boundary.

    Use the named constructors rather than building instances directly:

        >>> Value.int32(123)
        Value(kind=<ValueKind.INT32: 'int32'>, value=123)
    """
    kind: ValueKind
    value: Union[str, int]

    def __post_init__(self) -> None:
        if self.kind == ValueKind.STRING:
            if not isinstance(self.value, str):
                raise TypeError(f"String value must be str, got {type(self.value).__name__}")
            return

        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(
                f"{self.kind.value} value must be int, got {type(self.value).__name__}"
            )

        if self.kind == ValueKind.INT32:
            low, high = INT32_MIN, INT32_MAX
        elif self.kind == ValueKind.UINT32:
            low, high = 0, UINT32_MAX
        else:
            raise ValueError(f"Unsupported value kind: {self.kind!r}")

        if not low <= self.value <= high:
            raise ValueError(f"{self.value} is out of range for {self.kind.value}")

    @classmethod
    def string(cls, text: str) -> "Value":
        return cls(ValueKind.STRING, text)

    @classmethod
    def int32(cls, number: int) -> "Value":
        return cls(ValueKind.INT32, number)

    @classmethod
    def uint32(cls, number: int) -> "Value":
        return cls(ValueKind.UINT32, number)

    @classmethod
    def from_python(cls, obj: Union[str, int]) -> "Value":
        """Pick the narrowest variant able to hold a plain Python object.

        Args:
            obj: ``str`` or ``int``

        Returns:
            ``String`` for text, ``Int32`` for ints that fit, ``UInt32``
            for larger non-negative ints

        Raises:
            TypeError: If ``obj`` is neither ``str`` nor ``int``
            ValueError: If an int fits in neither integer variant
        """
        if isinstance(obj, str):
            return cls.string(obj)
        if isinstance(obj, bool) or not isinstance(obj, int):
            raise TypeError(f"Cannot convert {type(obj).__name__} to Value")
        if INT32_MIN <= obj <= INT32_MAX:
            return cls.int32(obj)
        return cls.uint32(obj)

    def __str__(self) -> str:
        return f"{self.kind.value}({self.value!r})"
