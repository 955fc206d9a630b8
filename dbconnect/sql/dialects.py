"""SQL dialect tags and their native positional placeholder styles."""
from enum import Enum


class Dialect(str, Enum):
    """Supported SQL dialects.

    Each member's value is the name of the matching ``sqlglot`` dialect, used
    to pick the lexical rules (quoting, dollar strings, comments).
    """
    POSTGRES = "postgres"
    SQLITE = "sqlite"
    ORACLE = "oracle"

    @property
    def placeholder_sigil(self) -> str:
        return _PLACEHOLDER_SIGILS[self]

    def native_placeholder(self, ordinal: int) -> str:
        """Render the native positional placeholder for a 1-based ordinal.

        Args:
            ordinal: Parameter position, starting at 1

        Returns:
            Placeholder text, e.g. ``$3`` for PostgreSQL

        Raises:
            ValueError: If ordinal is less than 1
        """
        if ordinal < 1:
            raise ValueError(f"Placeholder ordinal must be >= 1, got {ordinal}")
        return f"{self.placeholder_sigil}{ordinal}"

    @classmethod
    def from_name(cls, name: str) -> "Dialect":
        """Resolve a dialect tag, accepting ``postgresql`` as an alias."""
        normalized = name.strip().lower()
        if normalized == "postgresql":
            normalized = "postgres"
        try:
            return cls(normalized)
        except ValueError:
            supported = ", ".join(member.value for member in cls)
            raise ValueError(
                f"Unsupported dialect {name!r} (supported: {supported})"
            ) from None


_PLACEHOLDER_SIGILS = {
    Dialect.POSTGRES: "$",
    Dialect.SQLITE: "?",
    Dialect.ORACLE: ":",
}
