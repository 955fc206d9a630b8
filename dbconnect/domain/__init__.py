"""Domain models and enums."""
from .models import Value, ValueKind

__all__ = ["Value", "ValueKind"]
