from __future__ import annotations

from datetime import datetime
from typing import Optional, TypeVar

from ..core.exceptions import InvalidInput

T = TypeVar("T")


def require_present(value: Optional[T], field_name: str) -> T:
    if value is None:
        raise InvalidInput(f"{field_name} is required")
    return value


def require_non_negative(value: int, field_name: str) -> int:
    # bool is an int subclass; floats would be silently truncated.
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(f"{field_name} must be a whole number (got {value!r})")
    if value < 0:
        raise InvalidInput(f"{field_name} must be >= 0 (got {value!r})")
    return value


def require_datetime(value: Optional[datetime], field_name: str) -> Optional[datetime]:
    """Accept None (callers decide whether the field is required) or a datetime."""
    if value is not None and not isinstance(value, datetime):
        raise InvalidInput(f"{field_name} must be a datetime (got {type(value).__name__})")
    return value


def require_same_awareness(*named: tuple[str, Optional[datetime]]) -> None:
    """All given datetimes must be either naive or timezone-aware, not mixed."""
    present = [(name, value) for name, value in named if value is not None]
    aware = {name for name, value in present if value.utcoffset() is not None}
    if aware and len(aware) != len(present):
        naive = [name for name, _ in present if name not in aware]
        raise InvalidInput(
            f"cannot mix timezone-aware ({', '.join(sorted(aware))}) and naive ({', '.join(naive)}) datetimes"
        )
