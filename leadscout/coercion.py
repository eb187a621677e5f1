"""Loose value coercion shared by the parser, the scorer and the CSV loader."""
import math
from typing import Any


def to_number(value: Any, default: float = 0.0) -> float:
    """Coerce loosely typed numbers ("4.5", "1,204", "120+") to float."""
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip().replace(",", "").rstrip("+"))
        except ValueError:
            return default
    else:
        return default
    return number if math.isfinite(number) else default


def to_count(value: Any) -> int:
    """Non-negative integer count, 0 when unreadable."""
    return max(int(to_number(value)), 0)


def to_rating(value: Any) -> float:
    return min(max(to_number(value), 0.0), 5.0)


def to_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1")
    return bool(value)
