from decimal import Decimal
from typing import Any


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def is_rating(value: Any) -> bool:
    """Ratings are whole stars from 1 to 5."""
    return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 5
