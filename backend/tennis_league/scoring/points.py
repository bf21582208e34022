"""League point table.

Singles 1 is worth 5 points and every other singles position 4. Doubles
positions are worth 5, 4 and 3. A tie earns half the value.
"""

from .types import Result
from .validation import MAX_POSITION, ValidationError

SINGLES_POINTS = {1: 5}
SINGLES_DEFAULT_POINTS = 4
DOUBLES_POINTS = {1: 5, 2: 4, 3: 3}


def points(position: int, is_singles: bool) -> int:
    if isinstance(position, bool) or not isinstance(position, int):
        raise ValidationError(f"Position must be an integer (got {position!r}).")
    if position < 1 or position > MAX_POSITION:
        raise ValidationError(
            f"Position must be between 1 and {MAX_POSITION} (got {position})."
        )
    if is_singles:
        return SINGLES_POINTS.get(position, SINGLES_DEFAULT_POINTS)
    return DOUBLES_POINTS[position]


def award(result: Result, position: int, is_singles: bool) -> float:
    """Points earned by our side for ``result`` at a position."""

    value = points(position, is_singles)
    if result is Result.WIN:
        return float(value)
    if result is Result.TIE:
        return value / 2
    if result is Result.LOSS:
        return 0.0
    raise ValidationError(f"Result must be win, tie, or loss (got {result!r}).")


def split_award(result: Result, position: int, is_singles: bool) -> tuple[float, float]:
    """Return ``(ours, theirs)`` for a position's result."""

    value = float(points(position, is_singles))
    ours = award(result, position, is_singles)
    if result is Result.TIE:
        return ours, ours
    return ours, value - ours
