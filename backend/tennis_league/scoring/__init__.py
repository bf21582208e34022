"""Tennis scoring rules: set evaluation, match resolution and league points."""

from . import codec, match, points, sets
from .types import (
    UNSET,
    IncompleteReason,
    MatchResult,
    Player,
    Result,
    SetOutcome,
    SetScore,
    SetSlot,
    TeamMatch,
)
from .validation import ValidationError

__all__ = [
    "codec",
    "match",
    "points",
    "sets",
    "UNSET",
    "IncompleteReason",
    "MatchResult",
    "Player",
    "Result",
    "SetOutcome",
    "SetScore",
    "SetSlot",
    "TeamMatch",
    "ValidationError",
]
