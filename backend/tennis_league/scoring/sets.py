"""Set evaluator.

Slots 1 and 2 are regular sets: a side wins 6-0 through 6-4, or 7-5 / 7-6.
Slot 3 is a super-tiebreak recorded as 1-0, 0-1, or 1-1 (a genuine tie).
"""

from typing import Literal, Optional

from .types import SetOutcome, SetScore, SetSlot
from .validation import ValidationError, validate_score_value

REGULAR_SET_WINS = frozenset({(6, 0), (6, 1), (6, 2), (6, 3), (6, 4), (7, 5), (7, 6)})
REGULAR_SET_SCORES = REGULAR_SET_WINS | {(b, a) for a, b in REGULAR_SET_WINS}
TIEBREAK_SCORES = frozenset({(1, 0), (0, 1), (1, 1)})

REGULAR_DOMAIN = frozenset(range(0, 8))
TIEBREAK_DOMAIN = frozenset(range(0, 2))


def as_slot(slot) -> SetSlot:
    if isinstance(slot, bool):
        raise ValidationError(f"Set slot must be 1, 2 or 3 (got {slot!r}).")
    try:
        return SetSlot(slot)
    except ValueError:
        raise ValidationError(f"Set slot must be 1, 2 or 3 (got {slot!r}).")


def allowed_scores(slot) -> frozenset[tuple[int, int]]:
    return TIEBREAK_SCORES if as_slot(slot).is_tiebreak else REGULAR_SET_SCORES


def score_domain(slot) -> frozenset[int]:
    return TIEBREAK_DOMAIN if as_slot(slot).is_tiebreak else REGULAR_DOMAIN


def _scores(ours, theirs) -> tuple[Optional[int], Optional[int]]:
    return (
        validate_score_value(ours, "Our score"),
        validate_score_value(theirs, "Their score"),
    )


def validate(slot, ours, theirs, *, incomplete: bool = False) -> bool:
    """Return whether a (possibly partial) set score may be submitted.

    A missing side is always acceptable pending completion. With
    ``incomplete`` set the set was not played out, so any value inside the
    slot's domain is accepted regardless of tennis rules.
    """

    slot = as_slot(slot)
    ours, theirs = _scores(ours, theirs)
    if ours is None or theirs is None:
        return True
    if incomplete:
        domain = score_domain(slot)
        return ours in domain and theirs in domain
    return (ours, theirs) in allowed_scores(slot)


def winner(slot, ours, theirs) -> SetOutcome:
    slot = as_slot(slot)
    ours, theirs = _scores(ours, theirs)
    if ours is None or theirs is None:
        return SetOutcome.UNDETERMINED
    if (ours, theirs) not in allowed_scores(slot):
        return SetOutcome.UNDETERMINED
    if ours == theirs:
        return SetOutcome.TIED
    return SetOutcome.WE_WON if ours > theirs else SetOutcome.THEY_WON


def outcome(slot, score: SetScore) -> SetOutcome:
    return winner(slot, score.ours, score.theirs)


def valid_completions(slot, partner, *, incomplete: bool = False) -> frozenset[int]:
    """Values the other side may take given one side's score.

    Returns the whole domain when ``partner`` is unset or the set is
    incomplete; an empty set when no valid combination exists.
    """

    partner = validate_score_value(partner, "Partner score")
    if partner is None or incomplete:
        return score_domain(slot)
    # Both score tables are symmetric, so the side being filled doesn't matter.
    return frozenset(a for a, b in allowed_scores(slot) if b == partner)


def auto_complete(
    slot,
    ours,
    theirs,
    *,
    edited: Literal["ours", "theirs"] = "ours",
    incomplete: bool = False,
) -> tuple[Optional[int], Optional[int]]:
    """Apply data-entry assistance after one side of a set was edited.

    If the edited side now clashes with the other side, the other side is
    cleared. If the other side is empty and only one value would complete a
    valid score, it is filled in. Incomplete sets are never touched.
    """

    if edited not in ("ours", "theirs"):
        raise ValidationError("edited must be 'ours' or 'theirs'.")
    ours, theirs = _scores(ours, theirs)
    if incomplete:
        return ours, theirs

    new, other = (ours, theirs) if edited == "ours" else (theirs, ours)
    if new is None:
        return ours, theirs

    if other is not None:
        if not validate(slot, ours, theirs):
            other = None
    else:
        options = valid_completions(slot, new)
        if len(options) == 1:
            (other,) = options

    return (new, other) if edited == "ours" else (other, new)
