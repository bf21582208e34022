"""Match resolver.

Combines the outcomes of up to three sets into a win, loss or tie. A match
is decided 2-0 when the same side takes sets 1 and 2; otherwise the
super-tiebreak in slot 3 is required. A split followed by a 1-1 tiebreak is
a tie.
"""

from dataclasses import dataclass
from typing import Optional

from . import sets
from .types import (
    UNSET,
    IncompleteReason,
    MatchResult,
    Result,
    SetOutcome,
    SetScore,
    SetSlot,
)
from .validation import ValidationError, validate_match_result


@dataclass(frozen=True)
class Resolution:
    """Resolver output.

    ``result`` is ``None`` whenever ``decidable`` is false; an undecided
    match never resolves to a win by default.
    """

    result: Optional[Result]
    decidable: bool
    hide_third_set: bool = False


def _outcomes(
    set1: SetScore, set2: SetScore, set3: SetScore
) -> tuple[SetOutcome, SetOutcome, SetOutcome]:
    return (
        sets.outcome(SetSlot.FIRST, set1),
        sets.outcome(SetSlot.SECOND, set2),
        sets.outcome(SetSlot.TIEBREAK, set3),
    )


def _straight_sets(first: SetOutcome, second: SetOutcome) -> bool:
    return first.determined and first == second


def should_hide_third_set(set1: SetScore, set2: SetScore) -> bool:
    """True when one side took both regular sets, so no tiebreak is played."""

    return _straight_sets(
        sets.outcome(SetSlot.FIRST, set1), sets.outcome(SetSlot.SECOND, set2)
    )


def is_decidable(set1: SetScore, set2: SetScore, set3: SetScore = UNSET) -> bool:
    first, second, third = _outcomes(set1, set2, set3)
    if _straight_sets(first, second):
        return True
    return first.determined and second.determined and third.determined


def _tally(outcomes) -> tuple[int, int]:
    ours = sum(1 for o in outcomes if o is SetOutcome.WE_WON)
    theirs = sum(1 for o in outcomes if o is SetOutcome.THEY_WON)
    return ours, theirs


def resolve(
    set1: SetScore = UNSET,
    set2: SetScore = UNSET,
    set3: SetScore = UNSET,
    *,
    incomplete_reason: Optional[IncompleteReason] = None,
    manual_result: Optional[Result] = None,
) -> Resolution:
    """Resolve a match from its set scores, or from a manual result.

    With an ``incomplete_reason`` the set scores are not consulted: the
    outcome is ``manual_result`` and the match is decidable once one has
    been chosen.
    """

    if incomplete_reason is not None:
        if manual_result is not None and not isinstance(manual_result, Result):
            raise ValidationError("Manual result must be win, tie, or loss.")
        return Resolution(
            result=manual_result,
            decidable=manual_result is not None,
            hide_third_set=False,
        )

    first, second, third = _outcomes(set1, set2, set3)

    if _straight_sets(first, second):
        # Slot 3 is ignored once the match is over, even if a score was left in it.
        result = Result.WIN if first is SetOutcome.WE_WON else Result.LOSS
        return Resolution(result=result, decidable=True, hide_third_set=True)

    if not (first.determined and second.determined and third.determined):
        return Resolution(result=None, decidable=False)

    if third is SetOutcome.TIED:
        return Resolution(result=Result.TIE, decidable=True)

    ours, theirs = _tally((first, second, third))
    if ours > theirs:
        return Resolution(result=Result.WIN, decidable=True)
    if theirs > ours:
        return Resolution(result=Result.LOSS, decidable=True)
    return Resolution(result=None, decidable=False)


def resolve_match_result(match: MatchResult) -> Resolution:
    """Resolve a stored record, treating its result as the manual override
    when the match was not completed."""

    return resolve(
        match.set1,
        match.set2,
        match.set3,
        incomplete_reason=match.incomplete_reason,
        manual_result=match.result if match.incomplete_reason else None,
    )


def final_result(match: MatchResult) -> Result:
    """Return the result a match counts as, or raise if the record is unusable.

    Complete matches must carry valid set scores that decide the match, and
    any stored result must agree with them. Incomplete matches need a manual
    result.
    """

    validate_match_result(match)
    label = f"{'Singles' if match.is_singles else 'Doubles'} {match.position}"

    if match.incomplete_reason is not None:
        for slot, score in zip(SetSlot, match.sets):
            if not sets.validate(slot, score.ours, score.theirs, incomplete=True):
                raise ValidationError(
                    f"{label}: set {int(slot)} score is out of range."
                )
        if match.result is None:
            raise ValidationError(
                f"{label}: a result must be chosen for an incomplete match."
            )
        return match.result

    hidden = should_hide_third_set(match.set1, match.set2)
    for slot, score in zip(SetSlot, match.sets):
        if slot.is_tiebreak and hidden:
            continue
        if not sets.validate(slot, score.ours, score.theirs):
            raise ValidationError(
                f"{label}: set {int(slot)} has an invalid score combination."
            )

    resolution = resolve_match_result(match)
    if not resolution.decidable:
        raise ValidationError(
            f"{label}: complete set scores to determine the match result."
        )
    if match.result is not None and match.result is not resolution.result:
        raise ValidationError(
            f"{label}: recorded result {match.result.value!r} does not match the"
            f" set scores ({resolution.result.value!r})."
        )
    return resolution.result
