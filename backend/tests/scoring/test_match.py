import os, sys
import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))
from tennis_league.scoring import match
from tennis_league.scoring.types import UNSET, IncompleteReason, Result, SetScore
from tennis_league.scoring.validation import ValidationError


def _s(ours, theirs):
    return SetScore(ours, theirs)


def test_straight_sets_win_hides_third_set():
    res = match.resolve(_s(6, 2), _s(6, 3))
    assert res.result is Result.WIN
    assert res.decidable is True
    assert res.hide_third_set is True
    assert match.should_hide_third_set(_s(6, 2), _s(6, 3))
    assert match.is_decidable(_s(6, 2), _s(6, 3))


def test_straight_sets_loss():
    res = match.resolve(_s(4, 6), _s(5, 7))
    assert res.result is Result.LOSS
    assert res.decidable and res.hide_third_set


def test_split_sets_with_tied_tiebreak_is_a_tie():
    res = match.resolve(_s(6, 2), _s(3, 6), _s(1, 1))
    assert res.result is Result.TIE
    assert res.decidable is True
    assert res.hide_third_set is False


def test_split_sets_decided_by_tiebreak():
    assert match.resolve(_s(6, 2), _s(3, 6), _s(1, 0)).result is Result.WIN
    assert match.resolve(_s(6, 2), _s(3, 6), _s(0, 1)).result is Result.LOSS


def test_split_sets_without_tiebreak_is_not_decidable():
    res = match.resolve(_s(6, 2), _s(3, 6), UNSET)
    assert res.decidable is False
    assert res.result is None
    assert not match.is_decidable(_s(6, 2), _s(3, 6))


@pytest.mark.parametrize(
    "sets",
    [
        (UNSET, UNSET, UNSET),
        (_s(6, 2), UNSET, UNSET),
        (UNSET, _s(6, 2), _s(1, 0)),
        (_s(6, 2), _s(5, 5), _s(1, 0)),
    ],
    ids=["empty", "one-set", "first-set-missing", "invalid-second-set"],
)
def test_undecided_matches_never_default_to_a_win(sets):
    res = match.resolve(*sets)
    assert res.decidable is False
    assert res.result is None


def test_tiebreak_after_straight_sets_is_ignored():
    res = match.resolve(_s(6, 2), _s(6, 4), _s(1, 1))
    assert res.result is Result.WIN
    assert res.hide_third_set is True
    res = match.resolve(_s(2, 6), _s(4, 6), _s(1, 0))
    assert res.result is Result.LOSS


def test_should_hide_third_set_requires_both_sets():
    assert not match.should_hide_third_set(_s(6, 2), UNSET)
    assert not match.should_hide_third_set(_s(6, 2), _s(2, 6))


def test_incomplete_match_uses_manual_result():
    res = match.resolve(
        _s(3, 2),
        UNSET,
        incomplete_reason=IncompleteReason.INJURY,
        manual_result=Result.LOSS,
    )
    assert res.result is Result.LOSS
    assert res.decidable is True
    assert res.hide_third_set is False


def test_incomplete_match_ignores_set_scores():
    res = match.resolve(
        _s(6, 0),
        _s(6, 0),
        incomplete_reason=IncompleteReason.TIMEOUT,
        manual_result=Result.TIE,
    )
    assert res.result is Result.TIE


def test_incomplete_match_without_manual_result_is_not_decidable():
    res = match.resolve(incomplete_reason=IncompleteReason.TIMEOUT)
    assert res.decidable is False
    assert res.result is None


def test_final_result_accepts_consistent_record(singles):
    record = singles(1, 1, "win", (6, 2), (3, 6), (1, 0))
    assert match.final_result(record) is Result.WIN


def test_final_result_fills_in_missing_result(singles):
    record = singles(1, 1, None, (6, 2), (6, 1))
    assert match.final_result(record) is Result.WIN


def test_final_result_ignores_leftover_third_set_after_straight_sets(singles):
    record = singles(1, 1, "loss", (2, 6), (3, 6), (4, 4))
    assert match.final_result(record) is Result.LOSS


@pytest.mark.parametrize(
    "kwargs, msg",
    [
        (dict(result="win", sets=[(6, 2), (3, 6)]), "complete set scores"),
        (dict(result="win", sets=[(6, 5), (6, 2)]), "invalid score combination"),
        (dict(result="loss", sets=[(6, 2), (6, 2)]), "does not match"),
        (dict(result=None, sets=[(3, 2)], reason="timeout"), "must be chosen"),
        (dict(result="win", sets=[(9, 2)], reason="injury"), "out of range"),
    ],
    ids=["undecided", "invalid-set", "wrong-result", "no-manual-result", "out-of-range"],
)
def test_final_result_rejects_unusable_records(singles, kwargs, msg):
    record = singles(1, 2, kwargs["result"], *kwargs["sets"], reason=kwargs.get("reason"))
    with pytest.raises(ValidationError) as exc:
        match.final_result(record)
    assert msg in str(exc.value)


def test_resolve_match_result_passes_manual_result_only_when_incomplete(singles):
    complete = singles(1, 1, "loss", (6, 2), (6, 2))
    assert match.resolve_match_result(complete).result is Result.WIN
    incomplete = singles(1, 1, "loss", (6, 2), reason="injury")
    assert match.resolve_match_result(incomplete).result is Result.LOSS
