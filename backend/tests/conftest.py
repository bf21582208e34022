import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# tennis_league.main refuses to import without an explicit origin list.
os.environ.setdefault("ALLOWED_ORIGINS", "http://localhost:3000")

from tennis_league.scoring.types import (  # noqa: E402
    IncompleteReason,
    MatchResult,
    Player,
    Result,
    SetScore,
)


def _singles(player, pos, result, *sets, reason=None, **kwargs):
    """Build a singles MatchResult from ``(ours, theirs)`` tuples."""
    scores = [SetScore(*s) for s in sets] + [SetScore()] * (3 - len(sets))
    return MatchResult(
        is_singles=True,
        position=pos,
        player1_id=player,
        set1=scores[0],
        set2=scores[1],
        set3=scores[2],
        incomplete_reason=IncompleteReason(reason) if reason else None,
        result=Result(result) if result else None,
        **kwargs,
    )


def _doubles(player1, player2, pos, result, *sets, reason=None, **kwargs):
    scores = [SetScore(*s) for s in sets] + [SetScore()] * (3 - len(sets))
    return MatchResult(
        is_singles=False,
        position=pos,
        player1_id=player1,
        player2_id=player2,
        set1=scores[0],
        set2=scores[1],
        set3=scores[2],
        incomplete_reason=IncompleteReason(reason) if reason else None,
        result=Result(result) if result else None,
        **kwargs,
    )


@pytest.fixture()
def singles():
    return _singles


@pytest.fixture()
def doubles():
    return _doubles


@pytest.fixture()
def roster():
    return [
        Player(id=1, name="Ana", team_id=1),
        Player(id=2, name="Bea", team_id=1),
        Player(id=3, name="Cleo", team_id=1),
        Player(id=4, name="Dina", team_id=1),
        Player(id=9, name="Opponent Sub", team_id=2),
    ]
