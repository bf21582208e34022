import os, sys
import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))
from tennis_league.scoring.points import award, points, split_award
from tennis_league.scoring.types import Result
from tennis_league.scoring.validation import ValidationError


@pytest.mark.parametrize(
    "position, is_singles, expected",
    [(1, True, 5), (2, True, 4), (3, True, 4), (1, False, 5), (2, False, 4), (3, False, 3)],
)
def test_point_table(position, is_singles, expected):
    assert points(position, is_singles) == expected


def test_award_halves_ties():
    assert award(Result.WIN, 1, True) == 5
    assert award(Result.TIE, 2, True) == 2
    assert award(Result.TIE, 1, False) == 2.5
    assert award(Result.LOSS, 1, True) == 0


def test_split_award():
    assert split_award(Result.WIN, 1, False) == (5, 0)
    assert split_award(Result.LOSS, 3, False) == (0, 3)
    assert split_award(Result.TIE, 3, False) == (1.5, 1.5)


@pytest.mark.parametrize("position", [0, 4, -1, True, "1"])
def test_rejects_positions_outside_table(position):
    with pytest.raises(ValidationError):
        points(position, False)


def test_award_rejects_unknown_result():
    with pytest.raises(ValidationError):
        award("win", 1, True)
