"""Plain data shared by the set evaluator, match resolver and aggregator."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum, IntEnum
from typing import Optional, Union

Identifier = Union[int, str]
PlayerId = Identifier


class SetSlot(IntEnum):
    FIRST = 1
    SECOND = 2
    TIEBREAK = 3

    @property
    def is_tiebreak(self) -> bool:
        return self is SetSlot.TIEBREAK


class SetOutcome(str, Enum):
    UNDETERMINED = "undetermined"
    WE_WON = "we_won"
    THEY_WON = "they_won"
    TIED = "tied"

    @property
    def determined(self) -> bool:
        return self is not SetOutcome.UNDETERMINED


class Result(str, Enum):
    WIN = "win"
    LOSS = "loss"
    TIE = "tie"


class IncompleteReason(str, Enum):
    TIMEOUT = "timeout"
    INJURY = "injury"
    DEFAULT = "default"


@dataclass(frozen=True)
class SetScore:
    """Games for one set. ``None`` on either side means the set is unset."""

    ours: Optional[int] = None
    theirs: Optional[int] = None

    @property
    def is_unset(self) -> bool:
        return self.ours is None or self.theirs is None


UNSET = SetScore()


@dataclass(frozen=True)
class MatchResult:
    """One singles or doubles position within a team match.

    ``result`` may be ``None`` for an entry still being filled in. When
    ``incomplete_reason`` is set, ``result`` is a manual override and the set
    scores are informational only.
    """

    is_singles: bool
    position: int
    player1_id: PlayerId
    player2_id: Optional[PlayerId] = None
    set1: SetScore = UNSET
    set2: SetScore = UNSET
    set3: SetScore = UNSET
    incomplete_reason: Optional[IncompleteReason] = None
    result: Optional[Result] = None
    team_match_id: Optional[Identifier] = None
    match_date: Optional[date] = None

    @property
    def sets(self) -> tuple[SetScore, SetScore, SetScore]:
        return (self.set1, self.set2, self.set3)

    @property
    def player_ids(self) -> tuple[PlayerId, ...]:
        if self.is_singles or self.player2_id is None:
            return (self.player1_id,)
        return (self.player1_id, self.player2_id)

    @property
    def is_defaulted(self) -> bool:
        return self.incomplete_reason is IncompleteReason.DEFAULT


@dataclass(frozen=True)
class Player:
    id: PlayerId
    name: str
    team_id: Optional[Identifier] = None


@dataclass
class TeamMatch:
    """A fixture against one opponent on one date."""

    id: Identifier
    opponent_name: str
    match_date: Optional[date] = None
    team_id: Optional[Identifier] = None
    results: list[MatchResult] = field(default_factory=list)
