from datetime import date
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .scoring.codec import match_result_from_record, team_match_from_record
from .scoring.types import (
    IncompleteReason,
    MatchResult,
    Player,
    Result,
    SetOutcome,
    TeamMatch,
)
from .services.standings import Scope, SortField

Identifier = Union[int, str]


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class SetEvaluationIn(BaseModel):
    slot: int = Field(..., ge=1, le=3)
    ours: Optional[int] = Field(default=None, ge=0)
    theirs: Optional[int] = Field(default=None, ge=0)
    incomplete: bool = False


class SetEvaluationOut(BaseModel):
    valid: bool
    outcome: SetOutcome


class CompletionsIn(BaseModel):
    slot: int = Field(..., ge=1, le=3)
    partner: Optional[int] = Field(default=None, ge=0)
    incomplete: bool = False


class CompletionsOut(BaseModel):
    values: List[int]


class MatchResolveIn(BaseModel):
    set1: str = ""
    set2: str = ""
    set3: Optional[str] = None
    incomplete_reason: Optional[IncompleteReason] = Field(
        default=None, alias="incompleteReason"
    )
    manual_result: Optional[Result] = Field(default=None, alias="manualResult")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("incomplete_reason", "manual_result", mode="before")
    @classmethod
    def _blank_enums(cls, value):
        return _blank_to_none(value)


class MatchResolveOut(BaseModel):
    result: Optional[Result] = None
    decidable: bool
    hideThirdSet: bool


class MatchResultIn(BaseModel):
    """A stored position result, in the record layout the app persists."""

    team_match_id: Optional[Identifier] = None
    is_singles: bool
    pos: int
    player1: Identifier
    player2: Optional[Identifier] = None
    result: Optional[Result] = None
    set1score: Optional[str] = ""
    set2score: Optional[str] = ""
    set3score: Optional[str] = None
    incomplete_reason: Optional[IncompleteReason] = None
    match_date: Optional[date] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("player2", "result", "incomplete_reason", mode="before")
    @classmethod
    def _blank_fields(cls, value):
        return _blank_to_none(value)

    def to_domain(self) -> MatchResult:
        return match_result_from_record(self.model_dump())


class PlayerIn(BaseModel):
    id: Identifier
    name: str
    team_id: Optional[Identifier] = None

    def to_domain(self) -> Player:
        return Player(id=self.id, name=self.name, team_id=self.team_id)


class StandingsQuery(BaseModel):
    results: List[MatchResultIn]
    scope: Scope = Scope.ALL
    sort: SortField = SortField.POINTS
    descending: bool = True
    players: Optional[List[PlayerIn]] = None
    team_id: Optional[Identifier] = Field(default=None, alias="teamId")

    model_config = ConfigDict(populate_by_name=True)


class PlayerStatOut(BaseModel):
    rank: int
    playerId: Identifier
    playerName: Optional[str] = None
    wins: int
    losses: int
    ties: int
    totalMatches: int
    winPercentage: float
    singlesWins: int
    singlesLosses: int
    singlesTies: int
    doublesWins: int
    doublesLosses: int
    doublesTies: int
    pointsEarned: float
    pointsPerMatch: float


class PairStatOut(BaseModel):
    rank: int
    player1Id: Identifier
    player2Id: Identifier
    player1Name: Optional[str] = None
    player2Name: Optional[str] = None
    wins: int
    losses: int
    ties: int
    totalMatches: int
    winPercentage: float
    pointsEarned: float
    pointsPerMatch: float


class PlayerStandingsOut(BaseModel):
    scope: Scope
    sort: SortField
    descending: bool
    totalMatches: int
    activePlayers: int
    players: List[PlayerStatOut]


class PairStandingsOut(BaseModel):
    scope: Scope
    sort: SortField
    descending: bool
    pairs: List[PairStatOut]


class TeamMatchIn(BaseModel):
    id: Identifier
    opponent_name: str = Field(..., min_length=1)
    match_date: Optional[date] = None
    team_id: Optional[Identifier] = None
    results: List[MatchResultIn] = Field(default_factory=list)

    def to_domain(self) -> TeamMatch:
        return team_match_from_record(
            self.model_dump(exclude={"results"}),
            [r.model_dump() for r in self.results],
        )


class TeamMatchesQuery(BaseModel):
    matches: List[TeamMatchIn]
    team_id: Optional[Identifier] = Field(default=None, alias="teamId")

    model_config = ConfigDict(populate_by_name=True)


class TeamMatchPointsOut(BaseModel):
    id: Identifier
    opponentName: str
    matchDate: Optional[date] = None
    ourPoints: float
    theirPoints: float
    result: Literal["win", "loss", "tie"]


class PlayerProfileOut(BaseModel):
    playerId: Identifier
    playerName: Optional[str] = None
    wins: int
    losses: int
    ties: int
    totalMatches: int
    winPercentage: float
    pointsEarned: float
    pointsPerMatch: float
    history: List[MatchResultIn]
