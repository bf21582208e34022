"""Fold match results into player, pair and fixture standings.

Every pass recomputes from the full collection handed in. Results with the
``default`` incomplete reason are left out of player and pair records.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Iterable, Optional, Sequence, Union

from ..scoring.match import final_result
from ..scoring.points import award, split_award
from ..scoring.types import (
    Identifier,
    MatchResult,
    Player,
    PlayerId,
    Result,
    TeamMatch,
)
from ..scoring.validation import (
    ValidationError,
    validate_match_results,
    validate_team_match,
)

logger = logging.getLogger(__name__)


class Scope(str, Enum):
    ALL = "all"
    SINGLES = "singles"
    DOUBLES = "doubles"

    def includes(self, match: MatchResult) -> bool:
        if self is Scope.SINGLES:
            return match.is_singles
        if self is Scope.DOUBLES:
            return not match.is_singles
        return True


class SortField(str, Enum):
    POINTS = "points"
    WIN_PERCENTAGE = "win_percentage"
    POINTS_PER_MATCH = "points_per_match"


# Secondary key used when two entries tie on the selected field.
COMPLEMENT = {
    SortField.POINTS: SortField.WIN_PERCENTAGE,
    SortField.WIN_PERCENTAGE: SortField.POINTS,
    SortField.POINTS_PER_MATCH: SortField.POINTS,
}


def _as_sort_field(value: Union[SortField, str]) -> SortField:
    try:
        return SortField(value)
    except ValueError:
        raise ValidationError(
            f"Sort field must be points, win_percentage, or points_per_match"
            f" (got {value!r})."
        )


@dataclass(frozen=True)
class SortState:
    field: SortField = SortField.POINTS
    descending: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "field", _as_sort_field(self.field))

    def select(self, field: Union[SortField, str]) -> "SortState":
        """Pick a sort column; re-selecting the active one flips direction."""

        field = _as_sort_field(field)
        if field is self.field:
            return replace(self, descending=not self.descending)
        return SortState(field=field, descending=True)


@dataclass
class _Record:
    wins: int = 0
    losses: int = 0
    ties: int = 0
    singles_wins: int = 0
    singles_losses: int = 0
    singles_ties: int = 0
    doubles_wins: int = 0
    doubles_losses: int = 0
    doubles_ties: int = 0
    points_earned: float = 0.0

    @property
    def total_matches(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def win_percentage(self) -> float:
        total = self.total_matches
        if not total:
            return 0.0
        return (self.wins + 0.5 * self.ties) / total * 100

    @property
    def points_per_match(self) -> float:
        total = self.total_matches
        return self.points_earned / total if total else 0.0

    def sort_value(self, field: SortField) -> float:
        if field is SortField.POINTS:
            return self.points_earned
        if field is SortField.WIN_PERCENTAGE:
            return self.win_percentage
        return self.points_per_match

    def add(self, match: MatchResult, result: Result) -> None:
        kind = "singles" if match.is_singles else "doubles"
        if result is Result.WIN:
            self.wins += 1
            counter = f"{kind}_wins"
        elif result is Result.LOSS:
            self.losses += 1
            counter = f"{kind}_losses"
        else:
            self.ties += 1
            counter = f"{kind}_ties"
        setattr(self, counter, getattr(self, counter) + 1)
        self.points_earned += award(result, match.position, match.is_singles)


@dataclass
class PlayerStatEntry(_Record):
    player_id: PlayerId = None
    name: Optional[str] = None

    @property
    def key(self) -> tuple:
        return (self.player_id,)


@dataclass
class PairStatEntry(_Record):
    player1_id: PlayerId = None
    player2_id: PlayerId = None
    player1_name: Optional[str] = None
    player2_name: Optional[str] = None

    @property
    def key(self) -> tuple:
        return (self.player1_id, self.player2_id)


@dataclass
class Standings:
    scope: Scope
    sort: SortState
    players: list[PlayerStatEntry] = field(default_factory=list)
    pairs: list[PairStatEntry] = field(default_factory=list)
    total_matches: int = 0

    @property
    def active_players(self) -> int:
        return len(self.players)


@dataclass
class TeamMatchSummary:
    id: Identifier
    opponent_name: str
    match_date: Optional[date]
    our_points: float
    their_points: float

    @property
    def result(self) -> Result:
        if self.our_points > self.their_points:
            return Result.WIN
        if self.our_points < self.their_points:
            return Result.LOSS
        return Result.TIE


def _id_sort_key(pid: PlayerId) -> tuple:
    # ints before strings so mixed identifiers still order deterministically
    return (isinstance(pid, str), pid)


def canonical_pair(a: PlayerId, b: PlayerId) -> tuple[PlayerId, PlayerId]:
    return (a, b) if _id_sort_key(a) <= _id_sort_key(b) else (b, a)


def _roster(
    players: Optional[Sequence[Player]], team_id: Optional[Identifier]
) -> tuple[dict[PlayerId, Player], Optional[set[PlayerId]]]:
    by_id = {p.id: p for p in players or ()}
    if team_id is None:
        return by_id, None
    if players is None:
        raise ValidationError("Filtering by team requires the list of players.")
    return by_id, {p.id for p in players if p.team_id == team_id}


def _counted(
    matches: Iterable[MatchResult], scope: Scope
) -> list[tuple[MatchResult, Result]]:
    """Validate everything, then keep in-scope, non-defaulted results."""

    checked = validate_match_results(matches)
    counted = []
    skipped = 0
    for match in checked:
        if not scope.includes(match):
            continue
        if match.is_defaulted:
            skipped += 1
            continue
        counted.append((match, final_result(match)))
    logger.debug(
        "Folding %d of %d match results (scope=%s, defaults skipped=%d)",
        len(counted),
        len(checked),
        scope.value,
        skipped,
    )
    return counted


def _as_scope(scope: Union[Scope, str]) -> Scope:
    try:
        return Scope(scope)
    except ValueError:
        raise ValidationError(f"Scope must be all, singles, or doubles (got {scope!r}).")


def player_stats(
    matches: Iterable[MatchResult],
    *,
    scope: Union[Scope, str] = Scope.ALL,
    players: Optional[Sequence[Player]] = None,
    team_id: Optional[Identifier] = None,
) -> list[PlayerStatEntry]:
    """Per-player records, in order of first appearance.

    Both doubles partners are credited with the full result.
    """

    scope = _as_scope(scope)
    names, roster = _roster(players, team_id)
    stats: dict[PlayerId, PlayerStatEntry] = {}
    for match, result in _counted(matches, scope):
        for pid in match.player_ids:
            if roster is not None and pid not in roster:
                continue
            entry = stats.get(pid)
            if entry is None:
                player = names.get(pid)
                entry = stats[pid] = PlayerStatEntry(
                    player_id=pid, name=player.name if player else None
                )
            entry.add(match, result)
    return list(stats.values())


def pair_stats(
    matches: Iterable[MatchResult],
    *,
    scope: Union[Scope, str] = Scope.ALL,
    players: Optional[Sequence[Player]] = None,
    team_id: Optional[Identifier] = None,
) -> list[PairStatEntry]:
    """Per-pair records for doubles, keyed by the unordered pair."""

    scope = _as_scope(scope)
    names, roster = _roster(players, team_id)
    stats: dict[tuple[PlayerId, PlayerId], PairStatEntry] = {}
    for match, result in _counted(matches, scope):
        if match.is_singles:
            continue
        key = canonical_pair(match.player1_id, match.player2_id)
        if roster is not None and not set(key) <= roster:
            continue
        entry = stats.get(key)
        if entry is None:
            first, second = (names.get(pid) for pid in key)
            entry = stats[key] = PairStatEntry(
                player1_id=key[0],
                player2_id=key[1],
                player1_name=first.name if first else None,
                player2_name=second.name if second else None,
            )
        entry.add(match, result)
    return list(stats.values())


def rank(entries: Iterable[_Record], sort: Optional[SortState] = None) -> list:
    """Order entries by the selected field, then its complement, then by
    matches played (most first). Identifiers break any remaining tie."""

    sort = sort or SortState()
    sign = -1 if sort.descending else 1
    complement = COMPLEMENT[sort.field]

    def key(entry):
        return (
            sign * entry.sort_value(sort.field),
            sign * entry.sort_value(complement),
            -entry.total_matches,
            tuple(_id_sort_key(pid) for pid in entry.key),
        )

    return sorted(entries, key=key)


def player_summary(
    matches: Iterable[MatchResult],
    player_id: PlayerId,
    *,
    players: Optional[Sequence[Player]] = None,
) -> PlayerStatEntry:
    """Record for one player; an empty record if they haven't played."""

    for entry in player_stats(matches, players=players):
        if entry.player_id == player_id:
            return entry
    player = {p.id: p for p in players or ()}.get(player_id)
    return PlayerStatEntry(player_id=player_id, name=player.name if player else None)


def compute_standings(
    matches: Iterable[MatchResult],
    *,
    scope: Union[Scope, str] = Scope.ALL,
    sort: Optional[SortState] = None,
    players: Optional[Sequence[Player]] = None,
    team_id: Optional[Identifier] = None,
) -> Standings:
    scope = _as_scope(scope)
    sort = sort or SortState()
    matches = list(matches)
    player_entries = player_stats(matches, scope=scope, players=players, team_id=team_id)
    pair_entries = pair_stats(matches, scope=scope, players=players, team_id=team_id)
    return Standings(
        scope=scope,
        sort=sort,
        players=rank(player_entries, sort),
        pairs=rank(pair_entries, sort),
        total_matches=sum(
            1 for m in matches if scope.includes(m) and not m.is_defaulted
        ),
    )


def team_match_points(matches: Iterable[MatchResult]) -> tuple[float, float]:
    """Sum the league points won by each side over a fixture's positions.

    Defaulted positions still score here: the fixture result was recorded.
    """

    ours = theirs = 0.0
    for match in validate_match_results(matches):
        a, b = split_award(final_result(match), match.position, match.is_singles)
        ours += a
        theirs += b
    return ours, theirs


def team_match_summaries(
    team_matches: Iterable[TeamMatch], *, team_id: Optional[Identifier] = None
) -> list[TeamMatchSummary]:
    """Point totals per fixture, earliest first. Undated fixtures sort last."""

    summaries = []
    for tm in team_matches:
        validate_team_match(tm)
        if team_id is not None and tm.team_id != team_id:
            continue
        ours, theirs = team_match_points(tm.results)
        summaries.append(
            TeamMatchSummary(
                id=tm.id,
                opponent_name=tm.opponent_name,
                match_date=tm.match_date,
                our_points=ours,
                their_points=theirs,
            )
        )
    return sorted(
        summaries,
        key=lambda s: (s.match_date is None, s.match_date or 0),
    )
