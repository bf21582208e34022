import logging

from fastapi import APIRouter

from ..config import MAX_RESULTS_PER_REQUEST
from ..exceptions import TooManyResults, http_problem
from ..scoring.codec import match_result_to_record
from ..scoring.validation import ValidationError
from ..schemas import (
    PairStandingsOut,
    PairStatOut,
    PlayerProfileOut,
    PlayerStandingsOut,
    PlayerStatOut,
    MatchResultIn,
    StandingsQuery,
    TeamMatchesQuery,
    TeamMatchPointsOut,
)
from ..services.history import player_history
from ..services.standings import (
    SortState,
    compute_standings,
    player_summary,
    team_match_summaries,
)

logger = logging.getLogger(__name__)

# Resource-only prefix; no /api or /api/v0 here
router = APIRouter(prefix="/standings", tags=["standings"])


def _check_size(count: int) -> None:
    if count > MAX_RESULTS_PER_REQUEST:
        raise TooManyResults(count, MAX_RESULTS_PER_REQUEST)


def _standings(body: StandingsQuery):
    _check_size(len(body.results))
    try:
        results = [r.to_domain() for r in body.results]
        players = (
            [p.to_domain() for p in body.players] if body.players is not None else None
        )
        return compute_standings(
            results,
            scope=body.scope,
            sort=SortState(field=body.sort, descending=body.descending),
            players=players,
            team_id=body.team_id,
        )
    except ValidationError as e:
        logger.info("Rejected standings request: %s", e.detail)
        raise http_problem(
            status_code=422,
            detail=str(e),
            code="standings_invalid_results",
        )


# POST /api/v0/standings/players
@router.post("/players", response_model=PlayerStandingsOut)
def player_standings(body: StandingsQuery) -> PlayerStandingsOut:
    standings = _standings(body)
    return PlayerStandingsOut(
        scope=standings.scope,
        sort=standings.sort.field,
        descending=standings.sort.descending,
        totalMatches=standings.total_matches,
        activePlayers=standings.active_players,
        players=[
            PlayerStatOut(
                rank=i + 1,
                playerId=e.player_id,
                playerName=e.name,
                wins=e.wins,
                losses=e.losses,
                ties=e.ties,
                totalMatches=e.total_matches,
                winPercentage=e.win_percentage,
                singlesWins=e.singles_wins,
                singlesLosses=e.singles_losses,
                singlesTies=e.singles_ties,
                doublesWins=e.doubles_wins,
                doublesLosses=e.doubles_losses,
                doublesTies=e.doubles_ties,
                pointsEarned=e.points_earned,
                pointsPerMatch=e.points_per_match,
            )
            for i, e in enumerate(standings.players)
        ],
    )


# POST /api/v0/standings/pairs
@router.post("/pairs", response_model=PairStandingsOut)
def pair_standings(body: StandingsQuery) -> PairStandingsOut:
    standings = _standings(body)
    return PairStandingsOut(
        scope=standings.scope,
        sort=standings.sort.field,
        descending=standings.sort.descending,
        pairs=[
            PairStatOut(
                rank=i + 1,
                player1Id=e.player1_id,
                player2Id=e.player2_id,
                player1Name=e.player1_name,
                player2Name=e.player2_name,
                wins=e.wins,
                losses=e.losses,
                ties=e.ties,
                totalMatches=e.total_matches,
                winPercentage=e.win_percentage,
                pointsEarned=e.points_earned,
                pointsPerMatch=e.points_per_match,
            )
            for i, e in enumerate(standings.pairs)
        ],
    )


# POST /api/v0/standings/team-matches
@router.post("/team-matches", response_model=list[TeamMatchPointsOut])
def team_match_points(body: TeamMatchesQuery) -> list[TeamMatchPointsOut]:
    _check_size(sum(len(m.results) for m in body.matches))
    try:
        summaries = team_match_summaries(
            [m.to_domain() for m in body.matches], team_id=body.team_id
        )
    except ValidationError as e:
        logger.info("Rejected team match request: %s", e.detail)
        raise http_problem(
            status_code=422,
            detail=str(e),
            code="team_match_invalid_results",
        )
    return [
        TeamMatchPointsOut(
            id=s.id,
            opponentName=s.opponent_name,
            matchDate=s.match_date,
            ourPoints=s.our_points,
            theirPoints=s.their_points,
            result=s.result.value,
        )
        for s in summaries
    ]


# POST /api/v0/standings/players/{player_id}
@router.post("/players/{player_id}", response_model=PlayerProfileOut)
def player_profile(player_id: str, body: StandingsQuery) -> PlayerProfileOut:
    _check_size(len(body.results))
    try:
        results = [r.to_domain() for r in body.results]
        players = [p.to_domain() for p in body.players or ()]
    except ValidationError as e:
        raise http_problem(
            status_code=422,
            detail=str(e),
            code="standings_invalid_results",
        )
    # Path parameters arrive as text; match numeric ids the way they were sent.
    pid = _match_identifier(player_id, results, players)
    try:
        summary = player_summary(results, pid, players=players)
        history = player_history(results, pid)
    except ValidationError as e:
        raise http_problem(
            status_code=422,
            detail=str(e),
            code="standings_invalid_results",
        )
    if summary.name is None and not history:
        raise http_problem(
            status_code=404,
            detail=f"player '{player_id}' not found",
            code="player_not_found",
        )
    return PlayerProfileOut(
        playerId=pid,
        playerName=summary.name,
        wins=summary.wins,
        losses=summary.losses,
        ties=summary.ties,
        totalMatches=summary.total_matches,
        winPercentage=summary.win_percentage,
        pointsEarned=summary.points_earned,
        pointsPerMatch=summary.points_per_match,
        history=[MatchResultIn(**match_result_to_record(m)) for m in history],
    )


def _match_identifier(raw: str, results, players):
    known = {p.id for p in players}
    for m in results:
        known.update(m.player_ids)
    if raw in known:
        return raw
    if raw.lstrip("-").isdigit() and int(raw) in known:
        return int(raw)
    return raw
