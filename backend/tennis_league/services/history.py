from typing import Iterable, Sequence

from ..scoring.types import Identifier, MatchResult, Player, PlayerId
from ..scoring.validation import validate_match_results


def player_history(
    matches: Iterable[MatchResult], player_id: PlayerId
) -> list[MatchResult]:
    """Every result the player took part in, most recent first.

    Defaulted matches are included; they are part of the history even though
    they don't count toward the player's record. Undated results go last.
    """

    played = [
        m for m in validate_match_results(matches) if player_id in m.player_ids
    ]
    dated = [m for m in played if m.match_date is not None]
    undated = [m for m in played if m.match_date is None]
    dated.sort(key=lambda m: m.match_date, reverse=True)
    return dated + undated


def team_roster(players: Sequence[Player], team_id: Identifier) -> list[Player]:
    return [p for p in players if p.team_id == team_id]
