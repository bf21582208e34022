"""Internal application services (pure helpers, no I/O)."""

from ..scoring.validation import ValidationError
from .history import player_history, team_roster
from .standings import (
    Scope,
    SortField,
    SortState,
    compute_standings,
    pair_stats,
    player_stats,
    player_summary,
    rank,
    team_match_points,
    team_match_summaries,
)

__all__ = [
    "ValidationError",
    "player_history",
    "team_roster",
    "Scope",
    "SortField",
    "SortState",
    "compute_standings",
    "pair_stats",
    "player_stats",
    "player_summary",
    "rank",
    "team_match_points",
    "team_match_summaries",
]
