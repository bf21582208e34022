from typing import Any, Iterable, Optional

from .types import IncompleteReason, MatchResult, Result, SetScore, TeamMatch

MAX_POSITION = 3


class ValidationError(ValueError):
    """Raised when match data handed to the engine has an impossible shape."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


def validate_score_value(value: Any, label: str) -> Optional[int]:
    """Return ``value`` as a games count, or ``None`` when unset.

    Booleans are rejected even though ``bool`` is a subclass of ``int``.
    """

    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{label} must be an integer (got {value!r}).")
    if value < 0:
        raise ValidationError(f"{label} must be >= 0.")
    return value


def validate_set_score(score: SetScore, label: str = "Set") -> None:
    if not isinstance(score, SetScore):
        raise ValidationError(f"{label} must be a SetScore.")
    validate_score_value(score.ours, f"{label} score (ours)")
    validate_score_value(score.theirs, f"{label} score (theirs)")


def _validate_player_id(value: Any, label: str) -> None:
    if value is None or isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValidationError(f"{label} must be a player identifier.")
    if isinstance(value, str) and not value.strip():
        raise ValidationError(f"{label} must not be empty.")


def validate_match_result(match: MatchResult, index: Optional[int] = None) -> None:
    """Fail fast on a malformed match result.

    Rules:
    - ``position`` is an integer between 1 and 3
    - singles positions carry exactly one player
    - doubles positions carry two distinct players
    - set scores are unset or non-negative integers
    - ``result`` / ``incomplete_reason`` are enum members or ``None``
    """

    prefix = f"Match result #{index}" if index is not None else "Match result"

    if not isinstance(match, MatchResult):
        raise ValidationError(f"{prefix} must be a MatchResult.")

    pos = match.position
    if isinstance(pos, bool) or not isinstance(pos, int):
        raise ValidationError(f"{prefix}: position must be an integer.")
    if pos < 1 or pos > MAX_POSITION:
        raise ValidationError(
            f"{prefix}: position must be between 1 and {MAX_POSITION} (got {pos})."
        )

    _validate_player_id(match.player1_id, f"{prefix}: player 1")
    if match.is_singles:
        if match.player2_id is not None:
            raise ValidationError(f"{prefix}: singles matches take a single player.")
    else:
        if match.player2_id is None:
            raise ValidationError(
                f"{prefix}: player 2 is required for doubles matches."
            )
        _validate_player_id(match.player2_id, f"{prefix}: player 2")
        if match.player2_id == match.player1_id:
            raise ValidationError(
                f"{prefix}: doubles partners must be two different players."
            )

    for slot, score in enumerate(match.sets, start=1):
        validate_set_score(score, f"{prefix}: set {slot}")

    if match.result is not None and not isinstance(match.result, Result):
        raise ValidationError(f"{prefix}: result must be win, tie, or loss.")
    if match.incomplete_reason is not None and not isinstance(
        match.incomplete_reason, IncompleteReason
    ):
        raise ValidationError(
            f"{prefix}: incomplete reason must be timeout, injury, or default."
        )


def validate_match_results(matches: Iterable[MatchResult]) -> list[MatchResult]:
    """Validate every record up front so a bad one fails the whole batch."""

    checked: list[MatchResult] = []
    for i, match in enumerate(matches, start=1):
        validate_match_result(match, i)
        checked.append(match)
    return checked


def validate_team_match(team_match: TeamMatch) -> None:
    if not isinstance(team_match, TeamMatch):
        raise ValidationError("Team match must be a TeamMatch.")
    seen: set[tuple[bool, int]] = set()
    for i, match in enumerate(team_match.results, start=1):
        validate_match_result(match, i)
        key = (match.is_singles, match.position)
        if key in seen:
            kind = "singles" if match.is_singles else "doubles"
            raise ValidationError(
                f"Team match {team_match.id!r} has two {kind} results at position"
                f" {match.position}."
            )
        seen.add(key)
