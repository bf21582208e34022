"""Conversion between stored match records and engine types.

Set scores are stored as ``"<ours>-<theirs>"`` strings, empty when unset.
"""

import re
from datetime import date, datetime
from typing import Any, Mapping, Optional

from .types import (
    UNSET,
    IncompleteReason,
    MatchResult,
    Result,
    SetScore,
    TeamMatch,
)
from .validation import ValidationError, validate_match_result, validate_score_value

_SCORE_RE = re.compile(r"([0-9]+)-([0-9]+)")


def format_score(ours: Optional[int], theirs: Optional[int]) -> str:
    ours = validate_score_value(ours, "Our score")
    theirs = validate_score_value(theirs, "Their score")
    if ours is None or theirs is None:
        return ""
    return f"{ours}-{theirs}"


def format_set(score: SetScore) -> str:
    return format_score(score.ours, score.theirs)


def parse_score(text: Optional[str]) -> tuple[Optional[int], Optional[int]]:
    if text is None:
        return None, None
    if not isinstance(text, str):
        raise ValidationError(f"Set score must be a string (got {text!r}).")
    if text == "":
        return None, None
    m = _SCORE_RE.fullmatch(text)
    if not m:
        raise ValidationError(f"Set score {text!r} must look like '6-4'.")
    return int(m.group(1)), int(m.group(2))


def parse_set(text: Optional[str]) -> SetScore:
    ours, theirs = parse_score(text)
    if ours is None:
        return UNSET
    return SetScore(ours, theirs)


def _enum(enum_cls, value, label: str):
    if value is None or value == "":
        return None
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{label} must be one of {allowed} (got {value!r}).")


def _parse_date(value) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            pass
    raise ValidationError(f"Match date {value!r} is not an ISO date.")


def match_result_from_record(record: Mapping[str, Any]) -> MatchResult:
    """Build a ``MatchResult`` from a stored row.

    Accepts both ``set1score`` and ``set1_score`` spellings, as written by
    the insert and update paths respectively.
    """

    def score(slot: int) -> SetScore:
        for key in (f"set{slot}score", f"set{slot}_score"):
            if key in record:
                return parse_set(record[key])
        return UNSET

    for key in ("is_singles", "pos", "player1"):
        if key not in record:
            raise ValidationError(f"Match record is missing {key!r}.")

    player2 = record.get("player2")
    match = MatchResult(
        is_singles=bool(record["is_singles"]),
        position=record["pos"],
        player1_id=record["player1"],
        player2_id=None if player2 in (None, "") else player2,
        set1=score(1),
        set2=score(2),
        set3=score(3),
        incomplete_reason=_enum(
            IncompleteReason, record.get("incomplete_reason"), "Incomplete reason"
        ),
        result=_enum(Result, record.get("result"), "Result"),
        team_match_id=record.get("team_match_id"),
        match_date=_parse_date(record.get("match_date")),
    )
    validate_match_result(match)
    return match


def match_result_to_record(match: MatchResult) -> dict[str, Any]:
    return {
        "team_match_id": match.team_match_id,
        "is_singles": match.is_singles,
        "pos": match.position,
        "player1": match.player1_id,
        "player2": match.player2_id,
        "result": match.result.value if match.result else None,
        "set1score": format_set(match.set1),
        "set2score": format_set(match.set2),
        # set 3 is stored as NULL rather than "" when it wasn't played
        "set3score": format_set(match.set3) or None,
        "incomplete_reason": (
            match.incomplete_reason.value if match.incomplete_reason else None
        ),
        "match_date": match.match_date.isoformat() if match.match_date else None,
    }


def team_match_from_record(
    record: Mapping[str, Any], results: list[Mapping[str, Any]]
) -> TeamMatch:
    for key in ("id", "opponent_name"):
        if key not in record:
            raise ValidationError(f"Team match record is missing {key!r}.")
    return TeamMatch(
        id=record["id"],
        opponent_name=record["opponent_name"],
        match_date=_parse_date(record.get("match_date")),
        team_id=record.get("team_id"),
        results=[match_result_from_record(r) for r in results],
    )
