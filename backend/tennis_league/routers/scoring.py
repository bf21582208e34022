from fastapi import APIRouter

from ..exceptions import http_problem
from ..scoring import match as match_rules
from ..scoring import sets as set_rules
from ..scoring.codec import parse_set
from ..scoring.types import UNSET
from ..scoring.validation import ValidationError
from ..schemas import (
    CompletionsIn,
    CompletionsOut,
    MatchResolveIn,
    MatchResolveOut,
    SetEvaluationIn,
    SetEvaluationOut,
)

# Resource-only prefix; no /api or /api/v0 here
router = APIRouter(prefix="/scoring", tags=["scoring"])


# POST /api/v0/scoring/sets/validate
@router.post("/sets/validate", response_model=SetEvaluationOut)
def validate_set(body: SetEvaluationIn) -> SetEvaluationOut:
    try:
        valid = set_rules.validate(
            body.slot, body.ours, body.theirs, incomplete=body.incomplete
        )
        outcome = set_rules.winner(body.slot, body.ours, body.theirs)
    except ValidationError as e:
        raise http_problem(
            status_code=422,
            detail=str(e),
            code="set_validation_error",
        )
    return SetEvaluationOut(valid=valid, outcome=outcome)


# POST /api/v0/scoring/sets/completions
@router.post("/sets/completions", response_model=CompletionsOut)
def set_completions(body: CompletionsIn) -> CompletionsOut:
    try:
        values = set_rules.valid_completions(
            body.slot, body.partner, incomplete=body.incomplete
        )
    except ValidationError as e:
        raise http_problem(
            status_code=422,
            detail=str(e),
            code="set_validation_error",
        )
    return CompletionsOut(values=sorted(values))


# POST /api/v0/scoring/matches/resolve
@router.post("/matches/resolve", response_model=MatchResolveOut)
def resolve_match(body: MatchResolveIn) -> MatchResolveOut:
    try:
        set1 = parse_set(body.set1)
        set2 = parse_set(body.set2)
        set3 = parse_set(body.set3) if body.set3 is not None else UNSET
        if body.incomplete_reason is None:
            checked = (set1, set2)
            if not match_rules.should_hide_third_set(set1, set2):
                checked += (set3,)
            for slot, score in enumerate(checked, start=1):
                if not set_rules.validate(slot, score.ours, score.theirs):
                    raise ValidationError(
                        f"Set {slot} has an invalid score combination"
                    )
        resolution = match_rules.resolve(
            set1,
            set2,
            set3,
            incomplete_reason=body.incomplete_reason,
            manual_result=body.manual_result,
        )
    except ValidationError as e:
        raise http_problem(
            status_code=422,
            detail=str(e),
            code="match_validation_error",
        )
    return MatchResolveOut(
        result=resolution.result,
        decidable=resolution.decidable,
        hideThirdSet=resolution.hide_third_set,
    )
