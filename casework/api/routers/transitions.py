"""Transitions router: POST /transitions runs one state-machine transition for a caller-supplied case."""

from dataclasses import asdict
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from casework.api.dependencies import get_metrics, get_policy_pack
from casework.domain.models.case import CaseData, PolicyFacts, TransitionContext
from casework.domain.models.policy import PolicyPack
from casework.domain.schemas.requests import TransitionRequest
from casework.domain.validators.citation_validator import validate_citations
from casework.observability.metrics import MetricsCollector
from casework.workflows.state_machine import transition

router = APIRouter()


@router.post("")
async def apply_transition(
    body: TransitionRequest,
    pack: Annotated[PolicyPack, Depends(get_policy_pack)],
    metrics: Annotated[MetricsCollector, Depends(get_metrics)],
):
    """
    Citations are validated against the loaded pack before the state machine runs.
    Rejected transitions return 409 with the failure kind and every guard result.
    """
    validate_citations(body.citations, pack.rule_index)
    case_data = CaseData(case_id=body.case_id, **body.case_data.model_dump())
    ctx = TransitionContext(
        case_id=body.case_id,
        current_state=body.current_state,
        role=body.role,
        agent_id=body.agent_id,
        timestamp=body.timestamp,
        case_data=case_data,
        policy=PolicyFacts.from_pack(pack),
    )
    result = transition(body.current_state, body.action, ctx)
    guard_results = [asdict(g) for g in result.guard_results]

    if not result.ok:
        metrics.increment("transitions_rejected", category=result.kind.value)
        return JSONResponse(
            status_code=409,
            content={
                "detail": result.message,
                "kind": result.kind.value,
                "guard_results": guard_results,
            },
        )

    metrics.increment("transitions_applied")
    return {
        "case_id": body.case_id,
        "from_state": body.current_state.value,
        "to_state": result.new_state.value,
        "action": body.action.value,
        "citations": body.citations,
        "guard_results": guard_results,
    }
