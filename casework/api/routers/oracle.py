"""Oracle router: POST /oracle/evaluate and POST /oracle/compare. Stateless."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from casework.api.dependencies import get_policy_pack
from casework.domain.exceptions import PolicyPackMismatchError
from casework.domain.models.oracle import OracleInput
from casework.domain.models.policy import PolicyPack
from casework.domain.schemas.requests import ComparisonRequest
from casework.oracle.comparison import compare_with_oracle
from casework.oracle.eligibility import compute_eligibility

router = APIRouter()


def _require_pack(oracle_input: OracleInput, pack: PolicyPack) -> None:
    if oracle_input.policy_pack_id != pack.pack_id:
        raise PolicyPackMismatchError(
            f"Unknown policy pack '{oracle_input.policy_pack_id}'; loaded pack is '{pack.pack_id}'"
        )


@router.post("/evaluate")
def evaluate(
    body: OracleInput,
    pack: Annotated[PolicyPack, Depends(get_policy_pack)],
):
    """Run the eligibility oracle for one household."""
    _require_pack(body, pack)
    output = compute_eligibility(body, pack.rules)
    return Response(content=output.model_dump_json(), media_type="application/json")


@router.post("/compare")
def compare(
    body: ComparisonRequest,
    pack: Annotated[PolicyPack, Depends(get_policy_pack)],
):
    """Evaluate the oracle and diff a supplied runner decision against it."""
    _require_pack(body.oracle_input, pack)
    output = compute_eligibility(body.oracle_input, pack.rules)
    result = compare_with_oracle(
        body.runner_decision,
        body.runner_benefit_amount,
        body.runner_citations,
        output,
    )
    return Response(content=result.model_dump_json(), media_type="application/json")
