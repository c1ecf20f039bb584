"""Policy pack router: GET /policy-pack returns pack metadata and the sorted rule index."""

from typing import Annotated

from fastapi import APIRouter, Depends

from casework.api.dependencies import get_policy_pack
from casework.domain.models.policy import PolicyPack

router = APIRouter()


@router.get("")
async def get_pack(pack: Annotated[PolicyPack, Depends(get_policy_pack)]):
    return {
        "meta": pack.meta.model_dump(mode="json"),
        "rule_ids": sorted(pack.rule_index),
    }
