"""Artifacts router: POST /artifacts/validate checks a tagged artifact payload."""

from typing import Any

from fastapi import APIRouter

from casework.domain.schemas.artifacts import validate_artifact

router = APIRouter()


@router.post("/validate")
async def validate(payload: dict[str, Any]):
    artifact = validate_artifact(payload)
    return {"valid": True, "artifact_type": artifact.artifact_type, "artifact": artifact.model_dump(mode="json")}
