"""Seeded synthetic case generators and the scenario registry."""

from collections.abc import Callable, Sequence

from casework.domain.exceptions import UnknownScenarioError
from casework.scenarios.appeal_reversal import (
    AppealReversalCase,
    AppealVariant,
    generate_appeal_reversal_cases,
)
from casework.scenarios.base import DEFAULT_POLICY_PACK_ID, GeneratedCase, ScenarioName
from casework.scenarios.missing_docs import (
    MissingDocsCase,
    MissingDocsVariant,
    generate_missing_docs_cases,
)

GENERATORS: dict[ScenarioName, Callable[..., Sequence[GeneratedCase]]] = {
    ScenarioName.MISSING_DOCS: generate_missing_docs_cases,
    ScenarioName.APPEAL_REVERSAL: generate_appeal_reversal_cases,
}


def resolve_scenario(scenario: str) -> ScenarioName:
    try:
        return ScenarioName(scenario)
    except ValueError as e:
        valid = ", ".join(s.value for s in ScenarioName)
        raise UnknownScenarioError(f"Unknown scenario '{scenario}'. Valid scenarios: {valid}") from e


def generate_cases(
    scenario: str,
    count: int,
    seed: int,
    *,
    policy_pack_id: str = DEFAULT_POLICY_PACK_ID,
) -> Sequence[GeneratedCase]:
    name = resolve_scenario(scenario)
    return GENERATORS[name](count, seed, policy_pack_id=policy_pack_id)


__all__ = [
    "AppealReversalCase",
    "AppealVariant",
    "GENERATORS",
    "GeneratedCase",
    "MissingDocsCase",
    "MissingDocsVariant",
    "ScenarioName",
    "generate_appeal_reversal_cases",
    "generate_cases",
    "generate_missing_docs_cases",
    "resolve_scenario",
]
