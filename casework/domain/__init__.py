"""Domain layer: models, schemas, validators, exceptions. Pure business logic only."""

from casework.domain.exceptions import (
    CitationValidationError,
    DomainError,
    DomainValidationError,
    IncompleteScriptError,
    PolicyPackLoadError,
    PolicyPackMismatchError,
    ScriptStepFailedError,
    UnknownScenarioError,
)

__all__ = [
    "CitationValidationError",
    "DomainError",
    "DomainValidationError",
    "IncompleteScriptError",
    "PolicyPackLoadError",
    "PolicyPackMismatchError",
    "ScriptStepFailedError",
    "UnknownScenarioError",
]
