"""Domain-specific exceptions. Pure domain layer, no infrastructure."""

from typing import Optional


class DomainError(Exception):
    """Base for all domain-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DomainValidationError(DomainError):
    """Raised when domain validation rules are violated."""


class PolicyPackLoadError(DomainError):
    """Raised when a policy pack is missing, unreadable or malformed. Fatal at load time."""


class PolicyPackMismatchError(DomainError):
    """Raised when an oracle input names a policy pack other than the loaded one."""


class CitationValidationError(DomainValidationError):
    """Raised when a caller-supplied citation list is empty or names unknown ids."""


class UnknownScenarioError(DomainValidationError):
    """Raised when a scenario name has no registered generator."""


class ScriptStepFailedError(DomainError):
    """Raised by the runner when a scripted transition is rejected by the state machine."""

    def __init__(
        self,
        message: str,
        *,
        action: str,
        state: str,
        kind: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.action = action
        self.state = state
        self.kind = kind


class IncompleteScriptError(DomainError):
    """Raised when a script finishes without reaching a terminal case state."""
