"""Case workflow: state machine and transition guards."""

from casework.workflows.guards import GUARDS, check_guards
from casework.workflows.state_machine import (
    TERMINAL_STATES,
    TRANSITION_TABLE,
    next_state,
    transition,
)

__all__ = [
    "GUARDS",
    "TERMINAL_STATES",
    "TRANSITION_TABLE",
    "check_guards",
    "next_state",
    "transition",
]
