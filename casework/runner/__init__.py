"""Scenario runner: scripted replay, oracle review, run results."""

from casework.runner.case_runner import CaseRunner, evaluate_sla_breaches, run_scenario
from casework.runner.scripts import ACTION_CITATIONS, PLAYBOOKS, ScriptStep

__all__ = [
    "ACTION_CITATIONS",
    "CaseRunner",
    "PLAYBOOKS",
    "ScriptStep",
    "evaluate_sla_breaches",
    "run_scenario",
]
