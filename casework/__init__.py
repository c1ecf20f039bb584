"""SNAP casework simulation harness: state machine, eligibility oracle, comparator, scenario runner."""

__version__ = "0.1.0"
