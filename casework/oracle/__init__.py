"""Eligibility oracle and oracle comparator. Pure, synchronous, no I/O."""

from casework.oracle.comparison import compare_with_oracle
from casework.oracle.eligibility import compute_eligibility

__all__ = ["compare_with_oracle", "compute_eligibility"]
