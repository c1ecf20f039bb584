"""Domain validators."""

from casework.domain.validators.citation_validator import (
    find_unknown_citations,
    validate_citations,
)

__all__ = ["find_unknown_citations", "validate_citations"]
