"""Citation validation against a policy pack's rule index. Raises CitationValidationError."""

from collections.abc import Iterable, Sequence

from casework.domain.exceptions import CitationValidationError


def find_unknown_citations(citations: Iterable[str], rule_index: frozenset[str]) -> list[str]:
    """Unknown ids in the order first seen, without duplicates."""
    unknown: list[str] = []
    for citation in citations:
        if citation not in rule_index and citation not in unknown:
            unknown.append(citation)
    return unknown


def validate_citations(citations: Sequence[str], rule_index: frozenset[str]) -> None:
    """Require at least one citation and every citation to be a known rule, SLA or source id."""
    if not citations:
        raise CitationValidationError("At least one citation is required")
    unknown = find_unknown_citations(citations, rule_index)
    if unknown:
        raise CitationValidationError(f"Unknown ruleIds: {', '.join(unknown)}")
