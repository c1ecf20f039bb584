"""Policy pack loader: reads the four JSON tables of a pack directory into an immutable PolicyPack."""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from casework.domain.exceptions import PolicyPackLoadError
from casework.domain.models.policy import (
    CitationCatalog,
    PackMeta,
    PolicyPack,
    PolicyRules,
    SlaTable,
)

logger = logging.getLogger(__name__)

PACK_FILES = ("pack.json", "rules.json", "sla.json", "citations.json")
ID_KEYS = frozenset({"rule_id", "sla_id", "citation_id"})


def extract_ids(node: Any) -> set[str]:
    """Collect every rule_id, sla_id and citation_id value anywhere in a JSON tree."""
    ids: set[str] = set()
    if isinstance(node, dict):
        for key, value in node.items():
            if key in ID_KEYS and isinstance(value, str):
                ids.add(value)
            else:
                ids |= extract_ids(value)
    elif isinstance(node, list):
        for item in node:
            ids |= extract_ids(item)
    return ids


def _read_json(path: Path) -> Any:
    try:
        with path.open(encoding="utf-8") as fh:
            return json.load(fh)
    except FileNotFoundError as e:
        raise PolicyPackLoadError(f"Policy pack file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise PolicyPackLoadError(f"Policy pack file is not valid JSON: {path}: {e}") from e


def load_policy_pack(directory: Path | str) -> PolicyPack:
    """
    Load and validate a policy pack. Any missing file or schema mismatch raises
    PolicyPackLoadError; callers load once and pass the pack explicitly.
    """
    pack_dir = Path(directory)
    raw = {name: _read_json(pack_dir / name) for name in PACK_FILES}

    rule_index: set[str] = set()
    for name in ("rules.json", "sla.json", "citations.json"):
        rule_index |= extract_ids(raw[name])

    try:
        pack = PolicyPack(
            meta=PackMeta.model_validate(raw["pack.json"]),
            rules=PolicyRules.model_validate(raw["rules.json"]),
            sla=SlaTable.model_validate(raw["sla.json"]),
            citations=CitationCatalog.model_validate(raw["citations.json"]),
            rule_index=frozenset(rule_index),
        )
    except ValidationError as e:
        raise PolicyPackLoadError(f"Policy pack at {pack_dir} failed validation: {e}") from e

    logger.info(
        "policy_pack_loaded",
        extra={"pack_id": pack.pack_id, "rule_count": len(pack.rule_index)},
    )
    return pack
