"""Shared fixtures: the packaged policy pack, loaded once per session."""

from datetime import date

import pytest

from casework.config.settings import PACKAGED_POLICY_PACKS
from casework.domain.models.oracle import HouseholdMember, OracleInput
from casework.infrastructure.policy_pack_loader import load_policy_pack

PACK_ID = "snap-illinois-fy2026-v1"


@pytest.fixture(scope="session")
def policy_pack():
    return load_policy_pack(PACKAGED_POLICY_PACKS / PACK_ID)


@pytest.fixture(scope="session")
def rules(policy_pack):
    return policy_pack.rules


@pytest.fixture
def make_oracle_input():
    """Build an OracleInput with sensible defaults; override any field by keyword."""

    def _make(**overrides) -> OracleInput:
        size = overrides.pop("household_size", 1)
        fields = {
            "household_size": size,
            "household_members": [HouseholdMember(age=35) for _ in range(size)],
            "application_date": date(2026, 1, 15),
            "policy_pack_id": PACK_ID,
        }
        fields.update(overrides)
        return OracleInput(**fields)

    return _make
