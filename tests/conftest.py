from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.site_kiosk.site_kiosk.database.store import InMemoryStore
from src.site_kiosk.site_kiosk.visits.model import Declarations


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 1, 8, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def full_declarations() -> Declarations:
    """Everything the default site policy asks for."""
    return Declarations(
        ppe_worn=frozenset({"boots", "hivis", "hardhat"}),
        induction_confirmed=True,
        rams_confirmed=True,
        site_rules_acknowledged=True,
        notes="Delivery",
    )
