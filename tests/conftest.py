"""Pytest configuration and fixtures."""

from datetime import datetime

import pytest

from deed_ledger.events import LedgerEvent
from deed_ledger.store import RegistryEngine

FIXED_TIME = datetime(2024, 5, 1, 12, 0, 0)


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def buyer_id() -> str:
    """Sample buyer id."""
    return "0x00000000000000000000000000000000000000a1"


@pytest.fixture
def seller_id() -> str:
    """Sample seller id."""
    return "0x00000000000000000000000000000000000000b2"


@pytest.fixture
def sample_deed() -> int:
    """Sample deed number."""
    return 123456


@pytest.fixture
def fixed_time() -> datetime:
    """Timestamp returned by the engine clock."""
    return FIXED_TIME


@pytest.fixture
def engine(fixed_time: datetime) -> RegistryEngine:
    """Fresh engine with a fixed clock."""
    return RegistryEngine(clock=lambda: fixed_time)


@pytest.fixture
def recorded_events(engine: RegistryEngine) -> list[LedgerEvent]:
    """List that receives every event the engine emits."""
    events: list[LedgerEvent] = []
    engine.subscribe(events.append)
    return events


@pytest.fixture
def market(engine: RegistryEngine, buyer_id: str, seller_id: str, sample_deed: int) -> RegistryEngine:
    """Buyer with 1,000,000, seller with 500,000, and a deed owned by the seller."""
    engine.register_person(buyer_id, "Alice", 1_000_000)
    engine.register_person(seller_id, "Sam", 500_000)
    engine.register_property(sample_deed, seller_id, "12 Harbour Rd", 500_000)
    return engine
