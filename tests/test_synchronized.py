"""Tests for the lock-wrapped registry."""

import threading

import pytest

from deed_ledger.events import LedgerEvent
from deed_ledger.exceptions import InsufficientFundsError, ReentrantOperationError
from deed_ledger.models import MAX_BALANCE
from deed_ledger.store import RegistryEngine, SynchronizedRegistry


@pytest.fixture
def registry() -> SynchronizedRegistry:
    registry = SynchronizedRegistry()
    registry.register_person("0xa", "A", 1_000)
    registry.register_person("0xb", "B", 1_000)
    registry.register_property(1, "0xa", "Lot 1", 100)
    return registry


class TestSynchronizedRegistry:
    """Tests for SynchronizedRegistry."""

    def test_wraps_given_engine(self) -> None:
        engine = RegistryEngine()
        registry = SynchronizedRegistry(engine)

        registry.register_person("0xa", "A", 1)

        assert registry.engine is engine
        assert engine.person_exists("0xa")

    def test_delegates_reads(self, registry: SynchronizedRegistry) -> None:
        tx = registry.execute_transaction(1, "0xa", "0xb", 10)

        assert registry.person_exists("0xa")
        assert registry.property_exists(1)
        assert registry.get_person("0xb").balance == 990
        assert registry.get_property(1).owner_id == "0xb"
        assert registry.transactions == (tx,)
        assert registry.get_property_transactions(1) == [tx]
        assert registry.get_person_transactions("0xa") == [tx]
        assert [p.deed for p in registry.get_owner_properties("0xb")] == [1]
        assert len(registry.persons()) == 2
        assert len(registry.properties()) == 1
        assert registry.total_balance() == 2_000
        assert registry.summary() == {"persons": 2, "properties": 1, "transactions": 1}
        assert set(registry.snapshot()) == {"persons", "properties", "transactions"}

    def test_errors_propagate(self, registry: SynchronizedRegistry) -> None:
        with pytest.raises(InsufficientFundsError):
            registry.execute_transaction(1, "0xa", "0xb", 5_000)

    def test_listener_can_read_during_emit(self, registry: SynchronizedRegistry) -> None:
        seen: list[int] = []

        def listener(event: LedgerEvent) -> None:
            seen.append(registry.get_person("0xb").balance)

        registry.subscribe(listener)
        registry.execute_transaction(1, "0xa", "0xb", 10)
        registry.unsubscribe(listener)

        assert seen == [990, 990, 990, 990]

    def test_listener_cannot_mutate_during_emit(self) -> None:
        registry = SynchronizedRegistry()
        registry.register_person("0xs", "Seller", MAX_BALANCE - 10)
        registry.register_person("0xb", "Buyer", 100)
        registry.register_person("0xx", "Other", 100)
        registry.register_property(1, "0xs", "Lot 1", 10)
        registry.register_property(2, "0xs", "Lot 2", 5)
        errors: list[Exception] = []

        def listener(event: LedgerEvent) -> None:
            if event.event_type == "balance.debited" and event.person_id == "0xb":
                try:
                    registry.execute_transaction(2, "0xs", "0xx", 5)
                except ReentrantOperationError as exc:
                    errors.append(exc)

        registry.subscribe(listener)
        registry.execute_transaction(1, "0xs", "0xb", 10)

        assert len(errors) == 1
        assert registry.get_person("0xs").balance == MAX_BALANCE
        assert registry.get_property(2).owner_id == "0xs"
        assert len(registry.transactions) == 1

    def test_failed_deliveries(self, registry: SynchronizedRegistry) -> None:
        def broken(event: LedgerEvent) -> None:
            raise RuntimeError("sink down")

        registry.subscribe(broken)
        registry.execute_transaction(1, "0xa", "0xb", 10)

        assert registry.failed_deliveries == 4
        assert registry.get_property(1).owner_id == "0xb"

    def test_concurrent_transfers_conserve_balance(self, registry: SynchronizedRegistry) -> None:
        total = registry.total_balance()

        def worker(seller: str, buyer: str) -> None:
            for _ in range(200):
                try:
                    registry.execute_transaction(1, seller, buyer, 3)
                except InsufficientFundsError:
                    pass

        threads = [
            threading.Thread(target=worker, args=("0xa", "0xb")),
            threading.Thread(target=worker, args=("0xb", "0xa")),
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert registry.total_balance() == total
        assert len(registry.transactions) == 400
