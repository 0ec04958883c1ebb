"""Lock-wrapped registry for hosts with more than one writer."""

from __future__ import annotations

from threading import RLock
from typing import Any

from deed_ledger.events import EventListener
from deed_ledger.models import Deed, Person, PersonId, Property, Transaction
from deed_ledger.store.registry import RegistryEngine


class SynchronizedRegistry:
    """Serialize every engine call behind one re-entrant lock.

    Each public operation holds the lock for its whole run, including event
    delivery, so callers never observe a half-applied transfer.  The lock is
    re-entrant so listeners may read from the registry while being notified;
    a listener that tries to mutate it gets ``ReentrantOperationError`` from
    the engine, as with an unwrapped engine.

    Usage::

        registry = SynchronizedRegistry(RegistryEngine())
        registry.register_person("0xabc", "Alice", 1_000)
    """

    def __init__(self, engine: RegistryEngine | None = None) -> None:
        self._engine = engine if engine is not None else RegistryEngine()
        self._lock = RLock()

    @property
    def engine(self) -> RegistryEngine:
        return self._engine

    def subscribe(self, listener: EventListener) -> None:
        with self._lock:
            self._engine.subscribe(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        with self._lock:
            self._engine.unsubscribe(listener)

    def register_person(self, person_id: PersonId, name: str, balance: int) -> Person:
        with self._lock:
            return self._engine.register_person(person_id, name, balance)

    def register_property(self, deed: Deed, owner_id: PersonId, location: str, price: int) -> Property:
        with self._lock:
            return self._engine.register_property(deed, owner_id, location, price)

    def execute_transaction(
        self,
        deed: Deed,
        seller_id: PersonId,
        buyer_id: PersonId,
        amount: int,
    ) -> Transaction:
        with self._lock:
            return self._engine.execute_transaction(deed, seller_id, buyer_id, amount)

    def person_exists(self, person_id: PersonId) -> bool:
        with self._lock:
            return self._engine.person_exists(person_id)

    def property_exists(self, deed: Deed) -> bool:
        with self._lock:
            return self._engine.property_exists(deed)

    def get_person(self, person_id: PersonId) -> Person:
        with self._lock:
            return self._engine.get_person(person_id)

    def get_property(self, deed: Deed) -> Property:
        with self._lock:
            return self._engine.get_property(deed)

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        with self._lock:
            return self._engine.transactions

    def get_property_transactions(self, deed: Deed) -> list[Transaction]:
        with self._lock:
            return self._engine.get_property_transactions(deed)

    def get_person_transactions(self, person_id: PersonId) -> list[Transaction]:
        with self._lock:
            return self._engine.get_person_transactions(person_id)

    def get_owner_properties(self, owner_id: PersonId) -> list[Property]:
        with self._lock:
            return self._engine.get_owner_properties(owner_id)

    def persons(self) -> list[Person]:
        with self._lock:
            return self._engine.persons()

    def properties(self) -> list[Property]:
        with self._lock:
            return self._engine.properties()

    def total_balance(self) -> int:
        with self._lock:
            return self._engine.total_balance()

    @property
    def failed_deliveries(self) -> int:
        with self._lock:
            return self._engine.failed_deliveries

    def summary(self) -> dict[str, int]:
        with self._lock:
            return self._engine.summary()

    def snapshot(self) -> dict[str, list[Any]]:
        with self._lock:
            return self._engine.snapshot()

    def export(self, sink: Any) -> None:
        with self._lock:
            self._engine.export(sink)
