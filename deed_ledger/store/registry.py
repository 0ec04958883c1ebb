"""Registry engine: persons, properties and the transaction log."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Callable, Iterator

from deed_ledger.config import LedgerConfig
from deed_ledger.events import (
    BalanceCredited,
    BalanceDebited,
    EventListener,
    LedgerEvent,
    OwnershipChanged,
    PersonRegistered,
    PropertyRegistered,
    TransactionRecorded,
)
from deed_ledger.exceptions import PersonNotFoundError, PropertyNotFoundError, ReentrantOperationError
from deed_ledger.models import Deed, Person, PersonId, Property, Transaction
from deed_ledger.store import guards

logger = logging.getLogger(__name__)


@dataclass
class RegistryEngine:
    """In-memory registry of persons, properties and transactions.

    Records live in append-only lists; each key maps to its list slot so
    existence checks and lookups never scan.  Every mutating operation runs
    all of its guards before changing anything, so a rejected call leaves
    the registry exactly as it was.

    Listeners are called while the emitting operation is still in progress.
    They may read the registry, but a mutating call made from a listener
    raises ``ReentrantOperationError``.

    Not thread-safe; see ``SynchronizedRegistry`` for multi-writer hosts.
    """

    config: LedgerConfig = field(default_factory=LedgerConfig)
    clock: Callable[[], datetime] = datetime.now

    # Tables
    _persons: list[Person] = field(default_factory=list, repr=False)
    _properties: list[Property] = field(default_factory=list, repr=False)
    _transactions: list[Transaction] = field(default_factory=list, repr=False)

    # Slot indexes and existence sets
    _person_index: dict[PersonId, int] = field(default_factory=dict, repr=False)
    _property_index: dict[Deed, int] = field(default_factory=dict, repr=False)
    _person_ids: set[PersonId] = field(default_factory=set, repr=False)
    _deeds: set[Deed] = field(default_factory=set, repr=False)

    # Relationship indexes
    _owner_deeds: dict[PersonId, list[Deed]] = field(default_factory=dict, repr=False)
    _property_transactions: dict[Deed, list[int]] = field(default_factory=dict, repr=False)
    _person_transactions: dict[PersonId, list[int]] = field(default_factory=dict, repr=False)

    _listeners: list[EventListener] = field(default_factory=list, repr=False)
    _applying: str | None = field(default=None, init=False, repr=False)
    failed_deliveries: int = field(default=0, init=False, repr=False)

    # -- Listeners -------------------------------------------------------

    def subscribe(self, listener: EventListener) -> None:
        """Register a callable that receives every emitted event."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        """Remove a previously subscribed listener."""
        self._listeners.remove(listener)

    def _emit(self, event: LedgerEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                # State is already committed; the remaining apply steps still run.
                self.failed_deliveries += 1
                logger.exception("Listener %r failed on %s", listener, event.event_type)

    @contextmanager
    def _operation(self, name: str) -> Iterator[None]:
        """Mark ``name`` as the one mutating call in progress."""
        if self._applying is not None:
            logger.warning("%s rejected: %s still in progress", name, self._applying)
            raise ReentrantOperationError(name, self._applying)
        self._applying = name
        try:
            yield
        finally:
            self._applying = None

    # -- Registration ----------------------------------------------------

    def register_person(self, person_id: PersonId, name: str, balance: int) -> Person:
        """Register a new person.

        Raises
        ------
        AlreadyExistsError
            If ``person_id`` is already registered.
        InvalidAmountError
            If ``balance`` is not an int in ``[0, MAX_BALANCE]``.
        ReentrantOperationError
            If called from a listener of another mutating call.
        """
        with self._operation("register_person"):
            self._check(
                lambda: guards.key_must_be_free(self.person_exists, person_id, "Person"),
                lambda: guards.unsigned_amount(balance, "balance"),
                operation="register_person",
            )

            person = Person(person_id=person_id, name=name, balance=balance)
            self._person_index[person_id] = len(self._persons)
            self._persons.append(person)
            self._person_ids.add(person_id)
            self._person_transactions[person_id] = []
            logger.debug("Registered person %s with balance %d", person_id, balance)

            self._emit(PersonRegistered(person_id=person_id, name=name, balance=balance))
            return replace(person)

    def register_property(self, deed: Deed, owner_id: PersonId, location: str, price: int) -> Property:
        """Register a new property.

        The owner does not have to be a registered person unless
        ``config.require_registered_owner`` is set.

        Raises
        ------
        AlreadyExistsError
            If ``deed`` is already registered.
        PersonNotFoundError
            If the owner is unregistered and registered owners are required.
        InvalidAmountError
            If ``price`` is not an int in ``[0, MAX_BALANCE]``.
        ReentrantOperationError
            If called from a listener of another mutating call.
        """
        with self._operation("register_property"):
            checks = [lambda: guards.key_must_be_free(self.property_exists, deed, "Property")]
            if self.config.require_registered_owner:
                checks.append(lambda: guards.person_must_exist(self.person_exists, owner_id))
            checks.append(lambda: guards.unsigned_amount(price, "price"))
            self._check(*checks, operation="register_property")

            prop = Property(deed=deed, owner_id=owner_id, location=location, price=price)
            self._property_index[deed] = len(self._properties)
            self._properties.append(prop)
            self._deeds.add(deed)
            self._owner_deeds.setdefault(owner_id, []).append(deed)
            self._property_transactions[deed] = []
            logger.debug("Registered property %s owned by %s", deed, owner_id)

            self._emit(PropertyRegistered(deed=deed, owner_id=owner_id, location=location, price=price))
            return replace(prop)

    # -- Transfers -------------------------------------------------------

    def execute_transaction(
        self,
        deed: Deed,
        seller_id: PersonId,
        buyer_id: PersonId,
        amount: int,
    ) -> Transaction:
        """Transfer ``deed`` to ``buyer_id`` and move ``amount`` to ``seller_id``.

        Guards run in a fixed order and the first failure is raised before
        any state changes: buyer exists, seller exists, property exists,
        amount is an int in ``[0, MAX_BALANCE]``, buyer can pay, seller can
        be credited.  The seller is not required to be the recorded owner
        unless ``config.require_seller_is_owner`` is set, and ``amount``
        need not match the property's price.

        Once the guards pass, the debit, credit, ownership change and log
        append are applied in that order, each followed immediately by its
        event.  Listeners see the registry between steps and must not
        mutate it.

        Returns
        -------
        Transaction
            The recorded transaction.
        """
        with self._operation("execute_transaction"):
            checks = [
                lambda: guards.person_must_exist(self.person_exists, buyer_id),
                lambda: guards.person_must_exist(self.person_exists, seller_id),
                lambda: guards.property_must_exist(self.property_exists, deed),
                lambda: guards.unsigned_amount(amount, "amount"),
                lambda: guards.sufficient_funds(self._person(buyer_id), amount),
                lambda: guards.credit_must_fit(self._person(buyer_id), self._person(seller_id), amount),
            ]
            if self.config.require_seller_is_owner:
                checks.append(lambda: guards.seller_must_own(self._property(deed), seller_id))
            self._check(*checks, operation="execute_transaction")

            return self._apply_transfer(deed, seller_id, buyer_id, amount)

    def _apply_transfer(self, deed: Deed, seller_id: PersonId, buyer_id: PersonId, amount: int) -> Transaction:
        buyer = self._person(buyer_id)
        seller = self._person(seller_id)
        prop = self._property(deed)

        buyer.balance -= amount
        self._emit(BalanceDebited(person_id=buyer_id, amount=amount))

        seller.balance += amount
        self._emit(BalanceCredited(person_id=seller_id, amount=amount))

        self._reassign_owner(prop, buyer_id)
        self._emit(OwnershipChanged(new_owner_id=buyer_id, old_owner_id=seller_id, deed=deed))

        transaction = Transaction(
            deed=deed,
            buyer_id=buyer_id,
            seller_id=seller_id,
            timestamp=self.clock(),
            amount=amount,
        )
        idx = len(self._transactions)
        self._transactions.append(transaction)
        self._property_transactions[deed].append(idx)
        self._person_transactions[buyer_id].append(idx)
        if seller_id != buyer_id:
            self._person_transactions[seller_id].append(idx)
        logger.info(
            "Property %s transferred from %s to %s for %d",
            deed,
            seller_id,
            buyer_id,
            amount,
            extra={"operation": "execute_transaction", "deed": deed},
        )

        self._emit(
            TransactionRecorded(
                deed=deed,
                buyer_id=buyer_id,
                seller_id=seller_id,
                timestamp=transaction.timestamp,
                amount=amount,
            )
        )
        return transaction

    def _reassign_owner(self, prop: Property, new_owner_id: PersonId) -> None:
        previous = self._owner_deeds.get(prop.owner_id)
        if previous is not None and prop.deed in previous:
            previous.remove(prop.deed)
            if not previous:
                del self._owner_deeds[prop.owner_id]
        prop.owner_id = new_owner_id
        self._owner_deeds.setdefault(new_owner_id, []).append(prop.deed)

    def _check(self, *checks: guards.Guard, operation: str) -> None:
        failure = guards.first_failure(checks)
        if failure is not None:
            logger.warning(
                "%s rejected: %s",
                operation,
                failure,
                extra={"operation": operation, "error": type(failure).__name__},
            )
            raise failure

    # -- Lookups ---------------------------------------------------------

    def person_exists(self, person_id: PersonId) -> bool:
        return person_id in self._person_ids

    def property_exists(self, deed: Deed) -> bool:
        return deed in self._deeds

    def get_person(self, person_id: PersonId) -> Person:
        """Return a copy of the person record."""
        if not self.person_exists(person_id):
            raise PersonNotFoundError(person_id)
        return replace(self._person(person_id))

    def get_property(self, deed: Deed) -> Property:
        """Return a copy of the property record."""
        if not self.property_exists(deed):
            raise PropertyNotFoundError(deed)
        return replace(self._property(deed))

    def _person(self, person_id: PersonId) -> Person:
        return self._persons[self._person_index[person_id]]

    def _property(self, deed: Deed) -> Property:
        return self._properties[self._property_index[deed]]

    # Query methods
    @property
    def transactions(self) -> tuple[Transaction, ...]:
        """All recorded transactions in insertion order."""
        return tuple(self._transactions)

    def persons(self) -> list[Person]:
        """Copies of all persons in registration order."""
        return [replace(p) for p in self._persons]

    def properties(self) -> list[Property]:
        """Copies of all properties in registration order."""
        return [replace(p) for p in self._properties]

    def get_property_transactions(self, deed: Deed) -> list[Transaction]:
        """Get all transactions for a property."""
        indices = self._property_transactions.get(deed, [])
        return [self._transactions[i] for i in indices]

    def get_person_transactions(self, person_id: PersonId) -> list[Transaction]:
        """Get all transactions where the person was buyer or seller."""
        indices = self._person_transactions.get(person_id, [])
        return [self._transactions[i] for i in indices]

    def get_owner_properties(self, owner_id: PersonId) -> list[Property]:
        """Get copies of all properties currently owned by ``owner_id``."""
        deeds = self._owner_deeds.get(owner_id, [])
        return [replace(self._property(d)) for d in deeds]

    def total_balance(self) -> int:
        """Sum of all person balances."""
        return sum(p.balance for p in self._persons)

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "persons": len(self._persons),
            "properties": len(self._properties),
            "transactions": len(self._transactions),
        }

    def snapshot(self) -> dict[str, list[Any]]:
        """Return copies of all three tables keyed by table name."""
        return {
            "persons": self.persons(),
            "properties": self.properties(),
            "transactions": list(self._transactions),
        }

    def export(self, sink: Any) -> None:
        """Write every table to a sink via its ``write_batch`` method."""
        for table, records in self.snapshot().items():
            sink.write_batch(table, records)
