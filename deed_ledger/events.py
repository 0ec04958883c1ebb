"""Notification types emitted by the registry engine.

Every successful state change emits exactly one of these, synchronously and
in the order the change happens:

- ``register_person``      -> ``PersonRegistered``
- ``register_property``    -> ``PropertyRegistered``
- ``execute_transaction``  -> ``BalanceDebited``, ``BalanceCredited``,
  ``OwnershipChanged``, ``TransactionRecorded``
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, fields
from datetime import datetime
from typing import Callable, ClassVar

from deed_ledger.models.base import Deed, Event, PersonId

EVENT_SOURCE = "deed-ledger"

PERSON_REGISTERED = "person.registered"
PROPERTY_REGISTERED = "property.registered"
BALANCE_DEBITED = "balance.debited"
BALANCE_CREDITED = "balance.credited"
OWNERSHIP_CHANGED = "property.ownership_changed"
TRANSACTION_RECORDED = "transaction.recorded"

ALL_EVENT_TYPES = (
    PERSON_REGISTERED,
    PROPERTY_REGISTERED,
    BALANCE_DEBITED,
    BALANCE_CREDITED,
    OWNERSHIP_CHANGED,
    TRANSACTION_RECORDED,
)


@dataclass(frozen=True)
class LedgerEvent:
    """Base class for engine notifications."""

    event_type: ClassVar[str] = ""

    @property
    def subject(self) -> str:
        """Key of the entity the event is about."""
        raise NotImplementedError

    def payload(self) -> dict:
        """Return the event fields as a flat dict."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def to_envelope(self, source: str = EVENT_SOURCE) -> Event:
        """Wrap the event in the streaming envelope."""
        return Event(
            event_id=uuid.uuid4().hex,
            event_type=self.event_type,
            event_time=datetime.now(),
            source=source,
            subject=self.subject,
            data=self.payload(),
        )


@dataclass(frozen=True)
class PersonRegistered(LedgerEvent):
    event_type: ClassVar[str] = PERSON_REGISTERED

    person_id: PersonId
    name: str
    balance: int

    @property
    def subject(self) -> str:
        return str(self.person_id)


@dataclass(frozen=True)
class PropertyRegistered(LedgerEvent):
    event_type: ClassVar[str] = PROPERTY_REGISTERED

    deed: Deed
    owner_id: PersonId
    location: str
    price: int

    @property
    def subject(self) -> str:
        return str(self.deed)


@dataclass(frozen=True)
class BalanceDebited(LedgerEvent):
    event_type: ClassVar[str] = BALANCE_DEBITED

    person_id: PersonId
    amount: int

    @property
    def subject(self) -> str:
        return str(self.person_id)


@dataclass(frozen=True)
class BalanceCredited(LedgerEvent):
    event_type: ClassVar[str] = BALANCE_CREDITED

    person_id: PersonId
    amount: int

    @property
    def subject(self) -> str:
        return str(self.person_id)


@dataclass(frozen=True)
class OwnershipChanged(LedgerEvent):
    """Ownership of ``deed`` moved to ``new_owner_id``.

    ``old_owner_id`` is the seller named in the transaction, which is not
    necessarily the owner previously on record.
    """

    event_type: ClassVar[str] = OWNERSHIP_CHANGED

    new_owner_id: PersonId
    old_owner_id: PersonId
    deed: Deed

    @property
    def subject(self) -> str:
        return str(self.deed)


@dataclass(frozen=True)
class TransactionRecorded(LedgerEvent):
    event_type: ClassVar[str] = TRANSACTION_RECORDED

    deed: Deed
    buyer_id: PersonId
    seller_id: PersonId
    timestamp: datetime
    amount: int

    @property
    def subject(self) -> str:
        return str(self.deed)


EventListener = Callable[[LedgerEvent], None]
