"""Domain models for the deed ledger."""

from deed_ledger.models.base import MAX_BALANCE, Deed, Event, PersonId
from deed_ledger.models.person import Person
from deed_ledger.models.property import Property
from deed_ledger.models.transaction import Transaction

__all__ = [
    "Deed",
    "Event",
    "MAX_BALANCE",
    "Person",
    "PersonId",
    "Property",
    "Transaction",
]
