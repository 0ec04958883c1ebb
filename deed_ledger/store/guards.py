"""Precondition guards for registry operations.

Each guard inspects state and returns the error to raise, or ``None`` when
the condition holds.  Guards never mutate anything; the engine runs them in
order before touching state and raises the first failure.
"""

from __future__ import annotations

from typing import Callable, Hashable, Iterable

from deed_ledger.exceptions import (
    AlreadyExistsError,
    BalanceOverflowError,
    DeedLedgerError,
    InsufficientFundsError,
    InvalidAmountError,
    PersonNotFoundError,
    PropertyNotFoundError,
    SellerNotOwnerError,
)
from deed_ledger.models.base import MAX_BALANCE, Deed, PersonId
from deed_ledger.models.person import Person
from deed_ledger.models.property import Property

Guard = Callable[[], "DeedLedgerError | None"]


def first_failure(guards: Iterable[Guard]) -> DeedLedgerError | None:
    """Evaluate guards in order and return the first failure, if any.

    Guards after the first failure are not evaluated, so later guards may
    assume earlier ones passed.
    """
    for guard in guards:
        failure = guard()
        if failure is not None:
            return failure
    return None


def unsigned_amount(value: object, label: str) -> InvalidAmountError | None:
    """Value must be an int in ``[0, MAX_BALANCE]``."""
    if isinstance(value, bool) or not isinstance(value, int):
        return InvalidAmountError(f"{label} must be an integer, got {type(value).__name__}")
    if value < 0 or value > MAX_BALANCE:
        return InvalidAmountError(f"{label} {value} is outside [0, 2**256 - 1]")
    return None


def key_must_be_free(exists: Callable[[Hashable], bool], key: Hashable, kind: str) -> AlreadyExistsError | None:
    if exists(key):
        return AlreadyExistsError(f"{kind} {key} already exists")
    return None


def person_must_exist(
    exists: Callable[[PersonId], bool], person_id: PersonId
) -> PersonNotFoundError | None:
    if not exists(person_id):
        return PersonNotFoundError(person_id)
    return None


def property_must_exist(exists: Callable[[Deed], bool], deed: Deed) -> PropertyNotFoundError | None:
    if not exists(deed):
        return PropertyNotFoundError(deed)
    return None


def sufficient_funds(buyer: Person, amount: int) -> InsufficientFundsError | None:
    """Buyer must hold at least ``amount``."""
    if buyer.balance < amount:
        return InsufficientFundsError(buyer.person_id, buyer.balance, amount)
    return None


def credit_must_fit(buyer: Person, seller: Person, amount: int) -> BalanceOverflowError | None:
    """Seller balance after the credit must stay within ``MAX_BALANCE``.

    When buyer and seller are the same person the debit lands first, so the
    credit applies to the already-debited balance.
    """
    base = seller.balance - amount if seller.person_id == buyer.person_id else seller.balance
    if base + amount > MAX_BALANCE:
        return BalanceOverflowError(seller.person_id)
    return None


def seller_must_own(prop: Property, seller_id: PersonId) -> SellerNotOwnerError | None:
    if prop.owner_id != seller_id:
        return SellerNotOwnerError(seller_id, prop.owner_id, prop.deed)
    return None
