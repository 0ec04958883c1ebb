"""Custom exception hierarchy for deed-ledger."""

from typing import Hashable


class DeedLedgerError(Exception):
    """Base exception for all deed-ledger errors."""


class AlreadyExistsError(DeedLedgerError):
    """Raised when registering a person id or deed that is already taken."""


class EntityNotFoundError(DeedLedgerError):
    """Raised when a referenced entity does not exist."""


class PersonNotFoundError(EntityNotFoundError):
    """Raised when a person id is not registered."""

    def __init__(self, person_id: Hashable) -> None:
        super().__init__(f"Person {person_id} not found")
        self.person_id = person_id


class PropertyNotFoundError(EntityNotFoundError):
    """Raised when a deed is not registered."""

    def __init__(self, deed: int) -> None:
        super().__init__(f"Property {deed} not found")
        self.deed = deed


class InvalidEntityStateError(DeedLedgerError):
    """Raised when an entity is in an invalid state for the operation."""


class InsufficientFundsError(InvalidEntityStateError):
    """Raised when a buyer's balance is below the transfer amount."""

    def __init__(self, person_id: Hashable, balance: int, amount: int) -> None:
        super().__init__(f"Person {person_id} has balance {balance}, needs {amount}")
        self.person_id = person_id
        self.balance = balance
        self.amount = amount


class BalanceOverflowError(InvalidEntityStateError):
    """Raised when crediting a person would exceed the maximum balance."""

    def __init__(self, person_id: Hashable) -> None:
        super().__init__(f"Crediting person {person_id} would overflow the balance")
        self.person_id = person_id


class SellerNotOwnerError(InvalidEntityStateError):
    """Raised when the named seller does not own the property (strict mode only)."""

    def __init__(self, seller_id: Hashable, owner_id: Hashable, deed: int) -> None:
        super().__init__(f"Seller {seller_id} is not the owner of property {deed} (owner: {owner_id})")
        self.seller_id = seller_id
        self.owner_id = owner_id
        self.deed = deed


class InvalidAmountError(DeedLedgerError):
    """Raised when a balance, price or amount is not a valid unsigned integer."""


class ConfigurationError(DeedLedgerError):
    """Raised when configuration is invalid or missing."""


class SinkError(DeedLedgerError):
    """Raised when a sink operation fails."""


class ReentrantOperationError(DeedLedgerError):
    """Raised when a mutating call starts while another one is still applying.

    Listeners run inside the operation that emitted the event, so they may
    read the registry but not change it.
    """

    def __init__(self, operation: str, active: str) -> None:
        super().__init__(f"{operation} called while {active} is in progress")
        self.operation = operation
        self.active = active
