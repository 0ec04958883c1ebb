"""Registry of persons, properties and property transfers."""

from deed_ledger.exceptions import (
    AlreadyExistsError,
    DeedLedgerError,
    InsufficientFundsError,
    PersonNotFoundError,
    PropertyNotFoundError,
    ReentrantOperationError,
)
from deed_ledger.store import RegistryEngine, SynchronizedRegistry

__version__ = "0.1.0"

__all__ = [
    "AlreadyExistsError",
    "DeedLedgerError",
    "InsufficientFundsError",
    "PersonNotFoundError",
    "PropertyNotFoundError",
    "ReentrantOperationError",
    "RegistryEngine",
    "SynchronizedRegistry",
    "__version__",
]
