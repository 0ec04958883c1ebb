"""In-memory registry engine with referential integrity."""

from deed_ledger.store.registry import RegistryEngine
from deed_ledger.store.synchronized import SynchronizedRegistry

__all__ = ["RegistryEngine", "SynchronizedRegistry"]
