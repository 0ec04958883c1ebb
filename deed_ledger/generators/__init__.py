"""Synthetic data generators for persons and properties."""

from deed_ledger.generators.person import PersonGenerator
from deed_ledger.generators.property import PropertyGenerator

__all__ = ["PersonGenerator", "PropertyGenerator"]
