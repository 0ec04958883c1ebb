"""Scenarios for generating realistic registry activity."""

from deed_ledger.scenarios.market import MarketScenario

__all__ = ["MarketScenario"]
