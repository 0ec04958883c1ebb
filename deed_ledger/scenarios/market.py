"""Market scenario: a seeded population trading properties."""

import logging
import random
from collections import Counter
from typing import Any

from deed_ledger.exceptions import DeedLedgerError
from deed_ledger.generators import PersonGenerator, PropertyGenerator
from deed_ledger.store import RegistryEngine, SynchronizedRegistry

logger = logging.getLogger(__name__)


class MarketScenario:
    """Populate a registry and run random property sales against it.

    This scenario creates:
    - Persons with random balances
    - Properties, each owned by a random registered person
    - Sales where the current owner sells to another person at roughly
      the listed price; some bids deliberately exceed the buyer's balance
      and are rejected by the engine
    """

    def __init__(
        self,
        num_persons: int = 50,
        num_properties: int = 20,
        num_trades: int = 100,
        overbid_rate: float = 0.1,
        seed: int | None = None,
        engine: RegistryEngine | SynchronizedRegistry | None = None,
    ) -> None:
        """Initialize market scenario.

        Parameters
        ----------
        num_persons : int
            Number of persons to register (at least 2).
        num_properties : int
            Number of properties to register.
        num_trades : int
            Number of sales to attempt.
        overbid_rate : float
            Fraction of sales bid above the buyer's balance (0.0 to 1.0).
        seed : int | None
            Random seed for reproducibility.
        engine : RegistryEngine | SynchronizedRegistry | None
            Engine to populate; a fresh one is created when omitted.
        """
        if num_persons < 2:
            raise ValueError("A market needs at least two persons")
        if not 0.0 <= overbid_rate <= 1.0:
            raise ValueError(f"overbid_rate must be within [0, 1], got {overbid_rate}")

        self.num_persons = num_persons
        self.num_properties = num_properties
        self.num_trades = num_trades
        self.overbid_rate = overbid_rate
        self.seed = seed

        if seed is not None:
            random.seed(seed)

        self.engine = engine if engine is not None else RegistryEngine()
        self._person_gen = PersonGenerator(seed=seed)
        self._property_gen = PropertyGenerator(seed=seed)
        self.rejections: Counter[str] = Counter()

    def generate(self) -> RegistryEngine | SynchronizedRegistry:
        """Register the population and run all sales.

        Returns
        -------
        RegistryEngine | SynchronizedRegistry
            Engine holding the resulting state.
        """
        logger.info(
            "Starting market scenario: %d persons, %d properties, %d trades",
            self.num_persons,
            self.num_properties,
            self.num_trades,
        )

        person_ids = []
        for person in self._person_gen.generate_batch(self.num_persons):
            self.engine.register_person(person.person_id, person.name, person.balance)
            person_ids.append(person.person_id)

        deeds = []
        for _ in range(self.num_properties):
            prop = self._property_gen.generate(random.choice(person_ids))
            self.engine.register_property(prop.deed, prop.owner_id, prop.location, prop.price)
            deeds.append(prop.deed)

        logger.info("Registered %d persons and %d properties", len(person_ids), len(deeds))

        if deeds:
            for _ in range(self.num_trades):
                self._attempt_sale(random.choice(deeds), person_ids)

        logger.info(
            "Market scenario complete: %d transactions, %d rejected",
            len(self.engine.transactions),
            sum(self.rejections.values()),
        )
        return self.engine

    def _attempt_sale(self, deed: int, person_ids: list[Any]) -> None:
        prop = self.engine.get_property(deed)
        seller_id = prop.owner_id
        buyer_id = random.choice([p for p in person_ids if p != seller_id])
        buyer = self.engine.get_person(buyer_id)

        if random.random() < self.overbid_rate:
            amount = buyer.balance + random.randint(1, max(1, prop.price))
        else:
            amount = min(buyer.balance, int(prop.price * random.uniform(0.8, 1.2)))

        try:
            self.engine.execute_transaction(deed, seller_id, buyer_id, amount)
        except DeedLedgerError as exc:
            self.rejections[type(exc).__name__] += 1

    def export(self, sinks: list[Any]) -> None:
        """Export the resulting tables to sinks.

        Parameters
        ----------
        sinks : list[Any]
            Sink instances exposing ``write_batch``.
        """
        for sink in sinks:
            self.engine.export(sink)

        logger.info("Exported registry to %d sinks", len(sinks))
