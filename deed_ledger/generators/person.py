"""Person generator."""

from __future__ import annotations

import random
from typing import Iterator

from deed_ledger.generators.base import BaseGenerator
from deed_ledger.models import Person


class PersonGenerator(BaseGenerator):
    """Generate synthetic persons with address-like ids."""

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "en_US",
        balance_range: tuple[int, int] = (0, 2_000_000),
    ) -> None:
        super().__init__(seed, locale)
        low, high = balance_range
        if low < 0 or high < low:
            raise ValueError(f"Invalid balance range: {balance_range}")
        self.balance_range = balance_range
        self._issued_ids: set[str] = set()

    def generate(self) -> Person:
        """Generate a single person.

        Returns
        -------
        Person
            Generated person with a unique ``0x``-prefixed 40-hex-digit id.
        """
        return self._generate_one()

    def generate_batch(self, count: int) -> Iterator[Person]:
        """Generate multiple persons.

        Parameters
        ----------
        count : int
            Number of persons to generate.

        Yields
        ------
        Person
            Generated persons.
        """
        for _ in range(count):
            yield self._generate_one()

    def _generate_one(self) -> Person:
        person_id = self._new_id()
        return Person(
            person_id=person_id,
            name=self.fake.name(),
            balance=random.randint(*self.balance_range),
        )

    def _new_id(self) -> str:
        while True:
            person_id = "0x" + self.fake.hexify(text="^" * 40)
            if person_id not in self._issued_ids:
                self._issued_ids.add(person_id)
                return person_id
