"""Property generator."""

from __future__ import annotations

import random

from deed_ledger.generators.base import BaseGenerator
from deed_ledger.models import PersonId, Property


class PropertyGenerator(BaseGenerator):
    """Generate synthetic properties with unique six-digit deeds."""

    DEED_RANGE = (100000, 999999)

    def __init__(self, seed: int | None = None, locale: str = "en_US") -> None:
        super().__init__(seed, locale)
        self._issued_deeds: set[int] = set()

    def generate(self, owner_id: PersonId) -> Property:
        """Generate a property.

        Parameters
        ----------
        owner_id : PersonId
            Owner recorded on the property.

        Returns
        -------
        Property
            Generated property.
        """
        price = random.randint(150, 2000) * 1000

        return Property(
            deed=self._new_deed(),
            owner_id=owner_id,
            location=self.fake.address().replace("\n", ", "),
            price=price,
        )

    def _new_deed(self) -> int:
        low, high = self.DEED_RANGE
        if len(self._issued_deeds) > high - low:
            raise ValueError("Deed range exhausted")
        while True:
            deed = random.randint(low, high)
            if deed not in self._issued_deeds:
                self._issued_deeds.add(deed)
                return deed
