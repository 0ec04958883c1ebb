"""Tests for data generators."""

import re

import pytest

from deed_ledger.generators import PersonGenerator, PropertyGenerator

PERSON_ID_PATTERN = re.compile(r"^0x[0-9a-f]{40}$")


class TestPersonGenerator:
    """Tests for PersonGenerator."""

    def test_generate_person(self, seed: int) -> None:
        person = PersonGenerator(seed=seed).generate()

        assert PERSON_ID_PATTERN.match(person.person_id)
        assert person.name
        assert 0 <= person.balance <= 2_000_000

    def test_generate_batch_unique_ids(self, seed: int) -> None:
        persons = list(PersonGenerator(seed=seed).generate_batch(50))

        assert len(persons) == 50
        assert len({p.person_id for p in persons}) == 50

    def test_balance_range(self, seed: int) -> None:
        gen = PersonGenerator(seed=seed, balance_range=(10, 20))

        assert all(10 <= p.balance <= 20 for p in gen.generate_batch(20))

    def test_same_seed_same_output(self, seed: int) -> None:
        first = list(PersonGenerator(seed=seed).generate_batch(5))
        second = list(PersonGenerator(seed=seed).generate_batch(5))

        assert first == second

    @pytest.mark.parametrize("balance_range", [(-1, 10), (10, 5)])
    def test_invalid_balance_range(self, balance_range: tuple[int, int]) -> None:
        with pytest.raises(ValueError, match="Invalid balance range"):
            PersonGenerator(balance_range=balance_range)


class TestPropertyGenerator:
    """Tests for PropertyGenerator."""

    def test_generate_property(self, seed: int, seller_id: str) -> None:
        prop = PropertyGenerator(seed=seed).generate(seller_id)

        low, high = PropertyGenerator.DEED_RANGE
        assert low <= prop.deed <= high
        assert prop.owner_id == seller_id
        assert "\n" not in prop.location
        assert prop.price % 1000 == 0
        assert 150_000 <= prop.price <= 2_000_000

    def test_unique_deeds(self, seed: int, seller_id: str) -> None:
        gen = PropertyGenerator(seed=seed)
        deeds = [gen.generate(seller_id).deed for _ in range(200)]

        assert len(set(deeds)) == 200

    def test_deed_range_exhausted(self, seller_id: str) -> None:
        gen = PropertyGenerator(seed=1)
        gen.DEED_RANGE = (1, 3)

        for _ in range(3):
            gen.generate(seller_id)

        with pytest.raises(ValueError, match="exhausted"):
            gen.generate(seller_id)
