"""Person model: a registered account holder."""

from dataclasses import dataclass

from deed_ledger.models.base import PersonId


@dataclass
class Person:
    """Registered person with a spendable balance."""

    person_id: PersonId
    name: str
    balance: int  # 0 <= balance <= MAX_BALANCE
