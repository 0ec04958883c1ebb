"""Property model for the deed registry."""

from dataclasses import dataclass

from deed_ledger.models.base import Deed, PersonId


@dataclass
class Property:
    """Real estate property identified by its deed number.

    ``price`` is informational only; transfers carry their own amount.
    """

    deed: Deed
    owner_id: PersonId
    location: str
    price: int
