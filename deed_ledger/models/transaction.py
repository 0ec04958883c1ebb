"""Transaction model: one recorded property transfer."""

from dataclasses import dataclass
from datetime import datetime

from deed_ledger.models.base import Deed, PersonId


@dataclass(frozen=True)
class Transaction:
    """Immutable record of a completed transfer.

    Records are not separately addressable; their position in the log is
    their only identity.
    """

    deed: Deed
    buyer_id: PersonId
    seller_id: PersonId
    timestamp: datetime  # wall clock, not guaranteed monotonic
    amount: int
