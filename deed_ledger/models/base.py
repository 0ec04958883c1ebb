"""Base models shared across the ledger."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Hashable

# Balances, prices and amounts are unsigned 256-bit quantities.
MAX_BALANCE = 2**256 - 1

PersonId = Hashable
Deed = int


@dataclass
class Event:
    """Standard event envelope for streaming."""

    event_id: str
    event_type: str  # entity.action (e.g., transaction.recorded)
    event_time: datetime
    source: str  # Service/system that generated
    subject: str  # Entity key affected
    data: dict
    metadata: dict = field(default_factory=dict)
