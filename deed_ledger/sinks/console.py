"""Console sink for debugging and development."""

import json
from typing import Any

from deed_ledger.events import LedgerEvent
from deed_ledger.sinks.serialization import to_dict


class ConsoleSink:
    """Print events and table snapshots to stdout.

    Instances are callable, so a sink can be passed straight to
    ``RegistryEngine.subscribe``.
    """

    def __init__(self, pretty: bool = True, max_records: int | None = None) -> None:
        """Initialize console sink.

        Parameters
        ----------
        pretty : bool
            Pretty-print JSON output.
        max_records : int | None
            Maximum records to print per batch (None for all).
        """
        self.pretty = pretty
        self.max_records = max_records
        self._counts: dict[str, int] = {}

    def __call__(self, event: LedgerEvent) -> None:
        self.write_event(event)

    def write_event(self, event: LedgerEvent) -> None:
        """Print a single event envelope as one JSON document."""
        print(self._dumps(to_dict(event.to_envelope())))
        self._counts[event.event_type] = self._counts.get(event.event_type, 0) + 1

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Write a batch of records to console."""
        print(f"\n{'='*60}")
        print(f"Entity: {entity_type} ({len(records)} records)")
        print("=" * 60)

        display_records = records[: self.max_records] if self.max_records else records

        for record in display_records:
            print(self._dumps(to_dict(record)))

        if self.max_records and len(records) > self.max_records:
            print(f"... and {len(records) - self.max_records} more records")

        self._counts[entity_type] = self._counts.get(entity_type, 0) + len(records)

    def close(self) -> None:
        """Print summary and close."""
        print(f"\n{'='*60}")
        print("Console Sink Summary")
        print("=" * 60)
        for entity_type, count in self._counts.items():
            print(f"  {entity_type}: {count} records")

    def _dumps(self, data: dict) -> str:
        if self.pretty:
            return json.dumps(data, indent=2, ensure_ascii=False, default=str)
        return json.dumps(data, ensure_ascii=False, default=str)
