"""JSON file sink for exporting events and table snapshots."""

import json
from pathlib import Path
from typing import Any, TextIO

from deed_ledger.events import LedgerEvent
from deed_ledger.exceptions import SinkError
from deed_ledger.sinks.serialization import to_dict

EVENTS_FILENAME = "events.jsonl"


class JsonFileSink:
    """Output events to a JSON Lines file and snapshots to JSON files."""

    def __init__(self, output_dir: str | Path, pretty: bool = False) -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write JSON files.
        pretty : bool
            Pretty-print snapshot JSON output. Event lines are always compact.
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.pretty = pretty
        self._counts: dict[str, int] = {}
        self._events_file: TextIO | None = None

    @property
    def events_path(self) -> Path:
        return self.output_dir / EVENTS_FILENAME

    def __call__(self, event: LedgerEvent) -> None:
        self.write_event(event)

    def write_event(self, event: LedgerEvent) -> None:
        """Append one event envelope to the events file."""
        if self._events_file is None:
            try:
                self._events_file = open(self.events_path, "a", encoding="utf-8")
            except OSError as exc:
                raise SinkError(f"Cannot open {self.events_path}: {exc}") from exc

        data = to_dict(event.to_envelope())
        self._events_file.write(json.dumps(data, ensure_ascii=False, default=str) + "\n")
        self._events_file.flush()
        self._counts[EVENTS_FILENAME] = self._counts.get(EVENTS_FILENAME, 0) + 1

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Write a batch of records to a JSON file."""
        file_path = self.output_dir / f"{entity_type}.json"

        data = [to_dict(record) for record in records]

        with open(file_path, "w", encoding="utf-8") as f:
            if self.pretty:
                json.dump(data, f, indent=2, ensure_ascii=False, default=str)
            else:
                json.dump(data, f, ensure_ascii=False, default=str)

        self._counts[entity_type] = len(records)

    def close(self) -> None:
        """Close the events file and print summary."""
        if self._events_file is not None:
            self._events_file.close()
            self._events_file = None
        print(f"JSON files written to: {self.output_dir}")
        for entity_type, count in self._counts.items():
            print(f"  {entity_type}: {count} records")
