"""Output sinks for ledger events and table snapshots."""

from deed_ledger.sinks.console import ConsoleSink
from deed_ledger.sinks.json_file import JsonFileSink
from deed_ledger.sinks.kafka import KafkaSink

__all__ = ["ConsoleSink", "JsonFileSink", "KafkaSink"]
