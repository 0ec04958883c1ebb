"""Configuration management for deed-ledger."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from deed_ledger.exceptions import ConfigurationError
from deed_ledger.logging import LOG_FORMATS

VALID_EVENT_SINKS = frozenset({"console", "json", "kafka"})


@dataclass
class LedgerConfig:
    """Registry engine behaviour.

    Both ``require_*`` flags default to the permissive behaviour: a property
    may name an unregistered owner, and any registered person may be named
    seller of any property.
    """

    require_registered_owner: bool = False
    require_seller_is_owner: bool = False
    thread_safe: bool = False


@dataclass
class KafkaConfig:
    """Kafka producer configuration."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    batch_size: int = 16384
    linger_ms: int = 5
    compression: str = "snappy"
    retries: int = 3

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "batch.size": self.batch_size,
            "linger.ms": self.linger_ms,
            "compression.type": self.compression,
            "retries": self.retries,
        }


@dataclass
class OutputConfig:
    """Output configuration."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class StreamConfig:
    """Event streaming configuration."""

    topic_prefix: str = "dev.registry"


@dataclass
class DeedLedgerConfig:
    """Main configuration for deed-ledger."""

    ledger: LedgerConfig = field(default_factory=LedgerConfig)
    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    stream: StreamConfig = field(default_factory=StreamConfig)
    event_sinks: list[str] = field(default_factory=list)
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    def __post_init__(self) -> None:
        unknown = sorted(set(self.event_sinks) - VALID_EVENT_SINKS)
        if unknown:
            raise ConfigurationError(f"Unknown event sinks: {', '.join(unknown)}")
        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(f"Unknown log format: {self.log_format}")

    @classmethod
    def from_env(cls) -> "DeedLedgerConfig":
        """Create config from environment variables."""
        import os

        def flag(name: str) -> bool:
            return os.getenv(name, "false").lower() == "true"

        ledger = LedgerConfig(
            require_registered_owner=flag("LEDGER_REQUIRE_REGISTERED_OWNER"),
            require_seller_is_owner=flag("LEDGER_REQUIRE_SELLER_IS_OWNER"),
            thread_safe=flag("LEDGER_THREAD_SAFE"),
        )

        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
            acks=os.getenv("KAFKA_ACKS", "all"),
        )

        output = OutputConfig(
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=flag("PRETTY_JSON"),
        )

        stream = StreamConfig(
            topic_prefix=os.getenv("TOPIC_PREFIX", "dev.registry"),
        )

        sinks_str = os.getenv("EVENT_SINKS", "")
        event_sinks = [s.strip() for s in sinks_str.split(",") if s.strip()]

        seed_str = os.getenv("SEED")
        try:
            seed = int(seed_str) if seed_str else None
        except ValueError as exc:
            raise ConfigurationError(f"SEED must be an integer, got {seed_str!r}") from exc

        return cls(
            ledger=ledger,
            kafka=kafka,
            output=output,
            stream=stream,
            event_sinks=event_sinks,
            seed=seed,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )
