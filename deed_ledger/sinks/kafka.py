"""Kafka sink for streaming ledger events to Kafka topics."""

import json
import logging
from dataclasses import dataclass
from typing import Any

from confluent_kafka import Producer

from deed_ledger.config import KafkaConfig
from deed_ledger.events import LedgerEvent
from deed_ledger.models.base import Event
from deed_ledger.sinks.serialization import to_dict

logger = logging.getLogger(__name__)

DEFAULT_TOPIC_PREFIX = "dev.registry"


@dataclass
class ProducerStats:
    """Track producer delivery statistics."""

    sent: int = 0
    delivered: int = 0
    failed: int = 0

    @property
    def success_rate(self) -> float:
        """Calculate success rate."""
        total = self.delivered + self.failed
        return self.delivered / total if total > 0 else 0.0


class KafkaSink:
    """Publish ledger events to Kafka, one topic per event type.

    Events go to ``<topic_prefix>.<event_type>`` keyed by the event subject,
    so every event about one person or deed lands on the same partition in
    emission order.
    """

    def __init__(self, config: KafkaConfig | str, topic_prefix: str = DEFAULT_TOPIC_PREFIX) -> None:
        """Initialize Kafka sink.

        Parameters
        ----------
        config : KafkaConfig | str
            Producer configuration or bootstrap servers string.
        topic_prefix : str
            Prefix prepended to every event topic.
        """
        if isinstance(config, str):
            config = KafkaConfig(bootstrap_servers=config)

        self.config = config
        self.topic_prefix = topic_prefix
        self.producer = self._create_producer()
        self.stats = ProducerStats()

    def _create_producer(self) -> Producer:
        """Create Kafka producer with configuration."""
        return Producer(self.config.to_dict())

    def _delivery_callback(self, err: Any, msg: Any) -> None:
        """Handle delivery reports."""
        if err:
            self.stats.failed += 1
            logger.error("Delivery failed: %s", err)
        else:
            self.stats.delivered += 1
            logger.debug("Delivered to %s[%d]@%d", msg.topic(), msg.partition(), msg.offset())

    def topic_for(self, event_type: str) -> str:
        """Topic name for an event type."""
        return f"{self.topic_prefix}.{event_type}"

    def __call__(self, event: LedgerEvent) -> None:
        self.write_event(event)

    def write_event(self, event: LedgerEvent) -> None:
        """Publish one event envelope."""
        envelope = event.to_envelope()
        self.send(self.topic_for(envelope.event_type), envelope, key=envelope.subject)

    def send(self, topic: str, record: Any, key: str | None = None) -> None:
        """Send a single record to Kafka topic."""
        if key is None and isinstance(record, Event):
            key = record.subject

        value = json.dumps(to_dict(record), ensure_ascii=False, default=str).encode("utf-8")

        self.producer.produce(
            topic=topic,
            key=key.encode("utf-8") if key else None,
            value=value,
            callback=self._delivery_callback,
        )
        self.stats.sent += 1
        self.producer.poll(0)

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Write a batch of snapshot records to ``<topic_prefix>.<entity_type>``."""
        topic = self.topic_for(entity_type)
        logger.info("Writing batch to %s: %d records", topic, len(records))

        for record in records:
            self.send(topic, record)

        self.flush()
        logger.info("Batch complete: sent=%d, delivered=%d, failed=%d",
                    self.stats.sent, self.stats.delivered, self.stats.failed)

    def flush(self, timeout: float = 30.0) -> None:
        """Flush pending messages."""
        self.producer.flush(timeout)

    def close(self) -> None:
        """Flush and close the producer."""
        self.flush()
        logger.info(
            "Kafka sink closed: sent=%d, delivered=%d, failed=%d",
            self.stats.sent,
            self.stats.delivered,
            self.stats.failed,
        )
