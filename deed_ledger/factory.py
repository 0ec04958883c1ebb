"""Wire an engine, its lock and its event sinks from configuration."""

from __future__ import annotations

import logging
from typing import Any

from deed_ledger.config import DeedLedgerConfig
from deed_ledger.exceptions import ConfigurationError
from deed_ledger.logging import setup_logging
from deed_ledger.scenarios import MarketScenario
from deed_ledger.store import RegistryEngine, SynchronizedRegistry

logger = logging.getLogger(__name__)


def build_sinks(config: DeedLedgerConfig) -> list[Any]:
    """Instantiate the sinks named in ``config.event_sinks``, in order."""
    sinks: list[Any] = []
    for name in config.event_sinks:
        if name == "console":
            from deed_ledger.sinks.console import ConsoleSink

            sinks.append(ConsoleSink(pretty=config.output.pretty_json))
        elif name == "json":
            from deed_ledger.sinks.json_file import JsonFileSink

            sinks.append(JsonFileSink(config.output.json_output_dir, pretty=config.output.pretty_json))
        elif name == "kafka":
            from deed_ledger.sinks.kafka import KafkaSink

            sinks.append(KafkaSink(config.kafka, topic_prefix=config.stream.topic_prefix))
        else:
            raise ConfigurationError(f"Unknown event sink: {name}")
    return sinks


def create_engine(
    config: DeedLedgerConfig | None = None,
    sinks: list[Any] | None = None,
) -> RegistryEngine | SynchronizedRegistry:
    """Create a registry engine subscribed to its sinks.

    Applies ``config.log_level`` and ``config.log_format`` to the process
    logging before building anything.

    Parameters
    ----------
    config : DeedLedgerConfig | None
        Configuration; defaults to ``DeedLedgerConfig()``.
    sinks : list[Any] | None
        Listeners to subscribe. When omitted they are built from
        ``config.event_sinks``.

    Returns
    -------
    RegistryEngine | SynchronizedRegistry
        The engine, wrapped in a lock when ``config.ledger.thread_safe``.
    """
    config = config or DeedLedgerConfig()
    setup_logging(config.log_level, config.log_format)

    if sinks is None:
        sinks = build_sinks(config)

    engine = RegistryEngine(config=config.ledger)
    for sink in sinks:
        engine.subscribe(sink)

    logger.info(
        "Created registry engine (thread_safe=%s, sinks=%d)",
        config.ledger.thread_safe,
        len(sinks),
    )

    if config.ledger.thread_safe:
        return SynchronizedRegistry(engine)
    return engine


def create_scenario(
    config: DeedLedgerConfig | None = None,
    sinks: list[Any] | None = None,
    **kwargs: Any,
) -> MarketScenario:
    """Create a market scenario over a configured engine, seeded by ``config.seed``.

    Extra keyword arguments (``num_persons``, ``num_trades``, ...) are passed
    to ``MarketScenario``.
    """
    config = config or DeedLedgerConfig()
    engine = create_engine(config, sinks)
    return MarketScenario(seed=config.seed, engine=engine, **kwargs)
