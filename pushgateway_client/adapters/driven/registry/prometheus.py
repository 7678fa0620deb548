"""Registry adapter serializing a prometheus_client registry."""

from __future__ import annotations

import asyncio
import logging
from functools import lru_cache

from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, CollectorRegistry, generate_latest
from prometheus_client.openmetrics.exposition import (
    CONTENT_TYPE_LATEST as OPENMETRICS_CONTENT_TYPE,
)
from prometheus_client.openmetrics.exposition import generate_latest as generate_openmetrics

from pushgateway_client.ports.errors import SerializationError
from pushgateway_client.ports.registry import RegistryPort

__all__ = ["PrometheusRegistry", "default_registry"]

logger = logging.getLogger(__name__)


class PrometheusRegistry(RegistryPort):
    """Expose a ``CollectorRegistry`` as a push payload source.

    Collection runs in a worker thread: custom collectors may block
    while gathering their samples.
    """

    def __init__(self, registry: CollectorRegistry | None = None, *, openmetrics: bool = False) -> None:
        """Initialize registry adapter.

        Args:
            registry: Registry to serialize; the global one when omitted.
            openmetrics: Emit OpenMetrics instead of the Prometheus text format.
        """
        self.registry = registry if registry is not None else REGISTRY
        self.openmetrics = openmetrics
        self.content_type = OPENMETRICS_CONTENT_TYPE if openmetrics else CONTENT_TYPE_LATEST

    async def metrics(self) -> str:
        """Serialize the registry.

        Returns:
            Exposition text in the configured format.

        Raises:
            SerializationError: If a collector fails.
        """
        generate = generate_openmetrics if self.openmetrics else generate_latest
        try:
            payload = await asyncio.to_thread(generate, self.registry)
        except Exception as e:
            raise SerializationError(f"Failed to serialize registry: {e}") from e
        return payload.decode("utf-8")


@lru_cache(maxsize=1)
def default_registry() -> PrometheusRegistry:
    """Return the process-wide registry used when none is supplied.

    Returns:
        Adapter bound to ``prometheus_client.REGISTRY``.
    """
    logger.debug("Binding gateway client to the global prometheus registry")
    return PrometheusRegistry(REGISTRY)
