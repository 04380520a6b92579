"""
Collector registry.

A registry is a namespace of uniquely named collectors and produces the
aggregate exposition text for a scrape. A process-wide default registry is
created on first use; collectors constructed without an explicit
``registries`` argument join it.

Author: promdress maintainers
Version: 0.1.0
"""

import logging
import threading
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional

from ..exceptions import MetricCollisionError
from .exporter import render

if TYPE_CHECKING:
    from .collector import Collector

logger = logging.getLogger("promdress.metrics.registry")


class CollectorRegistry:
    """Registry of collectors keyed by metric name, in registration order."""

    def __init__(self):
        self._collectors: Dict[str, "Collector"] = {}

    def register(self, collector: "Collector") -> None:
        """
        Register a collector.

        Raises:
            MetricCollisionError: If a collector with the same name is registered
        """
        if collector.name in self._collectors:
            logger.debug(f"Rejected duplicate registration of {collector.name}")
            raise MetricCollisionError(collector.name)

        self._collectors[collector.name] = collector
        collector.registries.append(self)
        logger.debug(f"Registered {collector.get_type().value} {collector.name}")

    def unregister(self, collector: "Collector") -> None:
        """Unregister a collector; unknown collectors are ignored."""
        for index, registry in enumerate(collector.registries):
            if registry is self:
                del collector.registries[index]
                if self._collectors.get(collector.name) is collector:
                    del self._collectors[collector.name]
                logger.debug(f"Unregistered {collector.name}")
                return

    def get(self, name: str) -> Optional["Collector"]:
        """Get a collector by metric name."""
        return self._collectors.get(name)

    def names(self) -> List[str]:
        """List registered metric names in registration order."""
        return list(self._collectors.keys())

    def clear(self) -> None:
        """Unregister every collector."""
        for collector in list(self._collectors.values()):
            self.unregister(collector)

    def report(self) -> str:
        """Render every registered collector in the text exposition format."""
        return render(collector.collect() for collector in self._collectors.values())

    def __contains__(self, name: object) -> bool:
        return name in self._collectors

    def __iter__(self) -> Iterator["Collector"]:
        return iter(list(self._collectors.values()))

    def __len__(self) -> int:
        return len(self._collectors)


# Global registry instance
_default_registry: Optional[CollectorRegistry] = None
_registry_lock = threading.Lock()


def get_default_registry() -> CollectorRegistry:
    """Get the process-wide default registry, creating it on first use."""
    global _default_registry

    if _default_registry is None:
        with _registry_lock:
            if _default_registry is None:
                _default_registry = CollectorRegistry()

    return _default_registry


def set_default_registry(registry: Optional[CollectorRegistry]) -> Optional[CollectorRegistry]:
    """Replace the default registry and return the previous one."""
    global _default_registry

    with _registry_lock:
        previous = _default_registry
        _default_registry = registry

    return previous
