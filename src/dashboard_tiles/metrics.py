"""Activation telemetry.

The registry only needs an ``ActivationLogger``; ``MetricsFeatureProvider``
is a concrete one that fans every event out to a list of log writers.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Protocol

logger = logging.getLogger(__name__)


class MetricsEvent(str, Enum):
    """Metrics categories emitted by the dashboard."""

    ACTION_SETTINGS_TILE_CLICK = "action_settings_tile_click"
    DASHBOARD_CATEGORY_VISIBLE = "dashboard_category_visible"


class ActivationLogger(Protocol):
    """Sink for resolved launches."""

    def record_launch(self, component_name: str) -> None:
        """Record a dispatched launch of ``component_name``."""
        ...


class LogWriter(Protocol):
    """A single metrics backend."""

    def visible(self, source: str, category: str) -> None:
        ...

    def hidden(self, category: str) -> None:
        ...

    def action(self, category: str, value: Any = None) -> None:
        ...

    def count(self, name: str, value: int) -> None:
        ...

    def histogram(self, name: str, bucket: int) -> None:
        ...


class LoggingLogWriter:
    """Writes metrics events to a standard library logger."""

    def __init__(self, log: Optional[logging.Logger] = None, level: int = logging.INFO):
        self.log = log or logging.getLogger("dashboard_tiles.events")
        self.level = level

    def visible(self, source: str, category: str) -> None:
        self.log.log(self.level, f"visible category={category} source={source}")

    def hidden(self, category: str) -> None:
        self.log.log(self.level, f"hidden category={category}")

    def action(self, category: str, value: Any = None) -> None:
        self.log.log(self.level, f"action category={category} value={value}")

    def count(self, name: str, value: int) -> None:
        self.log.log(self.level, f"count {name}={value}")

    def histogram(self, name: str, bucket: int) -> None:
        self.log.log(self.level, f"histogram {name} bucket={bucket}")


@dataclass
class RecordedEvent:
    kind: str
    name: str
    value: Any = None


@dataclass
class RecordingLogWriter:
    """Keeps events in memory, mostly for tests and diagnostics."""

    events: List[RecordedEvent] = field(default_factory=list)

    def visible(self, source: str, category: str) -> None:
        self.events.append(RecordedEvent("visible", category, source))

    def hidden(self, category: str) -> None:
        self.events.append(RecordedEvent("hidden", category))

    def action(self, category: str, value: Any = None) -> None:
        self.events.append(RecordedEvent("action", category, value))

    def count(self, name: str, value: int) -> None:
        self.events.append(RecordedEvent("count", name, value))

    def histogram(self, name: str, bucket: int) -> None:
        self.events.append(RecordedEvent("histogram", name, bucket))

    def actions(self, category: str) -> List[Any]:
        """Values of all recorded actions for ``category``."""
        return [e.value for e in self.events if e.kind == "action" and e.name == category]


class MetricsFeatureProvider:
    """Fans metrics events out to every installed log writer.

    A failing writer is logged and skipped; the remaining writers still
    receive the event.

    Example:
        >>> recorder = RecordingLogWriter()
        >>> metrics = MetricsFeatureProvider([recorder])
        >>> metrics.record_launch("pkg.A/.Foo")
        >>> recorder.actions(MetricsEvent.ACTION_SETTINGS_TILE_CLICK)
        ['pkg.A/.Foo']
    """

    def __init__(self, writers: Optional[List[LogWriter]] = None):
        """Initialize provider.

        Args:
            writers: Log writers; defaults to a single LoggingLogWriter
        """
        self.writers: List[LogWriter] = list(writers) if writers is not None else [LoggingLogWriter()]

    def add_writer(self, writer: LogWriter) -> None:
        self.writers.append(writer)

    def _emit(self, method: str, *args: Any) -> None:
        for writer in self.writers:
            try:
                getattr(writer, method)(*args)
            except Exception as e:
                logger.warning(f"Log writer {type(writer).__name__} failed on {method}: {e}", exc_info=True)

    def visible(self, source: str, category: str) -> None:
        self._emit("visible", source, category)

    def hidden(self, category: str) -> None:
        self._emit("hidden", category)

    def action(self, category: str, value: Any = None) -> None:
        self._emit("action", category, value)

    def count(self, name: str, value: int) -> None:
        self._emit("count", name, value)

    def histogram(self, name: str, bucket: int) -> None:
        self._emit("histogram", name, bucket)

    def record_launch(self, component_name: str) -> None:
        self.action(MetricsEvent.ACTION_SETTINGS_TILE_CLICK, component_name)
