"""
Progress sink contract and the sinks shipped with the engine.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from app.scraping.logging_utils import log_event
from app.scraping.types import ProgressSnapshot

logger = logging.getLogger(__name__)


class ProgressSink(Protocol):
    """
    Observer invoked synchronously after every chunk and once on completion.

    Delivery is best-effort: exceptions raised here are logged by the engine
    and never abort a batch.
    """

    def publish(self, snapshot: ProgressSnapshot) -> None: ...


class LoggingProgressSink:
    """
    Writes each snapshot as a `batch_progress` structured log line.
    """

    def __init__(self, *, level: int = logging.INFO) -> None:
        self._level = level

    def publish(self, snapshot: ProgressSnapshot) -> None:
        log_event(logger, self._level, "batch_progress", **snapshot.to_dict())


class RecordingProgressSink:
    """
    Keeps every snapshot in memory, in delivery order.
    """

    def __init__(self) -> None:
        self.snapshots: list[ProgressSnapshot] = []

    def publish(self, snapshot: ProgressSnapshot) -> None:
        self.snapshots.append(snapshot)

    @property
    def latest(self) -> ProgressSnapshot | None:
        return self.snapshots[-1] if self.snapshots else None


class CallbackProgressSink:
    """
    Adapts a plain callable to the sink contract.
    """

    def __init__(self, callback: Callable[[ProgressSnapshot], None]) -> None:
        self._callback = callback

    def publish(self, snapshot: ProgressSnapshot) -> None:
        self._callback(snapshot)


class FanOutProgressSink:
    """
    Delivers each snapshot to several sinks; one failing sink does not
    starve the others.
    """

    def __init__(self, *sinks: ProgressSink) -> None:
        self._sinks = sinks

    def publish(self, snapshot: ProgressSnapshot) -> None:
        for sink in self._sinks:
            try:
                sink.publish(snapshot)
            except Exception as exc:
                log_event(
                    logger,
                    logging.WARNING,
                    "progress_sink_failed",
                    sink=type(sink).__name__,
                    chunk_index=snapshot.chunk_index,
                    error=str(exc),
                )
