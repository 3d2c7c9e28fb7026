"""
Cooperative cancellation for batch runs.
"""

from __future__ import annotations

import threading


class CancellationToken:
    """
    Thread-safe flag checked by the engine at chunk and item boundaries.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, seconds: float) -> bool:
        """
        Sleep up to `seconds`, returning early (True) once cancelled.
        """

        if seconds <= 0:
            return self._event.is_set()
        return self._event.wait(seconds)
