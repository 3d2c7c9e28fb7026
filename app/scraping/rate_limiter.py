"""
Fixed-delay request pacing for profile fetches.
"""

from __future__ import annotations

import time
from collections.abc import Callable

from app.scraping.cancellation import CancellationToken


class RequestPacer:
    """
    Applies the fixed inter-item and inter-chunk delays.

    The delays are a hard floor: they are applied after failed items as well
    as successful ones, and there is no adaptive throttling.
    """

    def __init__(
        self,
        *,
        item_delay_seconds: float,
        chunk_delay_seconds: float,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        self._item_delay_seconds = max(0.0, item_delay_seconds)
        self._chunk_delay_seconds = max(0.0, chunk_delay_seconds)
        self._sleep = sleep

    @property
    def item_delay_seconds(self) -> float:
        return self._item_delay_seconds

    @property
    def chunk_delay_seconds(self) -> float:
        return self._chunk_delay_seconds

    def after_item(self, cancel_token: CancellationToken | None = None) -> None:
        self._pause(self._item_delay_seconds, cancel_token)

    def after_chunk(self, cancel_token: CancellationToken | None = None) -> None:
        self._pause(self._chunk_delay_seconds, cancel_token)

    def _pause(self, seconds: float, cancel_token: CancellationToken | None) -> None:
        if seconds <= 0:
            return
        if self._sleep is not None:
            self._sleep(seconds)
        elif cancel_token is not None:
            cancel_token.wait(seconds)
        else:
            time.sleep(seconds)
