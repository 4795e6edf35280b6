"""Latest-known position tracking for one user."""

from __future__ import annotations

import asyncio
from typing import Callable

from neareat.domain.models import LocationSample
from neareat.logging import logger

LocationListener = Callable[[LocationSample], None]


class LocationProvider:
    """Keeps only the most recent :class:`LocationSample` and pushes updates.

    Failures are logged and leave the last sample in place; callers decide
    what a missing sample means.
    """

    def __init__(self, *, label: str | int | None = None, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._label = label
        self._loop = loop
        self._last: LocationSample | None = None
        self._listeners: list[LocationListener] = []

    def last_known(self) -> LocationSample | None:
        return self._last

    def subscribe(self, listener: LocationListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, sample: LocationSample) -> None:
        self._last = sample
        logger.debug(
            "location_updated",
            provider=self._label,
            latitude=sample.latitude,
            longitude=sample.longitude,
            accuracy=sample.horizontal_accuracy,
        )
        for listener in list(self._listeners):
            try:
                listener(sample)
            except Exception:
                logger.exception("location_listener_failed", provider=self._label)

    def publish_threadsafe(self, sample: LocationSample) -> None:
        """Hand a sample from another thread to the loop that owns this provider."""

        if self._loop is None:
            raise RuntimeError("LocationProvider is not bound to an event loop.")
        self._loop.call_soon_threadsafe(self.publish, sample)

    def report_failure(self, error: BaseException | str) -> None:
        logger.warning(
            "location_update_failed",
            provider=self._label,
            error=str(error),
            has_last_known=self._last is not None,
        )


__all__ = ["LocationListener", "LocationProvider"]
