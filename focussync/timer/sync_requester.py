"""Pull-based safety net: ask the authority for a snapshot every second.

Each ``sync_request`` also carries the client's current preset, because
the authority resolves durations from it too.
"""

from __future__ import annotations

import logging
from typing import Callable

from PyQt6.QtCore import QObject, QTimer

from ..channel import Channel
from .messages import PresetType, SyncRequestCommand

logger = logging.getLogger(__name__)

SYNC_INTERVAL_MS = 1000


class PeriodicSyncRequester(QObject):
    """Sends one ``sync_request`` per interval while running and connected."""

    def __init__(
        self,
        channel: Channel,
        preset_provider: Callable[[], PresetType],
        parent: QObject | None = None,
        *,
        interval_ms: int = SYNC_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._channel = channel
        self._preset_provider = preset_provider
        self._active = False

        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(interval_ms)
        self._qt_timer.timeout.connect(self._on_tick)

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def interval_ms(self) -> int:
        return self._qt_timer.interval()

    @property
    def channel(self) -> Channel:
        return self._channel

    @channel.setter
    def channel(self, channel: Channel) -> None:
        self._channel = channel

    def start(self) -> None:
        if self._active:
            return
        self._active = True
        self._qt_timer.start()
        logger.debug("periodic sync started (%d ms)", self._qt_timer.interval())

    def stop(self) -> None:
        """Cancel the timer.  Safe to call when already stopped."""
        self._qt_timer.stop()
        if self._active:
            self._active = False
            logger.debug("periodic sync stopped")

    def _on_tick(self) -> None:
        # A timeout already queued before stop() must not send.
        if not self._active or not self._channel.is_connected:
            return
        command = SyncRequestCommand(preset_type=self._preset_provider())
        self._channel.send(command.encode())
