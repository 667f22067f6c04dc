"""WebSocket transport for :class:`~focussync.channel.Channel`.

Connection establishment only: reconnect policy belongs to whoever owns
the channel.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtNetwork import QAbstractSocket
from PyQt6.QtWebSockets import QWebSocket

from .channel import Channel

logger = logging.getLogger(__name__)


class WebSocketChannel(Channel):
    """A :class:`Channel` backed by ``QWebSocket``."""

    def __init__(self, url: str, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._url = url
        self._socket = QWebSocket()
        self._socket.setParent(self)
        self._socket.connected.connect(self._on_connected)
        self._socket.disconnected.connect(self._on_disconnected)
        self._socket.textMessageReceived.connect(self.message_received)
        self._socket.errorOccurred.connect(self._on_error)

    @property
    def url(self) -> str:
        return self._url

    @property
    def is_connected(self) -> bool:
        return self._socket.state() == QAbstractSocket.SocketState.ConnectedState

    def open(self) -> None:
        logger.info("Connecting to %s", self._url)
        self._socket.open(QUrl(self._url))

    def close(self) -> None:
        self._socket.close()

    def send(self, text: str) -> None:
        self._socket.sendTextMessage(text)

    # ── socket slots ──────────────────────────────────────────────────────

    def _on_connected(self) -> None:
        logger.info("Connected to %s", self._url)
        self.connected.emit()

    def _on_disconnected(self) -> None:
        logger.info("Disconnected from %s", self._url)
        self.disconnected.emit()

    def _on_error(self, error) -> None:
        logger.warning("WebSocket error on %s: %s", self._url, self._socket.errorString())
