"""Message channel between the client and the remote timer authority.

A :class:`Channel` is a ``QObject`` that carries JSON text both ways.
Concrete transports (see :mod:`focussync.websocket_channel`) emit
``connected`` / ``disconnected`` on state changes and
``message_received(text)`` for each inbound frame.

Subscriptions are explicit: :meth:`Channel.on_message` returns an
unsubscribe callable, and the timer core calls it before subscribing
again so handlers never pile up.
"""

from __future__ import annotations

from typing import Callable

from PyQt6.QtCore import QObject, pyqtSignal


MessageHandler = Callable[[str], None]
Unsubscribe = Callable[[], None]


class Channel(QObject):
    """Abstract bidirectional text channel."""

    connected = pyqtSignal()
    disconnected = pyqtSignal()
    message_received = pyqtSignal(str)

    @property
    def is_connected(self) -> bool:
        raise NotImplementedError

    def send(self, text: str) -> None:
        raise NotImplementedError

    def on_message(self, handler: MessageHandler) -> Unsubscribe:
        """Register *handler* for inbound text; return its unsubscribe.

        The returned callable is idempotent.
        """
        self.message_received.connect(handler)
        subscribed = True

        def unsubscribe() -> None:
            nonlocal subscribed
            if subscribed:
                subscribed = False
                self.message_received.disconnect(handler)

        return unsubscribe
