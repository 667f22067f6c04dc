"""Shared test helpers for FocusSync."""

import json

from focussync.channel import Channel


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeChannel(Channel):
    """In-memory channel: records sends, delivers inbound frames on demand."""

    def __init__(self, connected: bool = True):
        super().__init__()
        self._connected = connected
        self.sent: list[str] = []

    @property
    def is_connected(self) -> bool:
        return self._connected

    def send(self, text: str) -> None:
        self.sent.append(text)

    # ── test controls ────────────────────────────────────────────────

    def set_connected(self, value: bool) -> None:
        self._connected = value
        if value:
            self.connected.emit()
        else:
            self.disconnected.emit()

    def deliver(self, payload) -> None:
        """Push one inbound frame; dicts are JSON-encoded first."""
        text = payload if isinstance(payload, str) else json.dumps(payload)
        self.message_received.emit(text)

    @property
    def sent_messages(self) -> list[dict]:
        return [json.loads(t) for t in self.sent]

    @property
    def sent_types(self) -> list[str]:
        return [m["type"] for m in self.sent_messages]


def sync_payload(**data) -> dict:
    """A ``timer_sync`` envelope with sensible defaults."""
    body = {
        "task_id": 7,
        "session_type": "work",
        "remaining_time": 1200,
        "is_paused": False,
    }
    body.update(data)
    return {"type": "timer_sync", "data": body}
