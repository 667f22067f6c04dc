"""Tests for the channel base class and the WebSocket transport."""

from focussync.channel import Channel
from focussync.websocket_channel import WebSocketChannel

from helpers import FakeChannel, SignalCollector


class TestOnMessage:

    def test_handler_receives_text(self, channel):
        got = SignalCollector()
        channel.on_message(got)
        channel.deliver('{"type": "timer_stopped"}')
        assert got.items == ['{"type": "timer_stopped"}']

    def test_unsubscribe_stops_delivery(self, channel):
        got = SignalCollector()
        unsubscribe = channel.on_message(got)
        unsubscribe()
        channel.deliver("x")
        assert got.items == []

    def test_unsubscribe_is_idempotent(self, channel):
        unsubscribe = channel.on_message(SignalCollector())
        unsubscribe()
        unsubscribe()
        assert channel.receivers(channel.message_received) == 0

    def test_unsubscribe_only_removes_its_handler(self, channel):
        a, b = SignalCollector(), SignalCollector()
        unsub_a = channel.on_message(a)
        channel.on_message(b)
        unsub_a()
        channel.deliver("y")
        assert a.items == []
        assert b.items == ["y"]


class TestWebSocketChannel:

    def test_is_a_channel(self, qapp):
        ws = WebSocketChannel("ws://localhost:1/ws")
        assert isinstance(ws, Channel)
        assert ws.url == "ws://localhost:1/ws"

    def test_not_connected_before_open(self, qapp):
        assert WebSocketChannel("ws://localhost:1/ws").is_connected is False

    def test_socket_text_is_forwarded(self, qapp):
        ws = WebSocketChannel("ws://localhost:1/ws")
        got = SignalCollector()
        ws.on_message(got)
        ws._socket.textMessageReceived.emit('{"type": "timer_stopped"}')
        assert got.items == ['{"type": "timer_stopped"}']


def test_fake_channel_connection_signals(qapp):
    ch = FakeChannel(connected=False)
    up, down = SignalCollector(), SignalCollector()
    ch.connected.connect(up)
    ch.disconnected.connect(down)
    ch.set_connected(True)
    ch.set_connected(False)
    assert len(up) == 1 and len(down) == 1
