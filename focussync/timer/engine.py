"""Client-side timer core for FocusSync.

The remote session coordinator owns the timer.  ``TimerCore`` mirrors it:

    user intent → CommandDispatcher → channel → authority
    authority → timer_sync / timer_stopped → reduce() → SessionState → UI

Lifecycle
---------
attach(task)   Fresh default state, subscribe to the channel, start the
               periodic sync when connected.
detach()       Stop the periodic sync, unsubscribe, drop the state.

Known gaps
----------
- Commands are fire-and-forget.  A lost ``pause`` leaves the display
  running until the next snapshot says otherwise.
- ``timer_stopped`` resets the clock from the local preset table, which
  can differ from the authority's own idea until the next snapshot.
"""

from __future__ import annotations

import logging
from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal

from ..channel import Channel, Unsubscribe
from ..errors import CommandError, MalformedMessage
from .dispatcher import CommandDispatcher
from .durations import Presets
from .messages import (
    ROUNDS_PER_CYCLE,
    Command,
    PresetType,
    SessionType,
    Task,
    TimerSyncMessage,
    decode_message,
)
from .state import (
    ChannelReset,
    CommandIssued,
    Event,
    PresetChanged,
    SessionState,
    SnapshotReceived,
    StoppedReceived,
    is_stale,
    reduce,
)
from .sync_requester import SYNC_INTERVAL_MS, PeriodicSyncRequester

logger = logging.getLogger(__name__)


# ── display helpers ───────────────────────────────────────────────────────


def format_time(seconds: int) -> str:
    """``MM:SS``; minutes keep counting past 59."""
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


def session_label(session_type: SessionType, active_task: Optional[Task]) -> str:
    if session_type == SessionType.WORK:
        if active_task is not None:
            return f"Work Session - {active_task.title}"
        return "Work Session"
    if session_type == SessionType.SHORT_BREAK:
        return "Short Break"
    return "Long Break"


def round_label(round_number: int) -> str:
    return f"Round {round_number}/{ROUNDS_PER_CYCLE}"


# ── core ──────────────────────────────────────────────────────────────────


class TimerCore(QObject):
    """Mirror of the remote timer for one task context.

    Signals
    -------
    state_changed(state: SessionState)
        Emitted after every transition that changed the mirror.
    command_rejected(message: str)
        A user intent was refused locally (not connected, no task).
    message_rejected(reason: str)
        An inbound message failed validation and was dropped.
    """

    state_changed = pyqtSignal(object)
    command_rejected = pyqtSignal(str)
    message_rejected = pyqtSignal(str)

    def __init__(
        self,
        channel: Channel,
        presets: Optional[Presets] = None,
        parent: QObject | None = None,
        *,
        sync_interval_ms: int = SYNC_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._channel = channel
        self._presets = presets
        self._current_task: Optional[Task] = None

        self._state: Optional[SessionState] = None
        self._unsubscribe: Optional[Unsubscribe] = None
        self._watching_connection = False

        self._dispatcher = CommandDispatcher(channel)
        self._requester = PeriodicSyncRequester(
            channel,
            self._current_preset,
            self,
            interval_ms=sync_interval_ms,
        )

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> Optional[SessionState]:
        """The mirrored state, or ``None`` while detached."""
        return self._state

    @property
    def is_attached(self) -> bool:
        return self._state is not None

    @property
    def channel(self) -> Channel:
        return self._channel

    @property
    def presets(self) -> Optional[Presets]:
        return self._presets

    @property
    def current_task(self) -> Optional[Task]:
        return self._current_task

    @property
    def sync_requester(self) -> PeriodicSyncRequester:
        return self._requester

    # ══════════════════════════════════════════════════════════════════
    #  LIFECYCLE
    # ══════════════════════════════════════════════════════════════════

    def attach(self, task: Optional[Task] = None) -> None:
        """Start mirroring for a task context (replaces any previous one)."""
        if self.is_attached:
            self.detach()
        self._current_task = task
        self._state = SessionState(active_task=task)
        self._subscribe()
        logger.info("attached (task=%s)", task.id if task else None)
        self.state_changed.emit(self._state)

    def detach(self) -> None:
        """Tear down the periodic sync and the channel subscription."""
        self._requester.stop()
        self._unsubscribe_channel()
        if self._state is not None:
            self._state = None
            logger.info("detached")

    def set_channel(self, channel: Channel) -> None:
        """Swap the transport, moving the subscription to *channel*."""
        if channel is self._channel:
            return
        attached = self.is_attached
        if attached:
            self._requester.stop()
            self._unsubscribe_channel()
        self._channel = channel
        self._dispatcher.channel = channel
        self._requester.channel = channel
        if attached:
            self._dispatch(ChannelReset())
            self._subscribe()

    def set_current_task(self, task: Optional[Task]) -> None:
        """The task a ``start`` will be issued for.

        When unset, ``start`` falls back to the active task the authority
        last reported.
        """
        self._current_task = task

    def set_presets(self, presets: Optional[Presets]) -> None:
        """Replace the preset tables.  Takes effect on the next local reset."""
        self._presets = presets

    # ══════════════════════════════════════════════════════════════════
    #  LOCAL TRANSITIONS
    # ══════════════════════════════════════════════════════════════════

    def set_preset(self, preset_type: PresetType) -> None:
        """Switch preset and recompute the clock without a round trip."""
        if not self.is_attached:
            return
        self._dispatch(PresetChanged(preset_type))

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> bool:
        state = self._require_state()
        task = self._current_task
        if task is None:
            task = state.active_task
        return self._issue(
            lambda: self._dispatcher.start(
                task,
                state.session_type,
                state.time_left,
                state.preset_type,
            )
        )

    def pause(self) -> bool:
        self._require_state()
        return self._issue(self._dispatcher.pause)

    def resume(self) -> bool:
        self._require_state()
        return self._issue(self._dispatcher.resume)

    def stop(self) -> bool:
        self._require_state()
        return self._issue(self._dispatcher.stop)

    def skip(self) -> bool:
        """Single ``skip_to_next``; the authority pauses and advances."""
        state = self._require_state()
        return self._issue(lambda: self._dispatcher.skip_to_next(state.is_running))

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — channel
    # ══════════════════════════════════════════════════════════════════

    def _subscribe(self) -> None:
        self._unsubscribe_channel()
        self._unsubscribe = self._channel.on_message(self._on_message)
        self._channel.connected.connect(self._on_channel_connected)
        self._channel.disconnected.connect(self._on_channel_disconnected)
        self._watching_connection = True
        if self._channel.is_connected:
            self._requester.start()

    def _unsubscribe_channel(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._watching_connection:
            self._channel.connected.disconnect(self._on_channel_connected)
            self._channel.disconnected.disconnect(self._on_channel_disconnected)
            self._watching_connection = False

    def _on_channel_connected(self) -> None:
        if self.is_attached:
            self._dispatch(ChannelReset())
            self._requester.start()

    def _on_channel_disconnected(self) -> None:
        self._requester.stop()

    def _on_message(self, raw: str) -> None:
        if not self.is_attached:
            return
        try:
            message = decode_message(raw)
        except MalformedMessage as exc:
            logger.warning("dropping inbound message: %s", exc)
            self.message_rejected.emit(str(exc))
            return

        if isinstance(message, TimerSyncMessage):
            if is_stale(self._state, message.data):
                logger.debug(
                    "ignoring stale snapshot seq=%s (applied=%s)",
                    message.data.seq, self._state.applied_seq,
                )
                return
            self._dispatch(SnapshotReceived(message.data))
        else:
            logger.info("timer stopped by server")
            self._dispatch(StoppedReceived())

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — state
    # ══════════════════════════════════════════════════════════════════

    def _current_preset(self) -> PresetType:
        if self._state is None:
            return PresetType.SHORT
        return self._state.preset_type

    def _require_state(self) -> SessionState:
        if self._state is None:
            raise RuntimeError("TimerCore is not attached")
        return self._state

    def _dispatch(self, event: Event) -> None:
        new_state = reduce(self._state, event, self._presets)
        if new_state == self._state:
            return
        self._state = new_state
        self.state_changed.emit(new_state)

    def _issue(self, send) -> bool:
        try:
            command: Optional[Command] = send()
        except CommandError as exc:
            logger.warning("command rejected: %s", exc)
            self.command_rejected.emit(exc.user_message)
            return False
        if command is None:
            return False
        self._dispatch(CommandIssued(command))
        return True
