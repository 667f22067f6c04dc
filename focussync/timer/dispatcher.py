"""Turns user intents into outbound commands.

The dispatcher only *requests* changes.  It never touches
:class:`~focussync.timer.state.SessionState`; the next snapshot from the
authority is what makes a change effective.  Sends are fire-and-forget:
no acknowledgement, timeout or retry.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..channel import Channel
from ..errors import ConnectionUnavailable, NoTaskSelected
from .messages import (
    Command,
    PauseCommand,
    PresetType,
    ResumeCommand,
    SessionType,
    SkipToNextCommand,
    StartCommand,
    StopCommand,
    Task,
)

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """Validates preconditions and sends commands on a channel."""

    def __init__(self, channel: Channel) -> None:
        self._channel = channel

    @property
    def channel(self) -> Channel:
        return self._channel

    @channel.setter
    def channel(self, channel: Channel) -> None:
        self._channel = channel

    def start(
        self,
        task: Optional[Task],
        session_type: SessionType,
        time_left: int,
        preset_type: PresetType,
    ) -> StartCommand:
        self._require_connection()
        if task is None:
            raise NoTaskSelected("start requires an active task")
        command = StartCommand(
            task_id=task.id,
            session_type=session_type,
            duration=time_left,
            preset_type=preset_type,
        )
        self._send(command)
        return command

    def pause(self) -> PauseCommand:
        return self._send_simple(PauseCommand())

    def resume(self) -> ResumeCommand:
        return self._send_simple(ResumeCommand())

    def stop(self) -> StopCommand:
        return self._send_simple(StopCommand())

    def skip_to_next(self, is_running: bool) -> Optional[SkipToNextCommand]:
        """Ask the authority to pause and advance in one transition.

        No-op (returns ``None``) when the timer is not running; that check
        comes before the connection check.
        """
        if not is_running:
            logger.debug("skip ignored: timer not running")
            return None
        return self._send_simple(SkipToNextCommand())

    # ── internals ─────────────────────────────────────────────────────────

    def _require_connection(self) -> None:
        if not self._channel.is_connected:
            raise ConnectionUnavailable("channel is not connected")

    def _send_simple(self, command: Command) -> Command:
        self._require_connection()
        self._send(command)
        return command

    def _send(self, command: Command) -> None:
        self._channel.send(command.encode())
        logger.debug("sent %s", command.type)
