"""Timer package."""

from .messages import (
    SessionType,
    PresetType,
    Task,
    Snapshot,
    ROUNDS_PER_CYCLE,
    decode_message,
)
from .durations import PresetConfig, DEFAULT_PRESETS, resolve_duration
from .state import SessionState, reduce
from .dispatcher import CommandDispatcher
from .sync_requester import PeriodicSyncRequester, SYNC_INTERVAL_MS
from .engine import TimerCore, format_time, session_label, round_label

__all__ = [
    "SessionType",
    "PresetType",
    "Task",
    "Snapshot",
    "ROUNDS_PER_CYCLE",
    "decode_message",
    "PresetConfig",
    "DEFAULT_PRESETS",
    "resolve_duration",
    "SessionState",
    "reduce",
    "CommandDispatcher",
    "PeriodicSyncRequester",
    "SYNC_INTERVAL_MS",
    "TimerCore",
    "format_time",
    "session_label",
    "round_label",
]
