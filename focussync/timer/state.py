"""Local mirror of the remote timer, and the reducer that updates it.

The mirror is an immutable :class:`SessionState`; every transition goes
through :func:`reduce`, a pure ``(state, event) -> state`` function.

Events
------
SnapshotReceived   Authoritative overwrite from a ``timer_sync`` message.
StoppedReceived    ``timer_stopped``: stop and reset the clock locally.
PresetChanged      User picked another preset: recompute the clock locally.
CommandIssued      A command went out.  Never changes state; the change
                   only counts once a snapshot confirms it.
ChannelReset       The transport (re)connected or was swapped.  Forgets the
                   applied ``seq``; a restarted authority numbers from 0.

The reducer is deliberately permissive: a snapshot claiming a long break
in round 1 is applied as-is.  Ordering is last-write-wins by arrival,
except that a snapshot carrying ``seq`` older than the last applied
``seq`` is dropped.  The ``seq`` window only spans one connection.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Union

from .durations import Presets, resolve_duration
from .messages import (
    Command,
    PresetType,
    SessionType,
    Snapshot,
    Task,
)


DEFAULT_TIME_LEFT = 25 * 60


@dataclass(frozen=True)
class SessionState:
    time_left: int = DEFAULT_TIME_LEFT
    is_running: bool = False
    session_type: SessionType = SessionType.WORK
    round_number: int = 1
    preset_type: PresetType = PresetType.SHORT
    active_task: Optional[Task] = None
    applied_seq: Optional[int] = None


# ── events ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class SnapshotReceived:
    snapshot: Snapshot


@dataclass(frozen=True)
class StoppedReceived:
    pass


@dataclass(frozen=True)
class PresetChanged:
    preset_type: PresetType


@dataclass(frozen=True)
class CommandIssued:
    command: Command


@dataclass(frozen=True)
class ChannelReset:
    pass


Event = Union[
    SnapshotReceived, StoppedReceived, PresetChanged, CommandIssued, ChannelReset,
]


# ── reducer ───────────────────────────────────────────────────────────────


def is_stale(state: SessionState, snapshot: Snapshot) -> bool:
    """True when *snapshot* is older than the one already applied."""
    return (
        snapshot.seq is not None
        and state.applied_seq is not None
        and snapshot.seq < state.applied_seq
    )


def reduce(
    state: SessionState,
    event: Event,
    presets: Optional[Presets] = None,
) -> SessionState:
    """Return the state that follows *state* after *event*.

    *presets* is only consulted by the two local-recompute transitions.
    Returns *state* itself (same object) when nothing changes.
    """
    if isinstance(event, SnapshotReceived):
        return _apply_snapshot(state, event.snapshot)

    if isinstance(event, StoppedReceived):
        seconds = resolve_duration(presets, state.preset_type, state.session_type)
        if seconds is None:
            return replace(state, is_running=False)
        return replace(state, is_running=False, time_left=seconds)

    if isinstance(event, PresetChanged):
        seconds = resolve_duration(presets, event.preset_type, state.session_type)
        if seconds is None:
            return replace(state, preset_type=event.preset_type)
        return replace(state, preset_type=event.preset_type, time_left=seconds)

    if isinstance(event, CommandIssued):
        return state

    if isinstance(event, ChannelReset):
        if state.applied_seq is None:
            return state
        return replace(state, applied_seq=None)

    raise TypeError(f"unknown event: {event!r}")


def _apply_snapshot(state: SessionState, snapshot: Snapshot) -> SessionState:
    if is_stale(state, snapshot):
        return state

    changes = {
        "time_left": snapshot.remaining_time,
        "session_type": snapshot.session_type,
        "is_running": not snapshot.is_paused,
    }
    if snapshot.round_number is not None:
        changes["round_number"] = snapshot.round_number
    if snapshot.active_task is not None:
        changes["active_task"] = snapshot.active_task
    if snapshot.seq is not None:
        changes["applied_seq"] = snapshot.seq
    return replace(state, **changes)
