"""Wire vocabulary shared by the client and the remote timer authority.

Inbound
-------
``timer_sync``     Authoritative snapshot of the remote timer.
``timer_stopped``  The remote timer was stopped.

Outbound
--------
``start``, ``pause``, ``resume``, ``stop``, ``skip_to_next``,
``sync_request``: fire-and-forget commands, no acknowledgement.

Inbound envelopes are decoded through a discriminated union on ``type``;
anything that does not validate is reported as :class:`MalformedMessage`.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from ..errors import MalformedMessage


# ── enums ─────────────────────────────────────────────────────────────────


class SessionType(str, Enum):
    WORK = "work"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"


class PresetType(str, Enum):
    SHORT = "short"
    LONG = "long"


ROUNDS_PER_CYCLE = 4

TaskId = Union[int, str]


# ── shared payloads ───────────────────────────────────────────────────────


class Task(BaseModel):
    """A task as supplied by the task list (``{id, title}``)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: TaskId
    title: str


# ── inbound ───────────────────────────────────────────────────────────────


class Snapshot(BaseModel):
    """Body of a ``timer_sync`` message.

    ``round_number``, ``active_task`` and ``seq`` are optional; ``None``
    means "keep what you have".
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    task_id: Optional[TaskId]
    session_type: SessionType
    remaining_time: int = Field(ge=0)
    is_paused: bool
    round_number: Optional[int] = Field(default=None, ge=1, le=ROUNDS_PER_CYCLE)
    active_task: Optional[Task] = None
    seq: Optional[int] = Field(default=None, ge=0)


class TimerSyncMessage(BaseModel):
    type: Literal["timer_sync"]
    data: Snapshot


class TimerStoppedMessage(BaseModel):
    type: Literal["timer_stopped"]


InboundMessage = Annotated[
    Union[TimerSyncMessage, TimerStoppedMessage],
    Field(discriminator="type"),
]

_inbound_adapter: TypeAdapter = TypeAdapter(InboundMessage)


def decode_message(raw: str | bytes | Mapping) -> TimerSyncMessage | TimerStoppedMessage:
    """Parse and validate one inbound envelope.

    Accepts the raw JSON text off the wire or an already-parsed mapping.
    Raises :class:`MalformedMessage` for bad JSON, unknown ``type`` tags
    and payloads that violate the schema.
    """
    try:
        if isinstance(raw, (str, bytes, bytearray)):
            return _inbound_adapter.validate_json(raw)
        return _inbound_adapter.validate_python(raw)
    except ValidationError as exc:
        raise MalformedMessage(
            f"rejected inbound message ({exc.error_count()} error(s)): "
            f"{exc.errors()[0]['msg']}"
        ) from exc


# ── outbound ──────────────────────────────────────────────────────────────


class Command(BaseModel):
    """Base for every outbound command; ``type`` is fixed per subclass."""

    model_config = ConfigDict(frozen=True)

    def encode(self) -> str:
        return self.model_dump_json()


class StartCommand(Command):
    type: Literal["start"] = "start"
    task_id: TaskId
    session_type: SessionType
    duration: int = Field(ge=0)
    preset_type: PresetType


class PauseCommand(Command):
    type: Literal["pause"] = "pause"


class ResumeCommand(Command):
    type: Literal["resume"] = "resume"


class StopCommand(Command):
    type: Literal["stop"] = "stop"


class SkipToNextCommand(Command):
    type: Literal["skip_to_next"] = "skip_to_next"


class SyncRequestCommand(Command):
    type: Literal["sync_request"] = "sync_request"
    preset_type: PresetType
