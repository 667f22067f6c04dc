"""Canonical session durations derived from the preset tables.

The remote authority resolves durations the same way; the client only
uses this for local resets (preset change, stop notification) so the
display does not wait for a round trip.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .messages import PresetType, SessionType


@dataclass(frozen=True)
class PresetConfig:
    """One preset's duration table, in minutes."""

    work_duration: int
    short_break: int
    long_break: int

    @classmethod
    def from_dict(cls, data: Mapping) -> "PresetConfig":
        return cls(
            work_duration=int(data["work_duration"]),
            short_break=int(data["short_break"]),
            long_break=int(data["long_break"]),
        )

    def minutes_for(self, session_type: SessionType) -> int:
        if session_type == SessionType.WORK:
            return self.work_duration
        if session_type == SessionType.SHORT_BREAK:
            return self.short_break
        return self.long_break


Presets = Mapping[PresetType, PresetConfig]

DEFAULT_PRESETS: dict[PresetType, PresetConfig] = {
    PresetType.SHORT: PresetConfig(work_duration=25, short_break=5, long_break=15),
    PresetType.LONG: PresetConfig(work_duration=50, short_break=10, long_break=30),
}


def resolve_duration(
    presets: Optional[Presets],
    preset_type: PresetType,
    session_type: SessionType,
) -> Optional[int]:
    """Seconds for *session_type* under *preset_type*, or ``None``.

    ``None`` means "no opinion": presets are not loaded yet, or the preset
    has no entry.  Callers keep their current remaining time in that case.
    """
    if not presets:
        return None
    config = presets.get(preset_type)
    if config is None:
        return None
    return config.minutes_for(session_type) * 60
