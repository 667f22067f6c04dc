"""Client settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/FocusSync/settings.json

Environment overrides (applied after the file is read):
    FOCUSSYNC_SERVER_URL   coordinator WebSocket URL
    FOCUSSYNC_LOG_LEVEL    logging level name
    FOCUSSYNC_TASK_ID      id of the task a start is issued for
    FOCUSSYNC_TASK_TITLE   its title (defaults to the id)

Usage::

    settings = load_settings()
    settings.default_preset = "long"
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, asdict, field, fields
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .timer.durations import DEFAULT_PRESETS, PresetConfig
from .timer.messages import PresetType, Task
from .timer.sync_requester import SYNC_INTERVAL_MS

logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "FocusSync"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"

ENV_SERVER_URL = "FOCUSSYNC_SERVER_URL"
ENV_LOG_LEVEL = "FOCUSSYNC_LOG_LEVEL"
ENV_TASK_ID = "FOCUSSYNC_TASK_ID"
ENV_TASK_TITLE = "FOCUSSYNC_TASK_TITLE"


def _default_presets() -> dict[str, dict[str, int]]:
    return {key.value: asdict(config) for key, config in DEFAULT_PRESETS.items()}


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── connection ────────────────────────────────────────────────────
    server_url: str = "ws://localhost:8000/ws/timer"
    sync_interval_ms: int = SYNC_INTERVAL_MS

    # ── timer ─────────────────────────────────────────────────────────
    # minutes, keyed by preset name
    presets: dict[str, dict[str, int]] = field(default_factory=_default_presets)
    default_preset: str = PresetType.SHORT.value

    # ── task ──────────────────────────────────────────────────────────
    # {"id": ..., "title": ...} of the task a start is issued for
    task: Optional[dict] = None

    # ── diagnostics ───────────────────────────────────────────────────
    log_level: str = "INFO"

    def preset_table(self) -> dict[PresetType, PresetConfig]:
        """``presets`` as typed configs.

        Unknown preset names are skipped; an incomplete or mistyped entry
        falls back to that preset's default table.
        """
        if not isinstance(self.presets, dict):
            logger.warning("ignoring presets: expected an object, using defaults")
            return dict(DEFAULT_PRESETS)
        table: dict[PresetType, PresetConfig] = {}
        for name, values in self.presets.items():
            try:
                preset = PresetType(name)
            except ValueError:
                logger.warning("ignoring unknown preset %r", name)
                continue
            try:
                table[preset] = PresetConfig.from_dict(values)
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("invalid preset %r (%r), using defaults", name, exc)
                table[preset] = DEFAULT_PRESETS[preset]
        return table

    def current_task(self) -> Optional[Task]:
        """The configured task, or ``None`` when absent or invalid."""
        if self.task is None:
            return None
        try:
            return Task.model_validate(self.task)
        except ValidationError as exc:
            logger.warning("ignoring invalid task %r: %s", self.task, exc.errors()[0]["msg"])
            return None

    def initial_preset(self) -> PresetType:
        try:
            return PresetType(self.default_preset)
        except ValueError:
            return PresetType.SHORT


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    settings = Settings()
    if SETTINGS_PATH.exists():
        try:
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("could not read %s, using defaults: %s", SETTINGS_PATH, exc)
        else:
            if not isinstance(data, dict):
                logger.warning("ignoring %s: expected a JSON object", SETTINGS_PATH)
                data = {}
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            settings = Settings(**filtered)

    if os.environ.get(ENV_SERVER_URL):
        settings.server_url = os.environ[ENV_SERVER_URL]
    if os.environ.get(ENV_LOG_LEVEL):
        settings.log_level = os.environ[ENV_LOG_LEVEL]
    if os.environ.get(ENV_TASK_ID):
        settings.task = {
            "id": os.environ[ENV_TASK_ID],
            "title": os.environ.get(ENV_TASK_TITLE) or os.environ[ENV_TASK_ID],
        }
    return settings


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
