"""Timer card bound to a :class:`~focussync.timer.engine.TimerCore`.

Layout (top → bottom):
    - Round label + Short / Long preset toggles
    - Time display with the skip arrow beside it
    - Session label ("Work Session - <task>", "Short Break", ...)
    - Start, or Pause + Resume while running; Stop always
    - Status line for rejected commands

The widget only renders the mirrored state and forwards clicks; every
change to the clock comes back through ``state_changed``.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QFrame,
)

from ..timer.engine import TimerCore, format_time, session_label, round_label
from ..timer.messages import PresetType
from ..timer.state import SessionState


class TimerWidget(QWidget):
    """The timer card."""

    def __init__(self, core: TimerCore, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._core = core
        self._build_ui()
        self._connect_signals()
        if core.state is not None:
            self._on_state_changed(core.state)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(32, 24, 32, 28)
        layout.setSpacing(0)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        # ── header: round + preset toggles ───────────────────────────
        header = QHBoxLayout()
        self._round_label = QLabel(round_label(1), card)
        header.addWidget(self._round_label)
        header.addStretch(1)

        self._short_btn = QPushButton("Short", card)
        self._short_btn.setCheckable(True)
        self._long_btn = QPushButton("Long", card)
        self._long_btn.setCheckable(True)
        header.addWidget(self._short_btn)
        header.addWidget(self._long_btn)
        layout.addLayout(header)

        layout.addSpacing(16)

        # ── time + skip ──────────────────────────────────────────────
        time_row = QHBoxLayout()
        time_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._time_label = QLabel(format_time(0), card)
        self._time_label.setObjectName("timeDisplay")
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._time_label.setStyleSheet("font-size: 48px; font-weight: bold;")
        time_row.addWidget(self._time_label)

        self._skip_btn = QPushButton("→", card)
        self._skip_btn.setObjectName("skipButton")
        self._skip_btn.setToolTip("Skip to the next session")
        time_row.addWidget(self._skip_btn)
        layout.addLayout(time_row)

        self._session_label = QLabel("", card)
        self._session_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._session_label)

        layout.addSpacing(24)

        # ── main controls ────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(16)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._start_btn = QPushButton("Start", card)
        self._start_btn.setObjectName("primaryButton")
        self._pause_btn = QPushButton("Pause", card)
        self._resume_btn = QPushButton("Resume", card)
        self._stop_btn = QPushButton("Stop", card)
        self._stop_btn.setObjectName("dangerButton")

        for btn in (self._start_btn, self._pause_btn, self._resume_btn, self._stop_btn):
            btn_row.addWidget(btn)
        layout.addLayout(btn_row)

        layout.addSpacing(12)

        self._status_label = QLabel("", card)
        self._status_label.setObjectName("statusLabel")
        self._status_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._status_label)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_btn.clicked.connect(lambda: self._run(self._core.start))
        self._pause_btn.clicked.connect(lambda: self._run(self._core.pause))
        self._resume_btn.clicked.connect(lambda: self._run(self._core.resume))
        self._stop_btn.clicked.connect(lambda: self._run(self._core.stop))
        self._skip_btn.clicked.connect(lambda: self._run(self._core.skip))
        self._short_btn.clicked.connect(lambda: self._on_preset_clicked(PresetType.SHORT))
        self._long_btn.clicked.connect(lambda: self._on_preset_clicked(PresetType.LONG))

        self._core.state_changed.connect(self._on_state_changed)
        self._core.command_rejected.connect(self._status_label.setText)

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_state_changed(self, state: SessionState) -> None:
        self._time_label.setText(format_time(state.time_left))
        self._session_label.setText(session_label(state.session_type, state.active_task))
        self._round_label.setText(round_label(state.round_number))

        self._short_btn.setChecked(state.preset_type == PresetType.SHORT)
        self._long_btn.setChecked(state.preset_type == PresetType.LONG)

        running = state.is_running
        self._start_btn.setVisible(not running)
        self._pause_btn.setVisible(running)
        self._resume_btn.setVisible(running)
        self._skip_btn.setEnabled(running)

    def _run(self, action) -> None:
        if not self._core.is_attached:
            return
        self._status_label.setText("")
        action()

    def _on_preset_clicked(self, preset: PresetType) -> None:
        self._core.set_preset(preset)
        # Re-sync the toggles; a no-op selection emits no state change.
        state = self._core.state
        current = state.preset_type if state is not None else None
        self._short_btn.setChecked(current == PresetType.SHORT)
        self._long_btn.setChecked(current == PresetType.LONG)
