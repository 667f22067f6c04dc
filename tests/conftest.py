"""Shared pytest fixtures for FocusSync tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from focussync.timer.durations import PresetConfig
from focussync.timer.engine import TimerCore
from focussync.timer.messages import PresetType, Task

from helpers import FakeChannel


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture
def presets():
    return {
        PresetType.SHORT: PresetConfig(work_duration=25, short_break=5, long_break=15),
        PresetType.LONG: PresetConfig(work_duration=50, short_break=10, long_break=30),
    }


@pytest.fixture
def task():
    return Task(id=7, title="Write report")


@pytest.fixture
def channel(qapp):
    """Connected in-memory channel."""
    return FakeChannel(connected=True)


@pytest.fixture
def offline_channel(qapp):
    return FakeChannel(connected=False)


@pytest.fixture
def core(channel, presets, task):
    """Attached TimerCore on a connected channel with a selected task."""
    c = TimerCore(channel, presets)
    c.attach(task)
    yield c
    c.detach()
