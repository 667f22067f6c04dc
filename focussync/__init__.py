"""FocusSync — a Pomodoro client that mirrors a remote timer authority."""

__version__ = "0.1.0"
