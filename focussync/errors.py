"""Exception hierarchy for FocusSync.

Command errors are raised by the dispatcher and caught by the timer core,
which turns them into a user-facing ``command_rejected`` signal.  Inbound
decode errors are raised at the channel boundary and never reach Qt slots.
"""


class FocusSyncError(Exception):
    """Base class for every error raised by this package."""


class CommandError(FocusSyncError):
    """A user intent could not be turned into an outbound command."""

    user_message = "Command could not be sent."


class ConnectionUnavailable(CommandError):
    """The channel is not open at command time."""

    user_message = "Not connected to server. Please try again."


class NoTaskSelected(CommandError):
    """``start`` was attempted without an active task."""

    user_message = "Please select a task first."


class MalformedMessage(FocusSyncError):
    """An inbound payload failed to parse or validate."""
