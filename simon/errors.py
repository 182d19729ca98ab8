"""Exception hierarchy shared across simon modules.

Configuration problems are fatal before any terminal mode change.
Channel errors stay inside producer threads; spawn errors end the program.
"""

from __future__ import annotations


class SimonError(Exception):
    """Base class for all simon errors."""


class ConfigurationError(SimonError):
    """Settings are missing, malformed, or describe an unusable tab."""


class EmptySelectionError(ConfigurationError):
    """A selection list was constructed with no items."""


class ChannelError(SimonError):
    """An event could not be delivered between producer and consumer."""


class ChannelClosedError(ChannelError):
    """The event stream has been stopped."""


class ProcessSpawnError(SimonError):
    """An external program failed to start or could not be waited on."""

    def __init__(self, argv: list[str], cause: BaseException) -> None:
        self.argv = list(argv)
        self.cause = cause
        program = argv[0] if argv else "<empty>"
        super().__init__(f"failed to launch {program}: {cause}")
