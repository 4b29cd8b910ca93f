"""Exceptions raised by markterm."""


class MarktermError(Exception):
    """Base class for markterm errors."""


class InputUnavailableError(MarktermError):
    """The markdown source could not be read."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason
