"""
Tunedeck Errors - Failures reported back to the caller of a user intent.
"""


class TunedeckError(Exception):
    """Base class for errors surfaced to the user."""


class InvalidUrlError(TunedeckError, ValueError):
    """The input does not carry a recognised video identifier."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f'Invalid YouTube URL: {url!r}')


class IndexOutOfRangeError(TunedeckError, IndexError):
    """A playlist position outside the current bounds."""

    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(f'Track index {index} out of range (playlist has {length} tracks)')
