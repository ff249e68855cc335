"""Error taxonomy shared by stopwatches and registries."""

from __future__ import annotations


class StopwatchError(Exception):
    """Base class for every error raised by lapwatch."""


class InvalidArgumentError(StopwatchError, ValueError):
    """An identifier was empty, ``None`` or not a string."""


class DuplicateIdError(StopwatchError, ValueError):
    """A stopwatch with the requested identifier already exists."""

    def __init__(self, stopwatch_id: str):
        super().__init__(f"id {stopwatch_id!r} is already taken")
        self.stopwatch_id = stopwatch_id


class InvalidStateError(StopwatchError, RuntimeError):
    """A transition was requested that the current state forbids."""


class UnknownIdError(StopwatchError, KeyError):
    """No stopwatch is registered under the requested identifier."""

    def __init__(self, stopwatch_id: str):
        super().__init__(stopwatch_id)
        self.stopwatch_id = stopwatch_id

    def __str__(self) -> str:
        return f"no stopwatch with id {self.stopwatch_id!r}"


class RegistryFullError(StopwatchError):
    """The configured stopwatch limit has been reached."""


__all__ = [
    "StopwatchError",
    "InvalidArgumentError",
    "DuplicateIdError",
    "InvalidStateError",
    "UnknownIdError",
    "RegistryFullError",
]
