"""Error taxonomy for counter requests."""

from __future__ import annotations


class CounterError(RuntimeError):
    """Base class for errors surfaced by the counter service."""


class MissingSelector(CounterError):
    """Raised when a request does not name the counter it targets."""

    def __init__(self) -> None:
        super().__init__("No counter name supplied")


class UnknownOperation(CounterError):
    """Raised when the requested operation is not one the service defines."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Unknown counter operation: {operation!r}")
        self.operation = operation


class StorageUnavailable(CounterError):
    """Raised when the durable storage layer cannot complete a read or write."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Storage unavailable for counter {name!r}: {reason}")
        self.name = name
        self.reason = reason
