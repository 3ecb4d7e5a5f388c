"""Counter package providing durable per-name counters."""

from counter_service.counters.errors import MissingSelector, StorageUnavailable, UnknownOperation
from counter_service.counters.routes import router
from counter_service.counters.service import Counter, CounterNamespace
from counter_service.counters.storage import JsonCounterStorage

__all__ = [
    "Counter",
    "CounterNamespace",
    "JsonCounterStorage",
    "MissingSelector",
    "StorageUnavailable",
    "UnknownOperation",
    "router",
]
