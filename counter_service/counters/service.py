"""Per-name counters with serialized read-modify-write."""

from __future__ import annotations

import asyncio

from counter_service.counters.errors import StorageUnavailable
from counter_service.counters.storage import JsonCounterStorage
from counter_service.lib.logger import get_logger
from counter_service.lib.metrics import METRICS

logger = get_logger(__name__)


class Counter:
    """Single writer for one counter name.

    Every operation holds the counter's lock for its whole read-modify-write,
    so operations on the same name apply one at a time in arrival order.
    """

    def __init__(self, name: str, storage: JsonCounterStorage) -> None:
        self.name = name
        self._storage = storage
        self._lock = asyncio.Lock()
        self._writes: set[asyncio.Task[int]] = set()

    async def read(self) -> int:
        """Return the current value, 0 when nothing was ever written."""

        async with self._lock:
            try:
                value = await self._load()
            except StorageUnavailable:
                self._record_failure("read")
                raise
        METRICS.record("read", ok=True)
        return value

    async def increment(self, amount: int = 1) -> int:
        return await self._apply("increment", amount)

    async def decrement(self, amount: int = 1) -> int:
        _check_amount(amount)
        return await self._apply("decrement", -amount)

    async def _apply(self, operation: str, delta: int) -> int:
        _check_amount(delta)
        # A cancelled caller must not release the lock while the write is in flight
        task = asyncio.create_task(self._locked_apply(operation, delta))
        self._writes.add(task)
        task.add_done_callback(self._forget_write)
        return await asyncio.shield(task)

    async def _locked_apply(self, operation: str, delta: int) -> int:
        async with self._lock:
            try:
                value = await self._load() + delta
                await self._storage.put(self.name, value)
            except StorageUnavailable:
                self._record_failure(operation)
                raise
        METRICS.record(operation, ok=True)
        logger.info(
            f"counter.{operation}",
            extra={"counter": self.name, "delta": delta, "value": value},
        )
        return value

    def _forget_write(self, task: asyncio.Task[int]) -> None:
        self._writes.discard(task)
        if not task.cancelled():
            # Failures are already logged; mark them retrieved for abandoned callers
            task.exception()

    async def _load(self) -> int:
        value = await self._storage.get(self.name)
        return 0 if value is None else value

    def _record_failure(self, operation: str) -> None:
        METRICS.record(operation, ok=False)
        logger.warning(
            "counter.storage.unavailable",
            extra={"counter": self.name, "operation": operation},
            exc_info=True,
        )


class CounterNamespace:
    """Resolve counter names to their single :class:`Counter` instance."""

    def __init__(self, storage: JsonCounterStorage) -> None:
        self.storage = storage
        self._counters: dict[str, Counter] = {}

    def get(self, name: str) -> Counter:
        counter = self._counters.get(name)
        if counter is None:
            counter = Counter(name, self.storage)
            self._counters[name] = counter
        return counter

    def key_for(self, name: str) -> str:
        return self.storage.key_for(name)

    def reset(self) -> None:
        """Forget cached instances (testing utility, persisted values stay)."""

        self._counters.clear()


def _check_amount(amount: int) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise TypeError(f"Counter amount must be an int, got {type(amount).__name__}")
