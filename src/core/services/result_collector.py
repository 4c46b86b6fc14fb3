"""Result collector for concurrent probes.

Any number of probe coroutines write into it while the dispatcher runs;
a single consumer drains it once after every probe has finished. The queue
is sized to the task count, so a write never waits for the consumer.
"""

from __future__ import annotations

import asyncio

from core.domain.models import ProbeResult


class ResultCollector:
    """Bounded, drain-once sink for `ProbeResult` values."""

    def __init__(self, capacity: int) -> None:
        self._capacity = max(0, capacity)
        # maxsize=0 means "unbounded" for asyncio.Queue; keep at least one slot.
        self._queue: asyncio.Queue[ProbeResult] = asyncio.Queue(maxsize=max(1, self._capacity))
        self._drained = False

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return self._queue.qsize()

    def put(self, result: ProbeResult) -> None:
        """Store one result. Raises `asyncio.QueueFull` past capacity."""

        if self._drained:
            raise RuntimeError("collector already drained")
        self._queue.put_nowait(result)

    def drain(self) -> list[ProbeResult]:
        """Return every stored result, in arrival order. Allowed once."""

        if self._drained:
            raise RuntimeError("collector already drained")
        self._drained = True

        results: list[ProbeResult] = []
        while not self._queue.empty():
            results.append(self._queue.get_nowait())
        return results
