"""
Single simulation-time scheduler polled once per tick.

Jobs are plain names ("spawn", "flash_off", ...) ordered by due time; the
frame driver decides what each name does. Clearing the scheduler drops every
pending job, so nothing from a finished round can fire in the next one.
"""

from __future__ import annotations

import heapq
import itertools
from typing import List, Tuple


class Scheduler:
    def __init__(self):
        self._queue: List[Tuple[float, int, str]] = []
        self._seq = itertools.count()

    def __len__(self) -> int:
        return len(self._queue)

    def schedule(self, due_ms: float, job: str):
        heapq.heappush(self._queue, (due_ms, next(self._seq), job))

    def cancel(self, job: str) -> int:
        """Drop every pending entry for `job`; returns how many were removed"""
        before = len(self._queue)
        self._queue = [entry for entry in self._queue if entry[2] != job]
        heapq.heapify(self._queue)
        return before - len(self._queue)

    def clear(self):
        self._queue = []

    def next_due(self, job: str):
        due = [entry[0] for entry in self._queue if entry[2] == job]
        return min(due) if due else None

    def pop_due(self, now_ms: float) -> List[str]:
        """Remove and return jobs due at or before `now_ms`, earliest first"""
        ready = []
        while self._queue and self._queue[0][0] <= now_ms:
            ready.append(heapq.heappop(self._queue)[2])
        return ready
