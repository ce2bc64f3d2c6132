# src/logring/core/handler.py
from __future__ import annotations

import logging
from typing import List, Optional, TextIO

from logring.core.buffer import StringRingBuffer
from logring.core.metrics import inc, gauge_set


class RingLogHandler(logging.Handler):
    """Keep the last ``capacity`` formatted log records in memory.

    Oldest lines are dropped once the buffer is full. Reads go through the
    handler lock, so it can be attached to loggers used from several threads.
    """

    def __init__(self, capacity: int = 256, name: Optional[str] = None, level: int = logging.NOTSET):
        super().__init__(level=level)
        self.buf = StringRingBuffer(capacity)
        self.name = name or "ring"

    @property
    def capacity(self) -> int:
        return self.buf.capacity

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = self.format(record)
        except Exception:
            self.handleError(record)
            return
        evicted = self.buf.full()
        self.buf.push(line)
        inc("ringlog_records_total", handler=self.name)
        if evicted:
            inc("ringlog_evictions_total", handler=self.name)
        gauge_set("ringlog_lines", len(self.buf), handler=self.name)

    def lines(self) -> List[str]:
        """Buffered lines, oldest first."""
        self.acquire()
        try:
            return self.buf.slice()
        finally:
            self.release()

    def tail(self, n: int) -> List[str]:
        """The newest ``n`` lines, oldest first."""
        if n <= 0:
            return []
        return self.lines()[-n:]

    def clear(self) -> None:
        self.acquire()
        try:
            while not self.buf.empty():
                self.buf.pop()
        finally:
            self.release()
        gauge_set("ringlog_lines", 0, handler=self.name)

    def dump(self, stream: TextIO) -> int:
        """Write buffered lines to ``stream``; returns how many were written."""
        lines = self.lines()
        for line in lines:
            stream.write(line + "\n")
        return len(lines)

    def __repr__(self) -> str:
        level = logging.getLevelName(self.level)
        return f"<{self.__class__.__name__} {self.name} ({level}) {len(self.buf)}/{self.capacity}>"
