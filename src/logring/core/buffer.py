# src/logring/core/buffer.py
"""
Fixed-capacity ring buffer of text lines (rolling log).

Cursor layout:
- ``end``   = slot ที่เก็บตัวล่าสุด (newest)
- ``start`` = slot ก่อนตัวเก่าสุด (next slot ``unshift`` writes to)
- ``length`` tells empty from full, both of which can have ``start == end``.
"""
from __future__ import annotations
from typing import Callable, Iterable, List, Sequence


class InvalidCapacity(ValueError):
    """Raised when a buffer is asked for a negative capacity."""


class StringRingBuffer:
    def __init__(self, capacity: int = 256):
        if capacity < 0:
            raise InvalidCapacity(f"capacity must be >= 0, got {capacity!r}")
        self.cap = capacity
        self.lines: List[str] = [""] * capacity
        self.start = 0
        self.end = 0
        self._length = 0

    @classmethod
    def unslice(cls, lines: Sequence[str]) -> "StringRingBuffer":
        """Build a full buffer from ``lines``; inverse of :meth:`slice`."""
        seq = list(lines)
        return cls(len(seq)).push(*seq)

    def __repr__(self) -> str:
        return (f"StringRingBuffer{{start: {self.start}, end: {self.end}, "
                f"lines: {self.lines!r}, length: {self._length}}}")

    __str__ = __repr__

    def __len__(self) -> int:
        return self._length

    # ---- queries ----

    @property
    def capacity(self) -> int:
        return self.cap

    def length(self) -> int:
        return self._length

    def full(self) -> bool:
        """True when adding more lines would evict old ones."""
        return self._length == self.cap

    def empty(self) -> bool:
        return self._length == 0

    # ---- mutators (return self for chaining) ----

    def push(self, *lines: str) -> "StringRingBuffer":
        """Append lines at the back; when full the oldest line is dropped."""
        if self.cap == 0:
            return self
        for line in lines:
            if self.full():
                self.start = self._mod(self.start + 1)  # ล้นแล้วดันหัวทิ้ง
            else:
                self._length += 1
            self.end = self._mod(self.end + 1)
            self.lines[self.end] = line
        return self

    def pop(self) -> str:
        """Remove and return the newest line, or "" when empty."""
        if self.empty():
            return ""
        self._length -= 1
        ret = self.lines[self.end]
        self.lines[self.end] = ""
        self.end = self._mod(self.end - 1)
        return ret

    def unshift(self, *lines: str) -> "StringRingBuffer":
        """Prepend lines at the front; when full the newest line is dropped.

        Lines are prepended one at a time, so the last argument ends up first.
        """
        if self.cap == 0:
            return self
        for line in lines:
            if self.full():
                self.end = self._mod(self.end - 1)
            else:
                self._length += 1
            self.lines[self.start] = line
            self.start = self._mod(self.start - 1)
        return self

    def shift(self) -> str:
        """Remove and return the oldest line, or "" when empty."""
        if self.empty():
            return ""
        self._length -= 1
        self.start = self._mod(self.start + 1)
        ret = self.lines[self.start]
        self.lines[self.start] = ""
        return ret

    def map(self, f: Callable[[str], str]) -> "StringRingBuffer":
        """Replace every line with ``f(line)``, front to back."""
        for _ in range(self._length):
            self.push(f(self.shift()))
        return self

    def map_r(self, f: Callable[[str], str]) -> "StringRingBuffer":
        """Like :meth:`map`, but back to front."""
        for _ in range(self._length):
            self.unshift(f(self.pop()))
        return self

    def each(self, f: Callable[[str], None]) -> "StringRingBuffer":
        return self.map(_keep(f))

    def each_r(self, f: Callable[[str], None]) -> "StringRingBuffer":
        return self.map_r(_keep(f))

    def slice(self) -> List[str]:
        """Copy of the live lines, front to back."""
        return [self.lines[self._mod(self.start + 1 + i)] for i in range(self._length)]

    def _mod(self, x: int) -> int:
        # Python's % is already non-negative for a positive modulus
        return x % self.cap


def _keep(f: Callable[[str], None]) -> Callable[[str], str]:
    def g(s: str) -> str:
        f(s)
        return s
    return g


def from_iterable(lines: Iterable[str], capacity: int) -> StringRingBuffer:
    """Push every line of ``lines`` into a new buffer; only the last ``capacity`` survive."""
    buf = StringRingBuffer(capacity)
    for line in lines:
        buf.push(line)
    return buf
