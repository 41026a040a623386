"""Fixed-capacity ring buffer of 16-bit samples with a mirrored backing store."""

from __future__ import annotations

from array import array
from collections.abc import Iterable

__all__ = ["CircularBuffer"]

_INT16_MIN = -(1 << 15)
_INT16_MAX = (1 << 15) - 1


def _check_sample(value: int) -> int:
    if not _INT16_MIN <= value <= _INT16_MAX:
        raise ValueError(f"sample {value} is outside the 16-bit range")
    return value


class CircularBuffer:
    """Ring buffer holding up to ``capacity`` signed 16-bit samples.

    The backing store is twice the capacity long. Every element written is
    also stored one capacity further on, so a window that wraps around the
    end can still be viewed as one contiguous run.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._buffer = array("h", bytes(2 * 2 * capacity))
        self._read = 0
        self._write = 0
        self._empty = True

    @property
    def capacity(self) -> int:
        """Maximum number of samples the buffer holds."""
        return self._capacity

    def __len__(self) -> int:
        return self.available()

    def __repr__(self) -> str:
        return (
            f"CircularBuffer(capacity={self._capacity}, "
            f"available={self.available()})"
        )

    def reset(self) -> None:
        """Return to the initial empty state with zeroed storage."""
        self._read = 0
        self._write = 0
        self._empty = True
        for i in range(len(self._buffer)):
            self._buffer[i] = 0

    def full(self) -> bool:
        """True when no more samples can be written."""
        return self._read == self._write and not self._empty

    def empty(self) -> bool:
        """True when there is nothing to read."""
        return self._empty

    def available(self) -> int:
        """Number of samples ready to be read."""
        diff = self._write - self._read
        if diff > 0:
            return diff
        if diff < 0:
            return self._capacity + diff
        return 0 if self._empty else self._capacity

    def can_write(self) -> int:
        """Number of samples that can still be written."""
        return self._capacity - self.available()

    def add(self, value: int) -> None:
        """Append one sample."""
        _check_sample(value)
        if self.full():
            raise ValueError("circular buffer is full")
        self._buffer[self._write] = value
        self._buffer[self._write + self._capacity] = value
        self._write += 1
        if self._write == self._capacity:
            self._write = 0
        self._empty = False

    def _store(self, values: list[int]) -> None:
        n = len(values)
        if n == 0:
            return
        if self.can_write() < n:
            raise ValueError(
                f"cannot write {n} samples, only {self.can_write()} free"
            )
        capacity = self._capacity
        write = self._write
        n1 = min(n, capacity - write)
        head = array("h", values[:n1])
        self._buffer[write:write + n1] = head
        self._buffer[capacity + write:capacity + write + n1] = head
        n2 = n - n1
        if n2 > 0:
            tail = array("h", values[n1:])
            self._buffer[0:n2] = tail
            self._buffer[capacity:capacity + n2] = tail
        write += n
        if write >= capacity:
            write -= capacity
        self._write = write
        self._empty = False

    def write(self, values: Iterable[int]) -> None:
        """Append a sequence of samples."""
        self._store([_check_sample(v) for v in values])

    def write_zeros(self, n: int) -> None:
        """Append ``n`` zero samples."""
        if n < 0:
            raise ValueError(f"count must not be negative, got {n}")
        self._store([0] * n)

    def reserve_for_write(self, n: int) -> memoryview:
        """Advance the write position by ``n`` and return a view to fill in.

        The ``n`` slots must be contiguous at the current write position.
        Only the primary copy of the storage is exposed.
        """
        if n < 0:
            raise ValueError(f"count must not be negative, got {n}")
        if self._write + n > self._capacity:
            raise ValueError(
                f"{n} contiguous slots are not available at the write position"
            )
        start = self._write
        view = memoryview(self._buffer)[start:start + n]
        self._write += n
        if self._write == self._capacity:
            self._write = 0
        self._empty = self._empty and n == 0
        return view

    def extend(self, count: int, n: int) -> None:
        """Append the last ``count`` samples ``n`` more times."""
        if n <= 0 or count <= 0:
            return
        if self.can_write() < count * n:
            raise ValueError("not enough free space to extend")
        if self.available() < count:
            raise ValueError(
                f"cannot repeat {count} samples, only {self.available()} stored"
            )
        capacity = self._capacity
        start = self._write - count
        if start < 0:
            start += capacity
        region = [self._buffer[(start + k) % capacity] for k in range(count)]
        for _ in range(n):
            self._store(region)

    def remove(self) -> int:
        """Read and consume the oldest sample."""
        if self._empty:
            raise IndexError("remove from empty circular buffer")
        result = self._buffer[self._read]
        self._read += 1
        if self._read == self._capacity:
            self._read = 0
        if self._read == self._write:
            self._empty = True
        return result

    def _target(self, index: int) -> int:
        if not 0 <= index < self.available():
            raise IndexError(f"index {index} out of range")
        return (self._read + index) % self._capacity

    def peek(self, index: int) -> int:
        """Sample ``index`` places after the read position, without consuming it."""
        return self._buffer[self._target(index)]

    def rewind(self, n: int) -> None:
        """Move the read position back to restore the last ``n`` samples read."""
        if n < 0:
            raise ValueError(f"count must not be negative, got {n}")
        if n > self.can_write():
            raise ValueError(f"cannot rewind {n} samples")
        if n > self._read:
            self._read = self._read + self._capacity - n
        else:
            self._read -= n
        if n > 0:
            self._empty = False

    def peek_direct(self, index: int) -> memoryview:
        """Read-only view of the storage starting at sample ``index``.

        The view runs to the end of the mirrored storage; the caller must not
        read past the samples that are available.
        """
        target = self._target(index)
        return memoryview(self._buffer)[target:].toreadonly()

    def peek_max(self) -> memoryview:
        """Read-only view of the longest contiguous run at the read position."""
        if self.available() == 0:
            return memoryview(array("h")).toreadonly()
        if self._write <= self._read:
            n = self._capacity - self._read
        else:
            n = self._write - self._read
        return memoryview(self._buffer)[self._read:self._read + n].toreadonly()

    def get(self, n: int) -> list[int]:
        """Copy the next ``n`` samples without consuming them."""
        if n < 0:
            raise ValueError(f"count must not be negative, got {n}")
        if self.available() < n:
            raise ValueError(
                f"cannot get {n} samples, only {self.available()} stored"
            )
        read = self._read
        end = read + n
        capacity = self._capacity
        if end <= capacity:
            return self._buffer[read:end].tolist()
        return (
            self._buffer[read:capacity].tolist()
            + self._buffer[0:end - capacity].tolist()
        )

    def discard(self, n: int) -> None:
        """Drop the next ``n`` samples; ``n`` must be positive."""
        if n <= 0:
            raise ValueError(f"count must be positive, got {n}")
        if self.available() < n:
            raise ValueError(
                f"cannot discard {n} samples, only {self.available()} stored"
            )
        self._read += n
        if self._read >= self._capacity:
            self._read -= self._capacity
        if self._read == self._write:
            self._empty = True

    def shift(self, n: int) -> None:
        """Move the read position by ``n`` (which may be negative).

        The empty flag is left untouched.
        """
        if abs(n) > self._capacity:
            raise ValueError(f"shift of {n} exceeds capacity {self._capacity}")
        read = self._read + n
        if read < 0:
            read += self._capacity
        elif read >= self._capacity:
            read -= self._capacity
        self._read = read