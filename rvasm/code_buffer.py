"""A byte buffer that machine code is emitted into."""

from __future__ import annotations

_WORD_MASK = 0xFFFFFFFF


class CodeBuffer:
    """Holds emitted machine code and a write cursor.

    Without ``buffer`` the code buffer owns its memory and can grow. With
    ``buffer`` it writes straight into that caller-supplied writable storage,
    whose size is fixed.
    """

    def __init__(self, capacity=None, buffer=None):
        if buffer is None:
            size = 0 if capacity is None else capacity
            if size < 0:
                raise ValueError(f"capacity must not be negative, got {size}")
            self._data = bytearray(size)
            self._managed = True
        else:
            view = memoryview(buffer)
            if view.readonly:
                raise TypeError("external buffer must be writable")
            view = view.cast("B")
            size = len(view) if capacity is None else capacity
            if not 0 <= size <= len(view):
                raise ValueError(
                    f"capacity {size} does not fit in a buffer of {len(view)} bytes"
                )
            self._data = view[:size]
            self._managed = False
        self._cursor = 0
        self._writable = True

    def __len__(self):
        return self._cursor

    @property
    def capacity(self):
        """Total size of the buffer in bytes."""
        return len(self._data)

    @property
    def cursor_offset(self):
        """Offset at which the next instruction is written."""
        return self._cursor

    @property
    def remaining(self):
        """Number of bytes still free after the cursor."""
        return self.capacity - self._cursor

    @property
    def is_managed(self):
        """Whether the buffer owns its memory."""
        return self._managed

    @property
    def is_writable(self):
        """Whether instructions may currently be emitted."""
        return self._writable

    def emit32(self, value):
        """Write a 32-bit little-endian word at the cursor and advance it."""
        if not self._writable:
            raise PermissionError("code buffer is not writable")
        if not 0 <= value <= _WORD_MASK:
            raise ValueError(f"value {value:#x} does not fit in 32 bits")
        if self.remaining < 4:
            raise BufferError(
                f"no room for 4 bytes at offset {self._cursor} "
                f"in a buffer of {self.capacity} bytes"
            )
        end = self._cursor + 4
        self._data[self._cursor:end] = value.to_bytes(4, "little")
        self._cursor = end

    def grow(self, new_capacity):
        """Enlarge an owned buffer, keeping its contents and cursor."""
        if not self._managed:
            raise BufferError("cannot grow a buffer over external storage")
        if new_capacity <= self.capacity:
            return
        self._data.extend(bytes(new_capacity - self.capacity))

    def rewind(self, offset=0):
        """Move the cursor back to ``offset``."""
        if not 0 <= offset <= self.capacity:
            raise ValueError(
                f"offset {offset} is outside a buffer of {self.capacity} bytes"
            )
        self._cursor = offset

    def set_executable(self):
        """Mark the buffer read-only and executable; emitting then fails."""
        self._writable = False

    def set_writable(self):
        """Mark the buffer writable again."""
        self._writable = True

    def tobytes(self):
        """Return the bytes emitted so far."""
        return bytes(self._data[: self._cursor])