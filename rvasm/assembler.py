"""The assembler front end: every instruction group over one code buffer."""

from __future__ import annotations

import struct

from rvasm.code_buffer import CodeBuffer
from rvasm.vector_arith import VectorArithmetic
from rvasm.vector_crypto import VectorCrypto
from rvasm.vector_float import VectorFloat
from rvasm.vector_memory import VectorMemory
from rvasm.vector_permute import VectorPermute

_DEFAULT_CAPACITY = 4096

_GROUPS = (VectorArithmetic, VectorPermute, VectorFloat, VectorMemory, VectorCrypto)


class Assembler:
    """Emits instructions into a :class:`CodeBuffer`.

    ``buffer`` may be a ``CodeBuffer``, an integer capacity for a new owned
    buffer, or omitted for a buffer of 4096 bytes. Instruction methods such
    as ``vadd`` or ``vfncvtbf16_f_f_w`` are looked up on the instruction
    groups, each kept as its own object over the shared buffer because their
    internal helpers share names with differing meanings.
    """

    def __init__(self, buffer=None):
        if buffer is None:
            buffer = CodeBuffer(_DEFAULT_CAPACITY)
        elif isinstance(buffer, int) and not isinstance(buffer, bool):
            buffer = CodeBuffer(buffer)
        elif not isinstance(buffer, CodeBuffer):
            raise TypeError(
                f"expected a CodeBuffer or a capacity, got {type(buffer).__name__}"
            )
        self._buffer = buffer
        self._groups = tuple(self._bind(group) for group in _GROUPS)

    def _bind(self, group):
        instance = group()
        instance._buffer = self._buffer
        return instance

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        for group in self.__dict__.get("_groups", ()):
            if hasattr(type(group), name):
                return getattr(group, name)
        raise AttributeError(
            f"{type(self).__name__!r} object has no attribute {name!r}"
        )

    def __dir__(self):
        names = set(super().__dir__())
        for group in _GROUPS:
            names.update(n for n in dir(group) if not n.startswith("_"))
        return sorted(names)

    @property
    def buffer(self):
        """The code buffer instructions are written into."""
        return self._buffer

    def rewind_buffer(self, offset=0):
        """Move the write cursor back to ``offset``."""
        self._buffer.rewind(offset)

    def words(self):
        """Return the emitted code as a list of 32-bit instruction words."""
        data = self._buffer.tobytes()
        data = data[: len(data) - len(data) % 4]
        return [word for (word,) in struct.iter_unpack("<I", data)]