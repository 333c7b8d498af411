"""Register operands and vector configuration settings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

_REGISTER_COUNT = 32


@dataclass(frozen=True)
class _Register:
    index: int

    _prefix = "r"

    def __post_init__(self):
        if not isinstance(self.index, int) or isinstance(self.index, bool):
            raise TypeError(f"register index must be an int, got {self.index!r}")
        if not 0 <= self.index < _REGISTER_COUNT:
            raise ValueError(
                f"register index must be in 0..{_REGISTER_COUNT - 1}, got {self.index}"
            )

    def __str__(self):
        return f"{self._prefix}{self.index}"


@dataclass(frozen=True)
class GPR(_Register):
    """An integer register, x0 to x31."""

    _prefix = "x"


@dataclass(frozen=True)
class FPR(_Register):
    """A floating-point register, f0 to f31."""

    _prefix = "f"


@dataclass(frozen=True)
class Vec(_Register):
    """A vector register, v0 to v31."""

    _prefix = "v"


class VecMask(IntEnum):
    """Whether an instruction is masked by v0 (the vm bit is inverted)."""

    YES = 0
    NO = 1


class SEW(IntEnum):
    """Selected element width."""

    E8 = 0b000
    E16 = 0b001
    E32 = 0b010
    E64 = 0b011
    E128 = 0b100
    E256 = 0b101
    E512 = 0b110
    E1024 = 0b111


class LMUL(IntEnum):
    """Vector register group multiplier."""

    M1 = 0b000
    M2 = 0b001
    M4 = 0b010
    M8 = 0b011
    MF8 = 0b101
    MF4 = 0b110
    MF2 = 0b111


class VTA(IntEnum):
    """Tail agnostic policy."""

    NO = 0
    YES = 1


class VMA(IntEnum):
    """Mask agnostic policy."""

    NO = 0
    YES = 1