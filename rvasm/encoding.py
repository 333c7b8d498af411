"""Encoders for the vector instruction formats."""

from __future__ import annotations

from enum import IntEnum

from rvasm.registers import FPR, GPR, Vec

_OP_V = 0b1010111
_OP_VE = 0b1110111
_OP_LOAD_FP = 0b0000111
_OP_STORE_FP = 0b0100111

_FUNCT3_OPIVV = 0b000
_FUNCT3_OPFVV = 0b001
_FUNCT3_OPMVV = 0b010
_FUNCT3_OPIVI = 0b011
_FUNCT3_OPIVX = 0b100
_FUNCT3_OPFVF = 0b101
_FUNCT3_OPMVX = 0b110

_WHOLE_REGISTER_UMOP = 0b01000
_WHOLE_REGISTER_COUNTS = (1, 2, 4, 8)


class EncodingError(ValueError):
    """An operand cannot be encoded in the requested instruction."""


class AddressingMode(IntEnum):
    """Vector memory addressing mode (mop field)."""

    UNIT_STRIDE = 0b00
    INDEXED_UNORDERED = 0b01
    STRIDED = 0b10
    INDEXED_ORDERED = 0b11


class UnitStrideLoadMode(IntEnum):
    """Unit-stride load variant (lumop field)."""

    LOAD = 0b00000
    MASK_LOAD = 0b01011
    LOAD_FAULT_ONLY_FIRST = 0b10000


class UnitStrideStoreMode(IntEnum):
    """Unit-stride store variant (sumop field)."""

    STORE = 0b00000
    MASK_STORE = 0b01011


class WidthEncoding(IntEnum):
    """Element width of a vector memory access."""

    E8 = 0b000
    E16 = 0b101
    E32 = 0b110
    E64 = 0b111


def _operand(value):
    if isinstance(value, (GPR, FPR, Vec)):
        return value.index
    return int(value)


def _check_funct6(funct6):
    if not 0 <= funct6 <= 0b111111:
        raise EncodingError(f"funct6 {funct6:#b} does not fit in 6 bits")


def _emit_memory(buffer, opcode, nf, mew, mop, vm, umop, rs, width, vreg):
    if not 0 <= nf <= 8:
        raise EncodingError(f"field count must be in 0..8, got {nf}")
    # Callers give the real count; the encoding stores count - 1.
    if nf:
        nf -= 1
    umop = _operand(umop)
    if not 0 <= umop <= 0b11111:
        raise EncodingError(f"umop {umop:#b} does not fit in 5 bits")
    value = (
        (nf << 29)
        | (int(bool(mew)) << 28)
        | (int(mop) << 26)
        | (int(vm) << 25)
        | (umop << 20)
        | (rs.index << 15)
        | (int(width) << 12)
        | (vreg.index << 7)
    )
    buffer.emit32(value | opcode)


def emit_load(buffer, nf, mew, mop, vm, lumop, rs, width, vd):
    """Emit a vector load.

    ``lumop`` is a UnitStrideLoadMode, the stride GPR, or the index Vec.
    """
    _emit_memory(buffer, _OP_LOAD_FP, nf, mew, mop, vm, lumop, rs, width, vd)


def emit_load_whole_reg(buffer, nf, mew, rs, width, vd):
    """Emit a whole-register vector load of 1, 2, 4 or 8 registers."""
    if nf not in _WHOLE_REGISTER_COUNTS:
        raise EncodingError(f"whole-register count must be 1, 2, 4 or 8, got {nf}")
    _emit_memory(
        buffer, _OP_LOAD_FP, nf, mew, AddressingMode.UNIT_STRIDE, 1,
        _WHOLE_REGISTER_UMOP, rs, width, vd,
    )


def emit_store(buffer, nf, mew, mop, vm, sumop, rs, width, vs):
    """Emit a vector store.

    ``sumop`` is a UnitStrideStoreMode, the stride GPR, or the index Vec.
    """
    _emit_memory(buffer, _OP_STORE_FP, nf, mew, mop, vm, sumop, rs, width, vs)


def emit_store_whole_reg(buffer, nf, rs, vs):
    """Emit a whole-register vector store of 1, 2, 4 or 8 registers."""
    if nf not in _WHOLE_REGISTER_COUNTS:
        raise EncodingError(f"whole-register count must be 1, 2, 4 or 8, got {nf}")
    _emit_memory(
        buffer, _OP_STORE_FP, nf, False, AddressingMode.UNIT_STRIDE, 1,
        _WHOLE_REGISTER_UMOP, rs, WidthEncoding.E8, vs,
    )


def _emit_arith(buffer, funct6, vm, vs2, src, funct3, vd, opcode=_OP_V):
    _check_funct6(funct6)
    value = (
        (funct6 << 26)
        | (int(vm) << 25)
        | (vs2.index << 20)
        | (src << 15)
        | (funct3 << 12)
        | (vd.index << 7)
    )
    buffer.emit32(value | opcode)


def emit_opivi_raw(buffer, funct6, vm, vs2, imm5, vd):
    """Emit an OPIVI instruction using the low five bits of ``imm5``."""
    _emit_arith(buffer, funct6, vm, vs2, imm5 & 0b11111, _FUNCT3_OPIVI, vd)


def emit_opivi(buffer, funct6, vm, vs2, simm5, vd):
    """Emit an OPIVI instruction with a signed 5-bit immediate."""
    if not -16 <= simm5 <= 15:
        raise EncodingError(f"immediate {simm5} is outside -16..15")
    emit_opivi_raw(buffer, funct6, vm, vs2, simm5, vd)


def emit_opivui(buffer, funct6, vm, vs2, uimm5, vd):
    """Emit an OPIVI instruction with an unsigned 5-bit immediate."""
    if not 0 <= uimm5 <= 31:
        raise EncodingError(f"immediate {uimm5} is outside 0..31")
    emit_opivi_raw(buffer, funct6, vm, vs2, uimm5, vd)


def emit_opivv(buffer, funct6, vm, vs2, vs1, vd):
    """Emit an integer vector-vector instruction."""
    _emit_arith(buffer, funct6, vm, vs2, vs1.index, _FUNCT3_OPIVV, vd)


def emit_opivx(buffer, funct6, vm, vs2, rs1, vd):
    """Emit an integer vector-scalar instruction."""
    _emit_arith(buffer, funct6, vm, vs2, rs1.index, _FUNCT3_OPIVX, vd)


def emit_opmvv(buffer, funct6, vm, vs2, vs1, vd):
    """Emit a mask/multiply vector-vector instruction."""
    _emit_arith(buffer, funct6, vm, vs2, vs1.index, _FUNCT3_OPMVV, vd)


def emit_opmvvp(buffer, funct6, vm, vs2, vs1, vd):
    """Emit a vector-vector instruction in the vector crypto opcode space."""
    _emit_arith(buffer, funct6, vm, vs2, vs1.index, _FUNCT3_OPMVV, vd, _OP_VE)


def emit_opmvx(buffer, funct6, vm, vs2, rs1, vd):
    """Emit a mask/multiply vector-scalar instruction."""
    _emit_arith(buffer, funct6, vm, vs2, rs1.index, _FUNCT3_OPMVX, vd)


def emit_opfvv(buffer, funct6, vm, vs2, vs1, vd):
    """Emit a floating-point vector-vector instruction."""
    _emit_arith(buffer, funct6, vm, vs2, vs1.index, _FUNCT3_OPFVV, vd)


def emit_opfvf(buffer, funct6, vm, vs2, rs1, vd):
    """Emit a floating-point vector-scalar instruction."""
    _emit_arith(buffer, funct6, vm, vs2, rs1.index, _FUNCT3_OPFVF, vd)