"""Vector mask, compare, move, reduction and permutation instructions."""

from __future__ import annotations

from rvasm.encoding import (
    EncodingError,
    emit_opivi,
    emit_opivui,
    emit_opivv,
    emit_opivx,
    emit_opmvv,
    emit_opmvx,
)
from rvasm.registers import GPR, Vec, VecMask

_IV = {"vv": emit_opivv, "vx": emit_opivx}
_IV_SIMM = {"vv": emit_opivv, "vx": emit_opivx, "vi": emit_opivi}
_IV_UIMM = {"vv": emit_opivv, "vx": emit_opivx, "vi": emit_opivui}
_IX_SIMM = {"vx": emit_opivx, "vi": emit_opivi}
_IX_UIMM = {"vx": emit_opivx, "vi": emit_opivui}

_V0 = Vec(0)


def _kind(src):
    if isinstance(src, Vec):
        return "vv"
    if isinstance(src, GPR):
        return "vx"
    if isinstance(src, int) and not isinstance(src, bool):
        return "vi"
    return None


def _check_aligned(reg, group, name):
    if reg.index % group:
        raise EncodingError(
            f"{name} needs registers aligned to {group}, got {reg}"
        )


def _check_no_overlap(vd, src, name):
    if vd == src:
        raise EncodingError(
            f"{name} destination {vd} must not overlap source {src}"
        )


class VectorPermute:
    """Vector mask logic, compares, moves, reductions and permutations.

    Where an instruction has several forms, the source operand ``src``
    selects it: ``Vec`` for vector-vector, ``GPR`` for vector-scalar and
    ``int`` for vector-immediate. Classes using this mixin provide the code
    buffer as ``self._buffer``.
    """

    _buffer = None

    def _emit(self, forms, funct6, vm, vs2, src, vd, name):
        encoder = forms.get(_kind(src))
        if encoder is None:
            raise TypeError(
                f"{name} does not take a {type(src).__name__} source operand"
            )
        encoder(self._buffer, funct6, vm, vs2, src, vd)

    def _unary(self, funct6, mask, vs, selector, vd):
        emit_opmvv(self._buffer, funct6, mask, vs, Vec(selector), vd)

    # Mask and index instructions

    def vcompress(self, vd, vs2, vs1):
        """Pack the elements of vs2 selected by the mask vs1."""
        emit_opmvv(self._buffer, 0b010111, VecMask.NO, vs2, vs1, vd)

    def vfirst(self, rd, vs, mask=VecMask.NO):
        """Index of the first set mask bit, into a GPR."""
        self._unary(0b010000, mask, vs, 17, Vec(rd.index))

    def vid(self, vd, mask=VecMask.NO):
        """Write each element's index."""
        emit_opmvv(self._buffer, 0b010100, mask, _V0, Vec(17), vd)

    def viota(self, vd, vs, mask=VecMask.NO):
        """Prefix count of set mask bits."""
        self._unary(0b010100, mask, vs, 16, vd)

    def vmand(self, vd, vs2, vs1):
        """Mask and."""
        emit_opmvv(self._buffer, 0b011001, VecMask.NO, vs2, vs1, vd)

    def vmandnot(self, vd, vs2, vs1):
        """Mask and-not."""
        emit_opmvv(self._buffer, 0b011000, VecMask.NO, vs2, vs1, vd)

    def vmnand(self, vd, vs2, vs1):
        """Mask nand."""
        emit_opmvv(self._buffer, 0b011101, VecMask.NO, vs2, vs1, vd)

    def vmnor(self, vd, vs2, vs1):
        """Mask nor."""
        emit_opmvv(self._buffer, 0b011110, VecMask.NO, vs2, vs1, vd)

    def vmor(self, vd, vs2, vs1):
        """Mask or."""
        emit_opmvv(self._buffer, 0b011010, VecMask.NO, vs2, vs1, vd)

    def vmornot(self, vd, vs2, vs1):
        """Mask or-not."""
        emit_opmvv(self._buffer, 0b011100, VecMask.NO, vs2, vs1, vd)

    def vmxnor(self, vd, vs2, vs1):
        """Mask xnor."""
        emit_opmvv(self._buffer, 0b011111, VecMask.NO, vs2, vs1, vd)

    def vmxor(self, vd, vs2, vs1):
        """Mask xor."""
        emit_opmvv(self._buffer, 0b011011, VecMask.NO, vs2, vs1, vd)

    def vmerge(self, vd, vs2, src):
        """Select between vs2 and src under the v0 mask."""
        self._emit(_IV_SIMM, 0b010111, VecMask.YES, vs2, src, vd, "vmerge")

    def vmsbf(self, vd, vs, mask=VecMask.NO):
        """Set mask bits before the first set bit."""
        self._unary(0b010100, mask, vs, 1, vd)

    def vmsif(self, vd, vs, mask=VecMask.NO):
        """Set mask bits up to and including the first set bit."""
        self._unary(0b010100, mask, vs, 3, vd)

    def vmsof(self, vd, vs, mask=VecMask.NO):
        """Set only the first set mask bit."""
        self._unary(0b010100, mask, vs, 2, vd)

    # Integer compares

    def vmseq(self, vd, vs2, src, mask=VecMask.NO):
        """Set mask where equal."""
        self._emit(_IV_SIMM, 0b011000, mask, vs2, src, vd, "vmseq")

    def vmsgt(self, vd, vs2, src, mask=VecMask.NO):
        """Set mask where signed greater; scalar or immediate only."""
        self._emit(_IX_SIMM, 0b011111, mask, vs2, src, vd, "vmsgt")

    def vmsgtu(self, vd, vs2, src, mask=VecMask.NO):
        """Set mask where unsigned greater; scalar or immediate only."""
        self._emit(_IX_SIMM, 0b011110, mask, vs2, src, vd, "vmsgtu")

    def vmsle(self, vd, vs2, src, mask=VecMask.NO):
        """Set mask where signed less or equal."""
        self._emit(_IV_SIMM, 0b011101, mask, vs2, src, vd, "vmsle")

    def vmsleu(self, vd, vs2, src, mask=VecMask.NO):
        """Set mask where unsigned less or equal."""
        self._emit(_IV_SIMM, 0b011100, mask, vs2, src, vd, "vmsleu")

    def vmslt(self, vd, vs2, src, mask=VecMask.NO):
        """Set mask where signed less; vector or scalar only."""
        self._emit(_IV, 0b011011, mask, vs2, src, vd, "vmslt")

    def vmsltu(self, vd, vs2, src, mask=VecMask.NO):
        """Set mask where unsigned less; vector or scalar only."""
        self._emit(_IV, 0b011010, mask, vs2, src, vd, "vmsltu")

    def vmsne(self, vd, vs2, src, mask=VecMask.NO):
        """Set mask where not equal."""
        self._emit(_IV_SIMM, 0b011001, mask, vs2, src, vd, "vmsne")

    # Moves

    def vmv(self, vd, src):
        """Copy a vector, scalar or immediate into every element."""
        self._emit(_IV_SIMM, 0b010111, VecMask.NO, _V0, src, vd, "vmv")

    def vmv1r(self, vd, vs):
        """Copy one whole register."""
        emit_opivi(self._buffer, 0b100111, VecMask.NO, vs, 0b00000, vd)

    def vmv2r(self, vd, vs):
        """Copy a group of two whole registers."""
        _check_aligned(vd, 2, "vmv2r")
        _check_aligned(vs, 2, "vmv2r")
        emit_opivi(self._buffer, 0b100111, VecMask.NO, vs, 0b00001, vd)

    def vmv4r(self, vd, vs):
        """Copy a group of four whole registers."""
        _check_aligned(vd, 4, "vmv4r")
        _check_aligned(vs, 4, "vmv4r")
        emit_opivi(self._buffer, 0b100111, VecMask.NO, vs, 0b00011, vd)

    def vmv8r(self, vd, vs):
        """Copy a group of eight whole registers."""
        _check_aligned(vd, 8, "vmv8r")
        _check_aligned(vs, 8, "vmv8r")
        emit_opivi(self._buffer, 0b100111, VecMask.NO, vs, 0b00111, vd)

    def vmv_sx(self, vd, rs):
        """Move a GPR into element 0."""
        emit_opmvx(self._buffer, 0b010000, VecMask.NO, _V0, rs, vd)

    def vmv_xs(self, rd, vs):
        """Move element 0 into a GPR."""
        emit_opmvv(self._buffer, 0b010000, VecMask.NO, vs, _V0, Vec(rd.index))

    def vpopc(self, rd, vs, mask=VecMask.NO):
        """Count set mask bits into a GPR."""
        self._unary(0b010000, mask, vs, 16, Vec(rd.index))

    # Reductions

    def vredand(self, vd, vs2, vs1, mask=VecMask.NO):
        """And reduction."""
        emit_opmvv(self._buffer, 0b000001, mask, vs2, vs1, vd)

    def vredmax(self, vd, vs2, vs1, mask=VecMask.NO):
        """Signed maximum reduction."""
        emit_opmvv(self._buffer, 0b000111, mask, vs2, vs1, vd)

    def vredmaxu(self, vd, vs2, vs1, mask=VecMask.NO):
        """Unsigned maximum reduction."""
        emit_opmvv(self._buffer, 0b000110, mask, vs2, vs1, vd)

    def vredmin(self, vd, vs2, vs1, mask=VecMask.NO):
        """Signed minimum reduction."""
        emit_opmvv(self._buffer, 0b000101, mask, vs2, vs1, vd)

    def vredminu(self, vd, vs2, vs1, mask=VecMask.NO):
        """Unsigned minimum reduction."""
        emit_opmvv(self._buffer, 0b000100, mask, vs2, vs1, vd)

    def vredor(self, vd, vs2, vs1, mask=VecMask.NO):
        """Or reduction."""
        emit_opmvv(self._buffer, 0b000010, mask, vs2, vs1, vd)

    def vredsum(self, vd, vs2, vs1, mask=VecMask.NO):
        """Sum reduction."""
        emit_opmvv(self._buffer, 0b000000, mask, vs2, vs1, vd)

    def vredxor(self, vd, vs2, vs1, mask=VecMask.NO):
        """Xor reduction."""
        emit_opmvv(self._buffer, 0b000011, mask, vs2, vs1, vd)

    def vwredsum(self, vd, vs2, vs1, mask=VecMask.NO):
        """Widening signed sum reduction."""
        emit_opivv(self._buffer, 0b110001, mask, vs2, vs1, vd)

    def vwredsumu(self, vd, vs2, vs1, mask=VecMask.NO):
        """Widening unsigned sum reduction."""
        emit_opivv(self._buffer, 0b110000, mask, vs2, vs1, vd)

    # Gathers, extensions and slides

    def vrgather(self, vd, vs2, src, mask=VecMask.NO):
        """Gather elements of vs2 by index."""
        _check_no_overlap(vd, vs2, "vrgather")
        if isinstance(src, Vec):
            _check_no_overlap(vd, src, "vrgather")
        self._emit(_IV_UIMM, 0b001100, mask, vs2, src, vd, "vrgather")

    def vrgatherei16(self, vd, vs2, vs1, mask=VecMask.NO):
        """Gather elements of vs2 by 16-bit indices."""
        _check_no_overlap(vd, vs2, "vrgatherei16")
        _check_no_overlap(vd, vs1, "vrgatherei16")
        emit_opivv(self._buffer, 0b001110, mask, vs2, vs1, vd)

    def vsext_vf2(self, vd, vs, mask=VecMask.NO):
        """Sign-extend from half width."""
        self._unary(0b010010, mask, vs, 7, vd)

    def vsext_vf4(self, vd, vs, mask=VecMask.NO):
        """Sign-extend from quarter width."""
        self._unary(0b010010, mask, vs, 5, vd)

    def vsext_vf8(self, vd, vs, mask=VecMask.NO):
        """Sign-extend from eighth width."""
        self._unary(0b010010, mask, vs, 3, vd)

    def vzext_vf2(self, vd, vs, mask=VecMask.NO):
        """Zero-extend from half width."""
        self._unary(0b010010, mask, vs, 6, vd)

    def vzext_vf4(self, vd, vs, mask=VecMask.NO):
        """Zero-extend from quarter width."""
        self._unary(0b010010, mask, vs, 4, vd)

    def vzext_vf8(self, vd, vs, mask=VecMask.NO):
        """Zero-extend from eighth width."""
        self._unary(0b010010, mask, vs, 2, vd)

    def vslide1down(self, vd, vs2, rs1, mask=VecMask.NO):
        """Slide down by one, inserting a GPR at the top."""
        emit_opmvx(self._buffer, 0b001111, mask, vs2, rs1, vd)

    def vslidedown(self, vd, vs2, src, mask=VecMask.NO):
        """Slide down by a GPR or unsigned immediate amount."""
        self._emit(_IX_UIMM, 0b001111, mask, vs2, src, vd, "vslidedown")

    def vslide1up(self, vd, vs2, rs1, mask=VecMask.NO):
        """Slide up by one, inserting a GPR at the bottom."""
        emit_opmvx(self._buffer, 0b001110, mask, vs2, rs1, vd)

    def vslideup(self, vd, vs2, src, mask=VecMask.NO):
        """Slide up by a GPR or unsigned immediate amount."""
        self._emit(_IX_UIMM, 0b001110, mask, vs2, src, vd, "vslideup")