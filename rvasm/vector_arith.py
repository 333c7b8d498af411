"""Vector integer arithmetic instructions."""

from __future__ import annotations

from rvasm.encoding import (
    emit_opivi,
    emit_opivui,
    emit_opivv,
    emit_opivx,
    emit_opmvv,
    emit_opmvx,
)
from rvasm.registers import GPR, Vec, VecMask

_MV = {"vv": emit_opmvv, "vx": emit_opmvx}
_MX = {"vx": emit_opmvx}
_IV = {"vv": emit_opivv, "vx": emit_opivx}
_IV_SIMM = {"vv": emit_opivv, "vx": emit_opivx, "vi": emit_opivi}
_IV_UIMM = {"vv": emit_opivv, "vx": emit_opivx, "vi": emit_opivui}
_IX_SIMM = {"vx": emit_opivx, "vi": emit_opivi}


def _kind(src):
    if isinstance(src, Vec):
        return "vv"
    if isinstance(src, GPR):
        return "vx"
    if isinstance(src, int) and not isinstance(src, bool):
        return "vi"
    return None


class VectorArithmetic:
    """Vector integer arithmetic.

    The second source operand ``src`` selects the form: a ``Vec`` gives the
    vector-vector form, a ``GPR`` the vector-scalar form and an ``int`` the
    vector-immediate form, where the instruction has one. Classes using this
    mixin provide the code buffer as ``self._buffer``.
    """

    _buffer = None

    def _emit(self, forms, funct6, vm, vs2, src, vd, name):
        encoder = forms.get(_kind(src))
        if encoder is None:
            raise TypeError(
                f"{name} does not take a {type(src).__name__} source operand"
            )
        encoder(self._buffer, funct6, vm, vs2, src, vd)

    def vaadd(self, vd, vs2, src, mask=VecMask.NO):
        """Averaging add, signed."""
        self._emit(_MV, 0b001001, mask, vs2, src, vd, "vaadd")

    def vaaddu(self, vd, vs2, src, mask=VecMask.NO):
        """Averaging add, unsigned."""
        self._emit(_MV, 0b001000, mask, vs2, src, vd, "vaaddu")

    def vadc(self, vd, vs2, src):
        """Add with carry from v0."""
        self._emit(_IV_SIMM, 0b010000, VecMask.YES, vs2, src, vd, "vadc")

    def vadd(self, vd, vs2, src, mask=VecMask.NO):
        """Integer add."""
        self._emit(_IV_SIMM, 0b000000, mask, vs2, src, vd, "vadd")

    def vand(self, vd, vs2, src, mask=VecMask.NO):
        """Bitwise and."""
        self._emit(_IV_SIMM, 0b001001, mask, vs2, src, vd, "vand")

    def vasub(self, vd, vs2, src, mask=VecMask.NO):
        """Averaging subtract, signed."""
        self._emit(_MV, 0b001011, mask, vs2, src, vd, "vasub")

    def vasubu(self, vd, vs2, src, mask=VecMask.NO):
        """Averaging subtract, unsigned."""
        self._emit(_MV, 0b001010, mask, vs2, src, vd, "vasubu")

    def vdiv(self, vd, vs2, src, mask=VecMask.NO):
        """Signed divide."""
        self._emit(_MV, 0b100001, mask, vs2, src, vd, "vdiv")

    def vdivu(self, vd, vs2, src, mask=VecMask.NO):
        """Unsigned divide."""
        self._emit(_MV, 0b100000, mask, vs2, src, vd, "vdivu")

    def vmacc(self, vd, src, vs2, mask=VecMask.NO):
        """Multiply-add, overwriting the addend."""
        self._emit(_MV, 0b101101, mask, vs2, src, vd, "vmacc")

    def vmadc(self, vd, vs2, src, mask=VecMask.NO):
        """Carry-out of an add."""
        self._emit(_IV_SIMM, 0b010001, mask, vs2, src, vd, "vmadc")

    def vmadd(self, vd, src, vs2, mask=VecMask.NO):
        """Multiply-add, overwriting the multiplicand."""
        self._emit(_MV, 0b101001, mask, vs2, src, vd, "vmadd")

    def vmax(self, vd, vs2, src, mask=VecMask.NO):
        """Signed maximum."""
        self._emit(_IV, 0b000111, mask, vs2, src, vd, "vmax")

    def vmaxu(self, vd, vs2, src, mask=VecMask.NO):
        """Unsigned maximum."""
        self._emit(_IV, 0b000110, mask, vs2, src, vd, "vmaxu")

    def vmin(self, vd, vs2, src, mask=VecMask.NO):
        """Signed minimum."""
        self._emit(_IV, 0b000101, mask, vs2, src, vd, "vmin")

    def vminu(self, vd, vs2, src, mask=VecMask.NO):
        """Unsigned minimum."""
        self._emit(_IV, 0b000100, mask, vs2, src, vd, "vminu")

    def vmsbc(self, vd, vs2, src, mask=VecMask.NO):
        """Borrow-out of a subtract."""
        self._emit(_IV, 0b010011, mask, vs2, src, vd, "vmsbc")

    def vmul(self, vd, vs2, src, mask=VecMask.NO):
        """Multiply, low bits."""
        self._emit(_MV, 0b100101, mask, vs2, src, vd, "vmul")

    def vmulh(self, vd, vs2, src, mask=VecMask.NO):
        """Signed multiply, high bits."""
        self._emit(_MV, 0b100111, mask, vs2, src, vd, "vmulh")

    def vmulhsu(self, vd, vs2, src, mask=VecMask.NO):
        """Signed-by-unsigned multiply, high bits."""
        self._emit(_MV, 0b100110, mask, vs2, src, vd, "vmulhsu")

    def vmulhu(self, vd, vs2, src, mask=VecMask.NO):
        """Unsigned multiply, high bits."""
        self._emit(_MV, 0b100100, mask, vs2, src, vd, "vmulhu")

    def vnclip(self, vd, vs2, src, mask=VecMask.NO):
        """Narrowing signed clip."""
        self._emit(_IV_UIMM, 0b101111, mask, vs2, src, vd, "vnclip")

    def vnclipu(self, vd, vs2, src, mask=VecMask.NO):
        """Narrowing unsigned clip."""
        self._emit(_IV_UIMM, 0b101110, mask, vs2, src, vd, "vnclipu")

    def vnmsac(self, vd, src, vs2, mask=VecMask.NO):
        """Negated multiply-subtract, overwriting the subtrahend."""
        self._emit(_MV, 0b101111, mask, vs2, src, vd, "vnmsac")

    def vnmsub(self, vd, src, vs2, mask=VecMask.NO):
        """Negated multiply-subtract, overwriting the multiplicand."""
        self._emit(_MV, 0b101011, mask, vs2, src, vd, "vnmsub")

    def vnsra(self, vd, vs2, src, mask=VecMask.NO):
        """Narrowing arithmetic right shift."""
        self._emit(_IV_UIMM, 0b101101, mask, vs2, src, vd, "vnsra")

    def vnsrl(self, vd, vs2, src, mask=VecMask.NO):
        """Narrowing logical right shift."""
        self._emit(_IV_UIMM, 0b101100, mask, vs2, src, vd, "vnsrl")

    def vor(self, vd, vs2, src, mask=VecMask.NO):
        """Bitwise or."""
        self._emit(_IV_SIMM, 0b001010, mask, vs2, src, vd, "vor")

    def vrem(self, vd, vs2, src, mask=VecMask.NO):
        """Signed remainder."""
        self._emit(_MV, 0b100011, mask, vs2, src, vd, "vrem")

    def vremu(self, vd, vs2, src, mask=VecMask.NO):
        """Unsigned remainder."""
        self._emit(_MV, 0b100010, mask, vs2, src, vd, "vremu")

    def vrsub(self, vd, vs2, src, mask=VecMask.NO):
        """Reverse subtract; scalar or immediate only."""
        self._emit(_IX_SIMM, 0b000011, mask, vs2, src, vd, "vrsub")

    def vsadd(self, vd, vs2, src, mask=VecMask.NO):
        """Saturating signed add."""
        self._emit(_IV_SIMM, 0b100001, mask, vs2, src, vd, "vsadd")

    def vsaddu(self, vd, vs2, src, mask=VecMask.NO):
        """Saturating unsigned add."""
        self._emit(_IV_SIMM, 0b100000, mask, vs2, src, vd, "vsaddu")

    def vsbc(self, vd, vs2, src):
        """Subtract with borrow from v0."""
        self._emit(_IV, 0b010010, VecMask.YES, vs2, src, vd, "vsbc")

    def vsll(self, vd, vs2, src, mask=VecMask.NO):
        """Logical left shift."""
        self._emit(_IV_UIMM, 0b100101, mask, vs2, src, vd, "vsll")

    def vsmul(self, vd, vs2, src, mask=VecMask.NO):
        """Fractional multiply with rounding and saturation."""
        self._emit(_IV, 0b100111, mask, vs2, src, vd, "vsmul")

    def vsra(self, vd, vs2, src, mask=VecMask.NO):
        """Arithmetic right shift."""
        self._emit(_IV_UIMM, 0b101001, mask, vs2, src, vd, "vsra")

    def vsrl(self, vd, vs2, src, mask=VecMask.NO):
        """Logical right shift."""
        self._emit(_IV_UIMM, 0b101000, mask, vs2, src, vd, "vsrl")

    def vssra(self, vd, vs2, src, mask=VecMask.NO):
        """Scaling arithmetic right shift."""
        self._emit(_IV_UIMM, 0b101011, mask, vs2, src, vd, "vssra")

    def vssrl(self, vd, vs2, src, mask=VecMask.NO):
        """Scaling logical right shift."""
        self._emit(_IV_UIMM, 0b101010, mask, vs2, src, vd, "vssrl")

    def vssub(self, vd, vs2, src, mask=VecMask.NO):
        """Saturating signed subtract."""
        self._emit(_IV, 0b100011, mask, vs2, src, vd, "vssub")

    def vssubu(self, vd, vs2, src, mask=VecMask.NO):
        """Saturating unsigned subtract."""
        self._emit(_IV, 0b100010, mask, vs2, src, vd, "vssubu")

    def vsub(self, vd, vs2, src, mask=VecMask.NO):
        """Integer subtract."""
        self._emit(_IV, 0b000010, mask, vs2, src, vd, "vsub")

    def vwadd(self, vd, vs2, src, mask=VecMask.NO):
        """Widening signed add."""
        self._emit(_MV, 0b110001, mask, vs2, src, vd, "vwadd")

    def vwaddw(self, vd, vs2, src, mask=VecMask.NO):
        """Widening signed add, wide first operand."""
        self._emit(_MV, 0b110101, mask, vs2, src, vd, "vwaddw")

    def vwaddu(self, vd, vs2, src, mask=VecMask.NO):
        """Widening unsigned add."""
        self._emit(_MV, 0b110000, mask, vs2, src, vd, "vwaddu")

    def vwadduw(self, vd, vs2, src, mask=VecMask.NO):
        """Widening unsigned add, wide first operand."""
        self._emit(_MV, 0b110100, mask, vs2, src, vd, "vwadduw")

    def vwmacc(self, vd, src, vs2, mask=VecMask.NO):
        """Widening signed multiply-add."""
        self._emit(_MV, 0b111101, mask, vs2, src, vd, "vwmacc")

    def vwmaccsu(self, vd, src, vs2, mask=VecMask.NO):
        """Widening signed-by-unsigned multiply-add."""
        self._emit(_MV, 0b111111, mask, vs2, src, vd, "vwmaccsu")

    def vwmaccu(self, vd, src, vs2, mask=VecMask.NO):
        """Widening unsigned multiply-add."""
        self._emit(_MV, 0b111100, mask, vs2, src, vd, "vwmaccu")

    def vwmaccus(self, vd, rs1, vs2, mask=VecMask.NO):
        """Widening unsigned-scalar-by-signed multiply-add."""
        self._emit(_MX, 0b111110, mask, vs2, rs1, vd, "vwmaccus")

    def vwmul(self, vd, vs2, src, mask=VecMask.NO):
        """Widening signed multiply."""
        self._emit(_MV, 0b111011, mask, vs2, src, vd, "vwmul")

    def vwmulsu(self, vd, vs2, src, mask=VecMask.NO):
        """Widening signed-by-unsigned multiply."""
        self._emit(_MV, 0b111010, mask, vs2, src, vd, "vwmulsu")

    def vwmulu(self, vd, vs2, src, mask=VecMask.NO):
        """Widening unsigned multiply."""
        self._emit(_MV, 0b111000, mask, vs2, src, vd, "vwmulu")

    def vwsub(self, vd, vs2, src, mask=VecMask.NO):
        """Widening signed subtract."""
        self._emit(_MV, 0b110011, mask, vs2, src, vd, "vwsub")

    def vwsubw(self, vd, vs2, src, mask=VecMask.NO):
        """Widening signed subtract, wide first operand."""
        self._emit(_MV, 0b110111, mask, vs2, src, vd, "vwsubw")

    def vwsubu(self, vd, vs2, src, mask=VecMask.NO):
        """Widening unsigned subtract."""
        self._emit(_MV, 0b110010, mask, vs2, src, vd, "vwsubu")

    def vwsubuw(self, vd, vs2, src, mask=VecMask.NO):
        """Widening unsigned subtract, wide first operand."""
        self._emit(_MV, 0b110110, mask, vs2, src, vd, "vwsubuw")

    def vxor(self, vd, vs2, src, mask=VecMask.NO):
        """Bitwise exclusive or."""
        self._emit(_IV_SIMM, 0b001011, mask, vs2, src, vd, "vxor")