"""Vector floating-point instructions."""

from __future__ import annotations

from rvasm.encoding import emit_opfvf, emit_opfvv
from rvasm.registers import FPR, Vec, VecMask

_VF = {"vv": emit_opfvv, "vf": emit_opfvf}
_F = {"vf": emit_opfvf}

_V0 = Vec(0)


def _kind(src):
    if isinstance(src, Vec):
        return "vv"
    if isinstance(src, FPR):
        return "vf"
    return None


class VectorFloat:
    """Vector floating-point arithmetic, conversions, compares and moves.

    Where an instruction has several forms, the source operand ``src``
    selects it: ``Vec`` for vector-vector and ``FPR`` for vector-scalar.
    Classes using this mixin provide the code buffer as ``self._buffer``.
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
        emit_opfvv(self._buffer, funct6, mask, vs, Vec(selector), vd)

    # Arithmetic

    def vfadd(self, vd, vs2, src, mask=VecMask.NO):
        """Add."""
        self._emit(_VF, 0b000000, mask, vs2, src, vd, "vfadd")

    def vfsub(self, vd, vs2, src, mask=VecMask.NO):
        """Subtract."""
        self._emit(_VF, 0b000010, mask, vs2, src, vd, "vfsub")

    def vfrsub(self, vd, vs2, rs1, mask=VecMask.NO):
        """Reverse subtract from a scalar."""
        self._emit(_F, 0b100111, mask, vs2, rs1, vd, "vfrsub")

    def vfmul(self, vd, vs2, src, mask=VecMask.NO):
        """Multiply."""
        self._emit(_VF, 0b100100, mask, vs2, src, vd, "vfmul")

    def vfdiv(self, vd, vs2, src, mask=VecMask.NO):
        """Divide."""
        self._emit(_VF, 0b100000, mask, vs2, src, vd, "vfdiv")

    def vfrdiv(self, vd, vs2, rs1, mask=VecMask.NO):
        """Reverse divide: scalar divided by each element."""
        self._emit(_F, 0b100001, mask, vs2, rs1, vd, "vfrdiv")

    def vfmax(self, vd, vs2, src, mask=VecMask.NO):
        """Maximum."""
        self._emit(_VF, 0b000110, mask, vs2, src, vd, "vfmax")

    def vfmin(self, vd, vs2, src, mask=VecMask.NO):
        """Minimum."""
        self._emit(_VF, 0b000100, mask, vs2, src, vd, "vfmin")

    def vfsqrt(self, vd, vs, mask=VecMask.NO):
        """Square root."""
        self._unary(0b010011, mask, vs, 0, vd)

    def vfrsqrt7(self, vd, vs, mask=VecMask.NO):
        """Reciprocal square-root estimate to 7 bits."""
        self._unary(0b010011, mask, vs, 4, vd)

    def vfrec7(self, vd, vs, mask=VecMask.NO):
        """Reciprocal estimate to 7 bits."""
        self._unary(0b010011, mask, vs, 5, vd)

    def vfclass(self, vd, vs, mask=VecMask.NO):
        """Classify each element."""
        self._unary(0b010011, mask, vs, 16, vd)

    # Fused multiply-add

    def vfmacc(self, vd, src, vs2, mask=VecMask.NO):
        """Multiply-add, overwriting the addend."""
        self._emit(_VF, 0b101100, mask, vs2, src, vd, "vfmacc")

    def vfnmacc(self, vd, src, vs2, mask=VecMask.NO):
        """Negated multiply-add, overwriting the addend."""
        self._emit(_VF, 0b101101, mask, vs2, src, vd, "vfnmacc")

    def vfmsac(self, vd, src, vs2, mask=VecMask.NO):
        """Multiply-subtract, overwriting the subtrahend."""
        self._emit(_VF, 0b101110, mask, vs2, src, vd, "vfmsac")

    def vfnmsac(self, vd, src, vs2, mask=VecMask.NO):
        """Negated multiply-subtract, overwriting the subtrahend."""
        self._emit(_VF, 0b101111, mask, vs2, src, vd, "vfnmsac")

    def vfmadd(self, vd, src, vs2, mask=VecMask.NO):
        """Multiply-add, overwriting the multiplicand."""
        self._emit(_VF, 0b101000, mask, vs2, src, vd, "vfmadd")

    def vfnmadd(self, vd, src, vs2, mask=VecMask.NO):
        """Negated multiply-add, overwriting the multiplicand."""
        self._emit(_VF, 0b101001, mask, vs2, src, vd, "vfnmadd")

    def vfmsub(self, vd, src, vs2, mask=VecMask.NO):
        """Multiply-subtract, overwriting the multiplicand."""
        self._emit(_VF, 0b101010, mask, vs2, src, vd, "vfmsub")

    def vfnmsub(self, vd, src, vs2, mask=VecMask.NO):
        """Negated multiply-subtract, overwriting the multiplicand."""
        self._emit(_VF, 0b101011, mask, vs2, src, vd, "vfnmsub")

    # Widening arithmetic

    def vfwadd(self, vd, vs2, src, mask=VecMask.NO):
        """Widening add."""
        self._emit(_VF, 0b110000, mask, vs2, src, vd, "vfwadd")

    def vfwaddw(self, vd, vs2, src, mask=VecMask.NO):
        """Widening add, wide first operand."""
        self._emit(_VF, 0b110100, mask, vs2, src, vd, "vfwaddw")

    def vfwsub(self, vd, vs2, src, mask=VecMask.NO):
        """Widening subtract."""
        self._emit(_VF, 0b110010, mask, vs2, src, vd, "vfwsub")

    def vfwsubw(self, vd, vs2, src, mask=VecMask.NO):
        """Widening subtract, wide first operand."""
        self._emit(_VF, 0b110110, mask, vs2, src, vd, "vfwsubw")

    def vfwmul(self, vd, vs2, src, mask=VecMask.NO):
        """Widening multiply."""
        self._emit(_VF, 0b111000, mask, vs2, src, vd, "vfwmul")

    def vfwmacc(self, vd, src, vs2, mask=VecMask.NO):
        """Widening multiply-add."""
        self._emit(_VF, 0b111100, mask, vs2, src, vd, "vfwmacc")

    def vfwnmacc(self, vd, src, vs2, mask=VecMask.NO):
        """Widening negated multiply-add."""
        self._emit(_VF, 0b111101, mask, vs2, src, vd, "vfwnmacc")

    def vfwmsac(self, vd, src, vs2, mask=VecMask.NO):
        """Widening multiply-subtract."""
        self._emit(_VF, 0b111110, mask, vs2, src, vd, "vfwmsac")

    def vfwnmsac(self, vd, src, vs2, mask=VecMask.NO):
        """Widening negated multiply-subtract."""
        self._emit(_VF, 0b111111, mask, vs2, src, vd, "vfwnmsac")

    # Reductions

    def vfredmax(self, vd, vs2, vs1, mask=VecMask.NO):
        """Maximum reduction."""
        emit_opfvv(self._buffer, 0b000111, mask, vs2, vs1, vd)

    def vfredmin(self, vd, vs2, vs1, mask=VecMask.NO):
        """Minimum reduction."""
        emit_opfvv(self._buffer, 0b000101, mask, vs2, vs1, vd)

    def vfredsum(self, vd, vs2, vs1, mask=VecMask.NO):
        """Unordered sum reduction."""
        emit_opfvv(self._buffer, 0b000001, mask, vs2, vs1, vd)

    def vfredusum(self, vd, vs2, vs1, mask=VecMask.NO):
        """Unordered sum reduction; the same encoding as vfredsum."""
        self.vfredsum(vd, vs2, vs1, mask)

    def vfredosum(self, vd, vs2, vs1, mask=VecMask.NO):
        """Ordered sum reduction."""
        emit_opfvv(self._buffer, 0b000011, mask, vs2, vs1, vd)

    def vfwredsum(self, vd, vs2, vs1, mask=VecMask.NO):
        """Widening unordered sum reduction."""
        emit_opfvv(self._buffer, 0b110001, mask, vs2, vs1, vd)

    def vfwredusum(self, vd, vs2, vs1, mask=VecMask.NO):
        """Widening unordered sum reduction; the same encoding as vfwredsum."""
        self.vfwredsum(vd, vs2, vs1, mask)

    def vfwredosum(self, vd, vs2, vs1, mask=VecMask.NO):
        """Widening ordered sum reduction."""
        emit_opfvv(self._buffer, 0b110011, mask, vs2, vs1, vd)

    # Sign injection

    def vfsgnj(self, vd, vs2, src, mask=VecMask.NO):
        """Sign injection."""
        self._emit(_VF, 0b001000, mask, vs2, src, vd, "vfsgnj")

    def vfsgnjn(self, vd, vs2, src, mask=VecMask.NO):
        """Negated sign injection."""
        self._emit(_VF, 0b001001, mask, vs2, src, vd, "vfsgnjn")

    def vfsgnjx(self, vd, vs2, src, mask=VecMask.NO):
        """Xor sign injection."""
        self._emit(_VF, 0b001010, mask, vs2, src, vd, "vfsgnjx")

    def vfneg(self, vd, vs, mask=VecMask.NO):
        """Negate; vfsgnjn with both sources vs."""
        self.vfsgnjn(vd, vs, vs, mask)

    def vfabs(self, vd, vs, mask=VecMask.NO):
        """Absolute value; vfsgnjx with both sources vs."""
        self.vfsgnjx(vd, vs, vs, mask)

    # Conversions

    def vfcvt_xu_f(self, vd, vs, mask=VecMask.NO):
        """Float to unsigned integer."""
        self._unary(0b010010, mask, vs, 0, vd)

    def vfcvt_x_f(self, vd, vs, mask=VecMask.NO):
        """Float to signed integer."""
        self._unary(0b010010, mask, vs, 1, vd)

    def vfcvt_f_xu(self, vd, vs, mask=VecMask.NO):
        """Unsigned integer to float."""
        self._unary(0b010010, mask, vs, 2, vd)

    def vfcvt_f_x(self, vd, vs, mask=VecMask.NO):
        """Signed integer to float."""
        self._unary(0b010010, mask, vs, 3, vd)

    def vfcvt_rtz_xu_f(self, vd, vs, mask=VecMask.NO):
        """Float to unsigned integer, rounding toward zero."""
        self._unary(0b010010, mask, vs, 6, vd)

    def vfcvt_rtz_x_f(self, vd, vs, mask=VecMask.NO):
        """Float to signed integer, rounding toward zero."""
        self._unary(0b010010, mask, vs, 7, vd)

    def vfwcvt_xu_f(self, vd, vs, mask=VecMask.NO):
        """Widening float to unsigned integer."""
        self._unary(0b010010, mask, vs, 8, vd)

    def vfwcvt_x_f(self, vd, vs, mask=VecMask.NO):
        """Widening float to signed integer."""
        self._unary(0b010010, mask, vs, 9, vd)

    def vfwcvt_f_xu(self, vd, vs, mask=VecMask.NO):
        """Widening unsigned integer to float."""
        self._unary(0b010010, mask, vs, 10, vd)

    def vfwcvt_f_x(self, vd, vs, mask=VecMask.NO):
        """Widening signed integer to float."""
        self._unary(0b010010, mask, vs, 11, vd)

    def vfwcvt_f_f(self, vd, vs, mask=VecMask.NO):
        """Widening float to float."""
        self._unary(0b010010, mask, vs, 12, vd)

    def vfwcvt_rtz_xu_f(self, vd, vs, mask=VecMask.NO):
        """Widening float to unsigned integer, rounding toward zero."""
        self._unary(0b010010, mask, vs, 14, vd)

    def vfwcvt_rtz_x_f(self, vd, vs, mask=VecMask.NO):
        """Widening float to signed integer, rounding toward zero."""
        self._unary(0b010010, mask, vs, 15, vd)

    def vfncvt_xu_f(self, vd, vs, mask=VecMask.NO):
        """Narrowing float to unsigned integer."""
        self._unary(0b010010, mask, vs, 16, vd)

    def vfncvt_x_f(self, vd, vs, mask=VecMask.NO):
        """Narrowing float to signed integer."""
        self._unary(0b010010, mask, vs, 17, vd)

    def vfncvt_f_xu(self, vd, vs, mask=VecMask.NO):
        """Narrowing unsigned integer to float."""
        self._unary(0b010010, mask, vs, 18, vd)

    def vfncvt_f_x(self, vd, vs, mask=VecMask.NO):
        """Narrowing signed integer to float."""
        self._unary(0b010010, mask, vs, 19, vd)

    def vfncvt_f_f(self, vd, vs, mask=VecMask.NO):
        """Narrowing float to float."""
        self._unary(0b010010, mask, vs, 20, vd)

    def vfncvt_rod_f_f(self, vd, vs, mask=VecMask.NO):
        """Narrowing float to float, rounding toward odd."""
        self._unary(0b010010, mask, vs, 21, vd)

    def vfncvt_rtz_xu_f(self, vd, vs, mask=VecMask.NO):
        """Narrowing float to unsigned integer, rounding toward zero."""
        self._unary(0b010010, mask, vs, 22, vd)

    def vfncvt_rtz_x_f(self, vd, vs, mask=VecMask.NO):
        """Narrowing float to signed integer, rounding toward zero."""
        self._unary(0b010010, mask, vs, 23, vd)

    # Moves, merges and slides

    def vfmerge(self, vd, vs2, rs1):
        """Select between vs2 and a scalar under the v0 mask."""
        self._emit(_F, 0b010111, VecMask.YES, vs2, rs1, vd, "vfmerge")

    def vfmv(self, vd, rs):
        """Splat a scalar into every element."""
        self._emit(_F, 0b010111, VecMask.NO, _V0, rs, vd, "vfmv")

    def vfmv_fs(self, rd, vs):
        """Move element 0 into an FPR."""
        emit_opfvv(self._buffer, 0b010000, VecMask.NO, vs, _V0, Vec(rd.index))

    def vfmv_sf(self, vd, rs):
        """Move an FPR into element 0."""
        self._emit(_F, 0b010000, VecMask.NO, _V0, rs, vd, "vfmv_sf")

    def vfslide1down(self, vd, vs2, rs1, mask=VecMask.NO):
        """Slide down by one, inserting a scalar at the top."""
        self._emit(_F, 0b001111, mask, vs2, rs1, vd, "vfslide1down")

    def vfslide1up(self, vd, vs2, rs1, mask=VecMask.NO):
        """Slide up by one, inserting a scalar at the bottom."""
        self._emit(_F, 0b001110, mask, vs2, rs1, vd, "vfslide1up")

    # Compares

    def vmfeq(self, vd, vs2, src, mask=VecMask.NO):
        """Set mask where equal."""
        self._emit(_VF, 0b011000, mask, vs2, src, vd, "vmfeq")

    def vmfle(self, vd, vs2, src, mask=VecMask.NO):
        """Set mask where less or equal."""
        self._emit(_VF, 0b011001, mask, vs2, src, vd, "vmfle")

    def vmflt(self, vd, vs2, src, mask=VecMask.NO):
        """Set mask where less."""
        self._emit(_VF, 0b011011, mask, vs2, src, vd, "vmflt")

    def vmfne(self, vd, vs2, src, mask=VecMask.NO):
        """Set mask where not equal."""
        self._emit(_VF, 0b011100, mask, vs2, src, vd, "vmfne")

    def vmfgt(self, vd, vs2, rs1, mask=VecMask.NO):
        """Set mask where greater than a scalar."""
        self._emit(_F, 0b011101, mask, vs2, rs1, vd, "vmfgt")

    def vmfge(self, vd, vs2, rs1, mask=VecMask.NO):
        """Set mask where greater or equal to a scalar."""
        self._emit(_F, 0b011111, mask, vs2, rs1, vd, "vmfge")

    # BFloat16 extensions

    def vfncvtbf16_f_f_w(self, vd, vs, mask=VecMask.NO):
        """Narrowing single to bfloat16."""
        self._unary(0b010010, mask, vs, 29, vd)

    def vfwcvtbf16_f_f_v(self, vd, vs, mask=VecMask.NO):
        """Widening bfloat16 to single."""
        self._unary(0b010010, mask, vs, 13, vd)

    def vfwmaccbf16(self, vd, src, vs2, mask=VecMask.NO):
        """Widening bfloat16 multiply-add."""
        self._emit(_VF, 0b111011, mask, vs2, src, vd, "vfwmaccbf16")