"""Vector bit-manipulation and cryptography instructions."""

from __future__ import annotations

from rvasm.encoding import (
    EncodingError,
    emit_opivi_raw,
    emit_opivui,
    emit_opivv,
    emit_opivx,
    emit_opmvv,
    emit_opmvvp,
    emit_opmvx,
)
from rvasm.registers import GPR, Vec, VecMask

_IV = {"vv": emit_opivv, "vx": emit_opivx}
_IV_UIMM = {"vv": emit_opivv, "vx": emit_opivx, "vi": emit_opivui}
_MV = {"vv": emit_opmvv, "vx": emit_opmvx}


def _kind(src):
    if isinstance(src, Vec):
        return "vv"
    if isinstance(src, GPR):
        return "vx"
    if isinstance(src, int) and not isinstance(src, bool):
        return "vi"
    return None


def _check_range(value, upper, name):
    if not 0 <= value <= upper:
        raise EncodingError(f"{name} immediate {value} is outside 0..{upper}")


class VectorCrypto:
    """Vector bit manipulation, carry-less multiply, AES, SHA-2, SM3 and SM4.

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

    def _unary(self, mask, vs2, selector, vd):
        emit_opmvv(self._buffer, 0b010010, mask, vs2, Vec(selector), vd)

    def _crypto(self, funct6, vs2, vs1, vd):
        emit_opmvvp(self._buffer, funct6, VecMask.NO, vs2, vs1, vd)

    # Basic bit manipulation

    def vandn(self, vd, vs2, src, mask=VecMask.NO):
        """And with the inverted second operand."""
        self._emit(_IV, 0b000001, mask, vs2, src, vd, "vandn")

    def vbrev(self, vd, vs2, mask=VecMask.NO):
        """Reverse the bits of each element."""
        self._unary(mask, vs2, 0b01010, vd)

    def vbrev8(self, vd, vs2, mask=VecMask.NO):
        """Reverse the bits within each byte."""
        self._unary(mask, vs2, 0b01000, vd)

    def vrev8(self, vd, vs2, mask=VecMask.NO):
        """Reverse the bytes of each element."""
        self._unary(mask, vs2, 0b01001, vd)

    def vclz(self, vd, vs2, mask=VecMask.NO):
        """Count leading zeros."""
        self._unary(mask, vs2, 0b01100, vd)

    def vctz(self, vd, vs2, mask=VecMask.NO):
        """Count trailing zeros."""
        self._unary(mask, vs2, 0b01101, vd)

    def vcpop(self, vd, vs2, mask=VecMask.NO):
        """Count set bits of each element."""
        self._unary(mask, vs2, 0b01110, vd)

    def vrol(self, vd, vs2, src, mask=VecMask.NO):
        """Rotate left by a vector or scalar amount."""
        self._emit(_IV, 0b010101, mask, vs2, src, vd, "vrol")

    def vror(self, vd, vs2, src, mask=VecMask.NO):
        """Rotate right by a vector, scalar or 6-bit immediate amount."""
        if _kind(src) == "vi":
            _check_range(src, 63, "vror")
            funct6 = 0b010100 | ((src & 0b100000) >> 5)
            emit_opivi_raw(self._buffer, funct6, mask, vs2, src & 0b11111, vd)
            return
        self._emit(_IV, 0b010100, mask, vs2, src, vd, "vror")

    def vwsll(self, vd, vs2, src, mask=VecMask.NO):
        """Widening shift left."""
        self._emit(_IV_UIMM, 0b110101, mask, vs2, src, vd, "vwsll")

    def vclmul(self, vd, vs2, src, mask=VecMask.NO):
        """Carry-less multiply, low half."""
        self._emit(_MV, 0b001100, mask, vs2, src, vd, "vclmul")

    def vclmulh(self, vd, vs2, src, mask=VecMask.NO):
        """Carry-less multiply, high half."""
        self._emit(_MV, 0b001101, mask, vs2, src, vd, "vclmulh")

    # GHASH

    def vghsh(self, vd, vs2, vs1):
        """GHASH add-multiply."""
        self._crypto(0b101100, vs2, vs1, vd)

    def vgmul(self, vd, vs2):
        """GHASH multiply."""
        self._crypto(0b101000, vs2, Vec(0b10001), vd)

    # AES

    def vaesdf_vv(self, vd, vs2):
        """AES final decryption round, vector-vector."""
        self._crypto(0b101000, vs2, Vec(0b00001), vd)

    def vaesdf_vs(self, vd, vs2):
        """AES final decryption round, vector-scalar."""
        self._crypto(0b101001, vs2, Vec(0b00001), vd)

    def vaesdm_vv(self, vd, vs2):
        """AES middle decryption round, vector-vector."""
        self._crypto(0b101000, vs2, Vec(0), vd)

    def vaesdm_vs(self, vd, vs2):
        """AES middle decryption round, vector-scalar."""
        self._crypto(0b101001, vs2, Vec(0), vd)

    def vaesef_vv(self, vd, vs2):
        """AES final encryption round, vector-vector."""
        self._crypto(0b101000, vs2, Vec(0b00011), vd)

    def vaesef_vs(self, vd, vs2):
        """AES final encryption round, vector-scalar."""
        self._crypto(0b101001, vs2, Vec(0b00011), vd)

    def vaesem_vv(self, vd, vs2):
        """AES middle encryption round, vector-vector."""
        self._crypto(0b101000, vs2, Vec(0b00010), vd)

    def vaesem_vs(self, vd, vs2):
        """AES middle encryption round, vector-scalar."""
        self._crypto(0b101001, vs2, Vec(0b00010), vd)

    def vaeskf1(self, vd, vs2, uimm):
        """AES-128 forward key schedule.

        Round numbers outside 1..10 are folded into range by flipping bit 3.
        """
        _check_range(uimm, 15, "vaeskf1")
        if uimm == 0 or uimm > 10:
            uimm ^= 0b1000
        self._crypto(0b100010, vs2, Vec(uimm), vd)

    def vaeskf2(self, vd, vs2, uimm):
        """AES-256 forward key schedule.

        Round numbers outside 2..14 are folded into range by flipping bit 3.
        """
        _check_range(uimm, 15, "vaeskf2")
        if uimm < 2 or uimm > 14:
            uimm ^= 0b1000
        self._crypto(0b101010, vs2, Vec(uimm), vd)

    def vaesz(self, vd, vs2):
        """AES round zero: add the round key."""
        self._crypto(0b101001, vs2, Vec(0b00111), vd)

    # SHA-2

    def vsha2ms(self, vd, vs2, vs1):
        """SHA-2 message schedule."""
        self._crypto(0b101101, vs2, vs1, vd)

    def vsha2ch(self, vd, vs2, vs1):
        """SHA-2 two rounds of compression, high words."""
        self._crypto(0b101110, vs2, vs1, vd)

    def vsha2cl(self, vd, vs2, vs1):
        """SHA-2 two rounds of compression, low words."""
        self._crypto(0b101111, vs2, vs1, vd)

    # SM4 and SM3

    def vsm4k(self, vd, vs2, uimm):
        """SM4 key expansion for round group ``uimm`` (0..7)."""
        _check_range(uimm, 7, "vsm4k")
        self._crypto(0b100001, vs2, Vec(uimm), vd)

    def vsm4r_vv(self, vd, vs2):
        """SM4 rounds, vector-vector."""
        self._crypto(0b101000, vs2, Vec(0b10000), vd)

    def vsm4r_vs(self, vd, vs2):
        """SM4 rounds, vector-scalar."""
        self._crypto(0b101001, vs2, Vec(0b10000), vd)

    def vsm3c(self, vd, vs2, uimm):
        """SM3 compression for round group ``uimm`` (0..31)."""
        _check_range(uimm, 31, "vsm3c")
        self._crypto(0b101011, vs2, Vec(uimm), vd)

    def vsm3me(self, vd, vs2, vs1):
        """SM3 message expansion."""
        self._crypto(0b100000, vs2, vs1, vd)