import pytest

from rvasm.code_buffer import CodeBuffer
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
from rvasm.vector_permute import VectorPermute


class _Asm(VectorPermute):
    def __init__(self):
        self.buffer = CodeBuffer(64)
        self._buffer = self.buffer

    def last(self):
        return int.from_bytes(self.buffer.tobytes()[-4:], "little")


def _expect(encoder, *args):
    buf = CodeBuffer(4)
    encoder(buf, *args)
    return int.from_bytes(buf.tobytes(), "little")


@pytest.fixture
def asm():
    return _Asm()


def test_pinned_encodings(asm):
    asm.vid(Vec(31))
    assert asm.last() == 0x5208AFD7
    asm.vmv(Vec(8), 0)
    assert asm.last() == 0x5E003457
    asm.vmv1r(Vec(1), Vec(2))
    assert asm.last() == 0x9E2030D7


@pytest.mark.parametrize(
    "name, funct6",
    [
        ("vmand", 0b011001),
        ("vmandnot", 0b011000),
        ("vmnand", 0b011101),
        ("vmnor", 0b011110),
        ("vmor", 0b011010),
        ("vmornot", 0b011100),
        ("vmxnor", 0b011111),
        ("vmxor", 0b011011),
        ("vcompress", 0b010111),
    ],
)
def test_mask_logic(asm, name, funct6):
    getattr(asm, name)(Vec(3), Vec(4), Vec(5))
    assert asm.last() == _expect(
        emit_opmvv, funct6, VecMask.NO, Vec(4), Vec(5), Vec(3)
    )


@pytest.mark.parametrize(
    "name, funct6, selector",
    [
        ("vmsbf", 0b010100, 1),
        ("vmsif", 0b010100, 3),
        ("vmsof", 0b010100, 2),
        ("viota", 0b010100, 16),
        ("vsext_vf2", 0b010010, 7),
        ("vsext_vf4", 0b010010, 5),
        ("vsext_vf8", 0b010010, 3),
        ("vzext_vf2", 0b010010, 6),
        ("vzext_vf4", 0b010010, 4),
        ("vzext_vf8", 0b010010, 2),
    ],
)
@pytest.mark.parametrize("mask", [VecMask.YES, VecMask.NO])
def test_unary_selector_ops(asm, name, funct6, selector, mask):
    getattr(asm, name)(Vec(8), Vec(12), mask)
    assert asm.last() == _expect(
        emit_opmvv, funct6, mask, Vec(12), Vec(selector), Vec(8)
    )


def test_vfirst_and_vpopc_write_gpr(asm):
    asm.vfirst(GPR(10), Vec(4), VecMask.YES)
    assert asm.last() == _expect(
        emit_opmvv, 0b010000, VecMask.YES, Vec(4), Vec(17), Vec(10)
    )
    asm.vpopc(GPR(11), Vec(4))
    assert asm.last() == _expect(
        emit_opmvv, 0b010000, VecMask.NO, Vec(4), Vec(16), Vec(11)
    )


def test_vmv_scalar_moves(asm):
    asm.vmv_sx(Vec(2), GPR(9))
    assert asm.last() == _expect(
        emit_opmvx, 0b010000, VecMask.NO, Vec(0), GPR(9), Vec(2)
    )
    asm.vmv_xs(GPR(9), Vec(2))
    assert asm.last() == _expect(
        emit_opmvv, 0b010000, VecMask.NO, Vec(2), Vec(0), Vec(9)
    )


def test_vmv_forms(asm):
    asm.vmv(Vec(1), Vec(7))
    assert asm.last() == _expect(emit_opivv, 0b010111, VecMask.NO, Vec(0), Vec(7), Vec(1))
    asm.vmv(Vec(1), GPR(7))
    assert asm.last() == _expect(emit_opivx, 0b010111, VecMask.NO, Vec(0), GPR(7), Vec(1))
    asm.vmv(Vec(1), -16)
    assert asm.last() == _expect(emit_opivi, 0b010111, VecMask.NO, Vec(0), -16, Vec(1))


def test_vmerge_is_always_masked(asm):
    asm.vmerge(Vec(1), Vec(2), 5)
    assert asm.last() & (1 << 25) == 0
    assert asm.last() == _expect(emit_opivi, 0b010111, VecMask.YES, Vec(2), 5, Vec(1))


@pytest.mark.parametrize(
    "name, count, imm",
    [("vmv2r", 2, 0b00001), ("vmv4r", 4, 0b00011), ("vmv8r", 8, 0b00111)],
)
def test_whole_register_moves(asm, name, count, imm):
    getattr(asm, name)(Vec(count), Vec(count * 2))
    assert asm.last() == _expect(
        emit_opivi, 0b100111, VecMask.NO, Vec(count * 2), imm, Vec(count)
    )
    with pytest.raises(EncodingError):
        getattr(asm, name)(Vec(1), Vec(0))
    with pytest.raises(EncodingError):
        getattr(asm, name)(Vec(0), Vec(count + 1))


def test_compare_forms(asm):
    asm.vmseq(Vec(0), Vec(1), Vec(2))
    assert asm.last() == _expect(emit_opivv, 0b011000, VecMask.NO, Vec(1), Vec(2), Vec(0))
    asm.vmsne(Vec(0), Vec(1), GPR(2), VecMask.YES)
    assert asm.last() == _expect(emit_opivx, 0b011001, VecMask.YES, Vec(1), GPR(2), Vec(0))
    asm.vmsle(Vec(0), Vec(1), 15)
    assert asm.last() == _expect(emit_opivi, 0b011101, VecMask.NO, Vec(1), 15, Vec(0))
    asm.vmsgtu(Vec(0), Vec(1), -1)
    assert asm.last() == _expect(emit_opivi, 0b011110, VecMask.NO, Vec(1), -1, Vec(0))


def test_compare_rejects_missing_forms(asm):
    with pytest.raises(TypeError):
        asm.vmsgt(Vec(0), Vec(1), Vec(2))
    with pytest.raises(TypeError):
        asm.vmslt(Vec(0), Vec(1), 3)
    with pytest.raises(TypeError):
        asm.vmsltu(Vec(0), Vec(1), 3)
    assert len(asm.buffer) == 0


def test_compare_immediate_range(asm):
    with pytest.raises(EncodingError):
        asm.vmseq(Vec(0), Vec(1), 16)
    with pytest.raises(EncodingError):
        asm.vmsgt(Vec(0), Vec(1), -17)


def test_reduction_mask_bit(asm):
    asm.vredsum(Vec(1), Vec(2), Vec(3), VecMask.YES)
    masked = asm.last()
    asm.vredsum(Vec(1), Vec(2), Vec(3), VecMask.NO)
    assert asm.last() ^ masked == 1 << 25


@pytest.mark.parametrize(
    "name, funct6",
    [
        ("vredand", 0b000001),
        ("vredmax", 0b000111),
        ("vredmaxu", 0b000110),
        ("vredmin", 0b000101),
        ("vredminu", 0b000100),
        ("vredor", 0b000010),
        ("vredsum", 0b000000),
        ("vredxor", 0b000011),
    ],
)
def test_reductions(asm, name, funct6):
    getattr(asm, name)(Vec(5), Vec(6), Vec(7))
    assert asm.last() == _expect(emit_opmvv, funct6, VecMask.NO, Vec(6), Vec(7), Vec(5))


def test_widening_reductions(asm):
    asm.vwredsum(Vec(4), Vec(8), Vec(12))
    assert asm.last() == _expect(emit_opivv, 0b110001, VecMask.NO, Vec(8), Vec(12), Vec(4))
    asm.vwredsumu(Vec(4), Vec(8), Vec(12))
    assert asm.last() == _expect(emit_opivv, 0b110000, VecMask.NO, Vec(8), Vec(12), Vec(4))


def test_vrgather_forms(asm):
    asm.vrgather(Vec(1), Vec(2), Vec(3))
    assert asm.last() == _expect(emit_opivv, 0b001100, VecMask.NO, Vec(2), Vec(3), Vec(1))
    asm.vrgather(Vec(1), Vec(2), GPR(3))
    assert asm.last() == _expect(emit_opivx, 0b001100, VecMask.NO, Vec(2), GPR(3), Vec(1))
    asm.vrgather(Vec(1), Vec(2), 31)
    assert asm.last() == _expect(emit_opivui, 0b001100, VecMask.NO, Vec(2), 31, Vec(1))


def test_vrgather_rejects_overlap(asm):
    with pytest.raises(EncodingError):
        asm.vrgather(Vec(1), Vec(1), Vec(3))
    with pytest.raises(EncodingError):
        asm.vrgather(Vec(1), Vec(2), Vec(1))
    with pytest.raises(EncodingError):
        asm.vrgather(Vec(1), Vec(1), GPR(3))
    with pytest.raises(EncodingError):
        asm.vrgatherei16(Vec(4), Vec(5), Vec(4))
    assert len(asm.buffer) == 0


def test_vrgatherei16(asm):
    asm.vrgatherei16(Vec(4), Vec(5), Vec(6), VecMask.YES)
    assert asm.last() == _expect(emit_opivv, 0b001110, VecMask.YES, Vec(5), Vec(6), Vec(4))


def test_slides(asm):
    asm.vslidedown(Vec(1), Vec(2), GPR(3))
    assert asm.last() == _expect(emit_opivx, 0b001111, VecMask.NO, Vec(2), GPR(3), Vec(1))
    asm.vslideup(Vec(1), Vec(2), 31)
    assert asm.last() == _expect(emit_opivui, 0b001110, VecMask.NO, Vec(2), 31, Vec(1))
    asm.vslide1down(Vec(1), Vec(2), GPR(3))
    assert asm.last() == _expect(emit_opmvx, 0b001111, VecMask.NO, Vec(2), GPR(3), Vec(1))
    asm.vslide1up(Vec(1), Vec(2), GPR(3))
    assert asm.last() == _expect(emit_opmvx, 0b001110, VecMask.NO, Vec(2), GPR(3), Vec(1))


def test_slide_immediate_range_and_form(asm):
    with pytest.raises(EncodingError):
        asm.vslidedown(Vec(1), Vec(2), 32)
    with pytest.raises(EncodingError):
        asm.vslideup(Vec(1), Vec(2), -1)
    with pytest.raises(TypeError):
        asm.vslideup(Vec(1), Vec(2), Vec(3))


def test_each_instruction_advances_four_bytes(asm):
    asm.vid(Vec(1))
    asm.vmv_sx(Vec(1), GPR(2))
    asm.vmand(Vec(1), Vec(2), Vec(3))
    assert len(asm.buffer) == 12
    assert len(asm.buffer.tobytes()) == 12