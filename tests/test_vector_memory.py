import pytest

from rvasm.code_buffer import CodeBuffer
from rvasm.encoding import (
    AddressingMode,
    EncodingError,
    UnitStrideLoadMode,
    UnitStrideStoreMode,
    WidthEncoding,
)
from rvasm.registers import GPR, LMUL, SEW, VMA, VTA, Vec, VecMask
from rvasm.vector_memory import VectorMemory

LOAD_OPCODE = 0b111
STORE_OPCODE = 0b100111
WHOLE_REGISTER_UMOP = 0b01000


class _Asm(VectorMemory):
    def __init__(self):
        self._buffer = CodeBuffer(64)


def _word(method_name, *args, **kwargs):
    asm = _Asm()
    getattr(asm, method_name)(*args, **kwargs)
    data = asm._buffer.tobytes()
    assert len(data) == 4
    return int.from_bytes(data, "little")


def _fields(word):
    return {
        "opcode": word & 0x7F,
        "vd": (word >> 7) & 31,
        "width": (word >> 12) & 7,
        "rs1": (word >> 15) & 31,
        "umop": (word >> 20) & 31,
        "vm": (word >> 25) & 1,
        "mop": (word >> 26) & 3,
        "mew": (word >> 28) & 1,
        "nf": (word >> 29) & 7,
    }


WIDTHS = {
    "8": WidthEncoding.E8,
    "16": WidthEncoding.E16,
    "32": WidthEncoding.E32,
    "64": WidthEncoding.E64,
}


@pytest.mark.parametrize("suffix,width", WIDTHS.items())
def test_unit_stride_load_fields(suffix, width):
    f = _fields(_word(f"vle{suffix}", Vec(12), GPR(9)))
    assert f["opcode"] == LOAD_OPCODE
    assert f["vd"] == 12
    assert f["rs1"] == 9
    assert f["width"] == width
    assert f["umop"] == UnitStrideLoadMode.LOAD
    assert f["mop"] == AddressingMode.UNIT_STRIDE
    assert f["vm"] == VecMask.NO
    assert f["nf"] == 0
    assert f["mew"] == 0


def test_masked_load_clears_vm():
    f = _fields(_word("vle32", Vec(3), GPR(4), VecMask.YES))
    assert f["vm"] == VecMask.YES


@pytest.mark.parametrize("suffix", WIDTHS)
def test_single_segment_load_matches_plain_load(suffix):
    plain = _word(f"vle{suffix}", Vec(5), GPR(6), VecMask.YES)
    seg = _word(f"vlsege{suffix}", 1, Vec(5), GPR(6), VecMask.YES)
    assert plain == seg


@pytest.mark.parametrize("count", range(1, 9))
def test_segment_count_stored_minus_one(count):
    f = _fields(_word("vlsege16", count, Vec(8), GPR(2)))
    assert f["nf"] == count - 1


def test_too_many_segments_rejected():
    asm = _Asm()
    with pytest.raises(EncodingError):
        asm.vlsege8(9, Vec(1), GPR(1))
    assert asm._buffer.tobytes() == b""


def test_mask_load():
    f = _fields(_word("vlm", Vec(7), GPR(10)))
    assert f["umop"] == UnitStrideLoadMode.MASK_LOAD
    assert f["vm"] == 1
    assert f["width"] == WidthEncoding.E8
    assert f["nf"] == 0


@pytest.mark.parametrize("suffix,width", WIDTHS.items())
def test_fault_only_first_loads(suffix, width):
    f = _fields(_word(f"vle{suffix}ff", Vec(2), GPR(3)))
    assert f["umop"] == UnitStrideLoadMode.LOAD_FAULT_ONLY_FIRST
    assert f["width"] == width
    assert f["opcode"] == LOAD_OPCODE


@pytest.mark.parametrize("suffix,width", WIDTHS.items())
def test_strided_load(suffix, width):
    f = _fields(_word(f"vlse{suffix}", Vec(4), GPR(11), GPR(22)))
    assert f["mop"] == AddressingMode.STRIDED
    assert f["rs1"] == 11
    assert f["umop"] == 22
    assert f["width"] == width
    assert _word(f"vlse{suffix}", Vec(4), GPR(11), GPR(22)) == _word(
        f"vlssege{suffix}", 1, Vec(4), GPR(11), GPR(22)
    )


@pytest.mark.parametrize(
    "prefix,mode",
    [("vlox", AddressingMode.INDEXED_ORDERED), ("vlux", AddressingMode.INDEXED_UNORDERED)],
)
@pytest.mark.parametrize("suffix,width", WIDTHS.items())
def test_indexed_load(prefix, mode, suffix, width):
    word = _word(f"{prefix}ei{suffix}", Vec(30), GPR(5), Vec(17))
    f = _fields(word)
    assert f["mop"] == mode
    assert f["umop"] == 17
    assert f["rs1"] == 5
    assert f["vd"] == 30
    assert f["width"] == width
    assert word == _word(f"{prefix}segei{suffix}", 1, Vec(30), GPR(5), Vec(17))


@pytest.mark.parametrize("suffix,width", WIDTHS.items())
@pytest.mark.parametrize("count", [1, 2, 4, 8])
def test_whole_register_load(suffix, width, count):
    word = _word(f"vl{count}re{suffix}", Vec(8), GPR(1))
    f = _fields(word)
    assert f["umop"] == WHOLE_REGISTER_UMOP
    assert f["nf"] == count - 1
    assert f["vm"] == 1
    assert f["width"] == width
    assert word == _word(f"vlre{suffix}", count, Vec(8), GPR(1))


def test_whole_register_load_requires_alignment():
    asm = _Asm()
    with pytest.raises(EncodingError):
        asm.vl4re32(Vec(2), GPR(1))
    with pytest.raises(EncodingError):
        asm.vlre8(2, Vec(3), GPR(1))


def test_whole_register_load_rejects_bad_count():
    asm = _Asm()
    with pytest.raises(EncodingError):
        asm.vlre16(3, Vec(0), GPR(1))
    with pytest.raises(EncodingError):
        asm.vlre16(0, Vec(0), GPR(1))


@pytest.mark.parametrize("suffix,width", WIDTHS.items())
def test_unit_stride_store(suffix, width):
    word = _word(f"vse{suffix}", Vec(19), GPR(14))
    f = _fields(word)
    assert f["opcode"] == STORE_OPCODE
    assert f["vd"] == 19
    assert f["rs1"] == 14
    assert f["width"] == width
    assert f["umop"] == UnitStrideStoreMode.STORE
    assert word == _word(f"vssege{suffix}", 1, Vec(19), GPR(14))


def test_mask_store():
    f = _fields(_word("vsm", Vec(1), GPR(2)))
    assert f["opcode"] == STORE_OPCODE
    assert f["umop"] == UnitStrideStoreMode.MASK_STORE
    assert f["vm"] == 1


@pytest.mark.parametrize("suffix,width", WIDTHS.items())
def test_strided_store(suffix, width):
    word = _word(f"vsse{suffix}", Vec(6), GPR(7), GPR(8), VecMask.YES)
    f = _fields(word)
    assert f["opcode"] == STORE_OPCODE
    assert f["mop"] == AddressingMode.STRIDED
    assert f["umop"] == 8
    assert f["rs1"] == 7
    assert f["vm"] == 0
    assert f["width"] == width
    assert word == _word(f"vsssege{suffix}", 1, Vec(6), GPR(7), GPR(8), VecMask.YES)


@pytest.mark.parametrize(
    "prefix,mode",
    [("vsox", AddressingMode.INDEXED_ORDERED), ("vsux", AddressingMode.INDEXED_UNORDERED)],
)
@pytest.mark.parametrize("suffix,width", WIDTHS.items())
def test_indexed_store(prefix, mode, suffix, width):
    word = _word(f"{prefix}ei{suffix}", Vec(9), GPR(10), Vec(11))
    f = _fields(word)
    assert f["opcode"] == STORE_OPCODE
    assert f["mop"] == mode
    assert f["umop"] == 11
    assert f["vd"] == 9
    assert f["width"] == width
    assert word == _word(f"{prefix}segei{suffix}", 1, Vec(9), GPR(10), Vec(11))


@pytest.mark.parametrize("count", [1, 2, 4, 8])
def test_whole_register_store(count):
    word = _word(f"vs{count}r", Vec(16), GPR(3))
    f = _fields(word)
    assert f["opcode"] == STORE_OPCODE
    assert f["umop"] == WHOLE_REGISTER_UMOP
    assert f["nf"] == count - 1
    assert f["width"] == WidthEncoding.E8
    assert word == _word("vsr", count, Vec(16), GPR(3))


def test_whole_register_store_checks():
    asm = _Asm()
    with pytest.raises(EncodingError):
        asm.vs2r(Vec(1), GPR(1))
    with pytest.raises(EncodingError):
        asm.vs8r(Vec(4), GPR(1))
    with pytest.raises(EncodingError):
        asm.vsr(3, Vec(0), GPR(1))


def test_vset_base_encodings():
    assert _word("vsetvl", GPR(0), GPR(0), GPR(0)) == 0x80007057
    assert _word("vsetvli", GPR(0), GPR(0), SEW.E8, LMUL.M1) == 0x00007057
    assert _word("vsetivli", GPR(0), 0, SEW.E8, LMUL.M1) == 0xC0007057


def test_vsetvli_fields():
    word = _word("vsetvli", GPR(5), GPR(6), SEW.E32, LMUL.MF2, VTA.YES, VMA.YES)
    assert (word >> 31) == 0
    assert (word >> 7) & 31 == 5
    assert (word >> 15) & 31 == 6
    assert (word >> 20) & 7 == LMUL.MF2
    assert (word >> 23) & 7 == SEW.E32
    assert (word >> 26) & 1 == VTA.YES
    assert (word >> 27) & 1 == VMA.YES


def test_vsetivli_fields_and_range():
    word = _word("vsetivli", GPR(1), 31, SEW.E64, LMUL.M8)
    assert (word >> 30) == 3
    assert (word >> 15) & 31 == 31
    assert (word >> 20) & 7 == LMUL.M8
    assert (word >> 23) & 7 == SEW.E64
    assert (word >> 26) & 3 == 0
    asm = _Asm()
    with pytest.raises(EncodingError):
        asm.vsetivli(GPR(1), 32, SEW.E8, LMUL.M1)


def test_vsetvl_fields():
    word = _word("vsetvl", GPR(3), GPR(4), GPR(5))
    assert (word >> 7) & 31 == 3
    assert (word >> 15) & 31 == 4
    assert (word >> 20) & 31 == 5
    assert (word >> 31) == 1