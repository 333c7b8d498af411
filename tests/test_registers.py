import pytest

from rvasm.registers import FPR, GPR, LMUL, SEW, VMA, VTA, Vec, VecMask


@pytest.mark.parametrize("kind", [GPR, FPR, Vec])
@pytest.mark.parametrize("index", [0, 17, 31])
def test_register_keeps_index(kind, index):
    assert kind(index).index == index


@pytest.mark.parametrize("kind", [GPR, FPR, Vec])
@pytest.mark.parametrize("index", [-1, 32])
def test_register_index_out_of_range(kind, index):
    with pytest.raises(ValueError):
        kind(index)


@pytest.mark.parametrize("bad", [1.0, "3", True])
def test_register_index_must_be_int(bad):
    with pytest.raises(TypeError):
        Vec(bad)


def test_registers_of_different_kinds_are_distinct():
    regs = {Vec(1), Vec(1), GPR(1), FPR(1)}
    assert len(regs) == 3
    assert Vec(4) == Vec(4)
    assert Vec(4) != GPR(4)


def test_register_is_immutable():
    reg = GPR(5)
    with pytest.raises(AttributeError):
        reg.index = 6
    assert reg.index == 5


def test_register_names():
    assert str(GPR(3)) == "x3"
    assert str(FPR(31)) == "f31"
    assert str(Vec(0)) == "v0"


def test_mask_bit_is_inverted():
    assert VecMask(1) is VecMask.NO
    assert VecMask(0) is VecMask.YES


def test_mask_rejects_other_bits():
    with pytest.raises(ValueError):
        VecMask(2)


def test_vtype_fields_fit_their_widths():
    assert all(SEW(int(member)) is member for member in SEW)
    assert all(LMUL(int(member)) is member for member in LMUL)
    assert all(0 <= int(member) <= 0b111 for member in SEW)
    assert all(0 <= int(member) <= 0b111 for member in LMUL)
    assert {VTA(0), VTA(1)} == set(VTA)
    assert {VMA(0), VMA(1)} == set(VMA)
    assert len({int(m) for m in LMUL}) == len(LMUL)


@pytest.mark.parametrize("kind", [VTA, VMA])
def test_tail_and_mask_policies_are_single_bit(kind):
    with pytest.raises(ValueError):
        kind(2)