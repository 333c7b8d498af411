"""Vector load, store and configuration instructions."""

from __future__ import annotations

from rvasm.encoding import (
    AddressingMode,
    EncodingError,
    UnitStrideLoadMode,
    UnitStrideStoreMode,
    WidthEncoding,
    emit_load,
    emit_load_whole_reg,
    emit_store,
    emit_store_whole_reg,
)
from rvasm.registers import VMA, VTA, VecMask

_WHOLE_REGISTER_COUNTS = (1, 2, 4, 8)

_VSETVLI_BASE = 0x00007057
_VSETIVLI_BASE = 0xC0007057
_VSETVL_BASE = 0x80007057


def _check_whole_count(num_registers):
    if num_registers not in _WHOLE_REGISTER_COUNTS:
        raise EncodingError(
            f"whole-register count must be 1, 2, 4 or 8, got {num_registers}"
        )


def _check_aligned(reg, group, name):
    if reg.index % group:
        raise EncodingError(f"{name} needs a register aligned to {group}, got {reg}")


def _vtype(sew, lmul, vta, vma):
    return int(lmul) | (int(sew) << 3) | (int(vta) << 6) | (int(vma) << 7)


class VectorMemory:
    """Vector loads and stores and the vsetvl family.

    Classes using this mixin provide the code buffer as ``self._buffer``.
    """

    _buffer = None

    # Shared emitters

    def _unit_load(self, nf, vd, rs, mask, width, lumop=UnitStrideLoadMode.LOAD):
        emit_load(self._buffer, nf, False, AddressingMode.UNIT_STRIDE, mask,
                  lumop, rs, width, vd)

    def _strided_load(self, nf, vd, rs1, rs2, mask, width):
        emit_load(self._buffer, nf, False, AddressingMode.STRIDED, mask,
                  rs2, rs1, width, vd)

    def _indexed_load(self, mode, nf, vd, rs, vs, mask, width):
        emit_load(self._buffer, nf, False, mode, mask, vs, rs, width, vd)

    def _whole_load(self, num_registers, vd, rs, width):
        _check_whole_count(num_registers)
        _check_aligned(vd, num_registers, "whole-register load")
        emit_load_whole_reg(self._buffer, num_registers, False, rs, width, vd)

    def _unit_store(self, nf, vs, rs, mask, width):
        emit_store(self._buffer, nf, False, AddressingMode.UNIT_STRIDE, mask,
                   UnitStrideStoreMode.STORE, rs, width, vs)

    def _strided_store(self, nf, vs, rs1, rs2, mask, width):
        emit_store(self._buffer, nf, False, AddressingMode.STRIDED, mask,
                   rs2, rs1, width, vs)

    def _indexed_store(self, mode, nf, vd, rs, vs, mask, width):
        emit_store(self._buffer, nf, False, mode, mask, vs, rs, width, vd)

    # Unit-stride loads

    def vle8(self, vd, rs, mask=VecMask.NO):
        """Load 8-bit elements."""
        self.vlsege8(1, vd, rs, mask)

    def vle16(self, vd, rs, mask=VecMask.NO):
        """Load 16-bit elements."""
        self.vlsege16(1, vd, rs, mask)

    def vle32(self, vd, rs, mask=VecMask.NO):
        """Load 32-bit elements."""
        self.vlsege32(1, vd, rs, mask)

    def vle64(self, vd, rs, mask=VecMask.NO):
        """Load 64-bit elements."""
        self.vlsege64(1, vd, rs, mask)

    def vlm(self, vd, rs):
        """Load a mask register."""
        self._unit_load(0, vd, rs, VecMask.NO, WidthEncoding.E8,
                        UnitStrideLoadMode.MASK_LOAD)

    def vle8ff(self, vd, rs, mask=VecMask.NO):
        """Fault-only-first load of 8-bit elements."""
        self._unit_load(0, vd, rs, mask, WidthEncoding.E8,
                        UnitStrideLoadMode.LOAD_FAULT_ONLY_FIRST)

    def vle16ff(self, vd, rs, mask=VecMask.NO):
        """Fault-only-first load of 16-bit elements."""
        self._unit_load(0, vd, rs, mask, WidthEncoding.E16,
                        UnitStrideLoadMode.LOAD_FAULT_ONLY_FIRST)

    def vle32ff(self, vd, rs, mask=VecMask.NO):
        """Fault-only-first load of 32-bit elements."""
        self._unit_load(0, vd, rs, mask, WidthEncoding.E32,
                        UnitStrideLoadMode.LOAD_FAULT_ONLY_FIRST)

    def vle64ff(self, vd, rs, mask=VecMask.NO):
        """Fault-only-first load of 64-bit elements."""
        self._unit_load(0, vd, rs, mask, WidthEncoding.E64,
                        UnitStrideLoadMode.LOAD_FAULT_ONLY_FIRST)

    def vlsege8(self, num_segments, vd, rs, mask=VecMask.NO):
        """Segment load of 8-bit elements."""
        self._unit_load(num_segments, vd, rs, mask, WidthEncoding.E8)

    def vlsege16(self, num_segments, vd, rs, mask=VecMask.NO):
        """Segment load of 16-bit elements."""
        self._unit_load(num_segments, vd, rs, mask, WidthEncoding.E16)

    def vlsege32(self, num_segments, vd, rs, mask=VecMask.NO):
        """Segment load of 32-bit elements."""
        self._unit_load(num_segments, vd, rs, mask, WidthEncoding.E32)

    def vlsege64(self, num_segments, vd, rs, mask=VecMask.NO):
        """Segment load of 64-bit elements."""
        self._unit_load(num_segments, vd, rs, mask, WidthEncoding.E64)

    # Strided loads

    def vlse8(self, vd, rs1, rs2, mask=VecMask.NO):
        """Strided load of 8-bit elements; rs2 holds the stride."""
        self.vlssege8(1, vd, rs1, rs2, mask)

    def vlse16(self, vd, rs1, rs2, mask=VecMask.NO):
        """Strided load of 16-bit elements."""
        self.vlssege16(1, vd, rs1, rs2, mask)

    def vlse32(self, vd, rs1, rs2, mask=VecMask.NO):
        """Strided load of 32-bit elements."""
        self.vlssege32(1, vd, rs1, rs2, mask)

    def vlse64(self, vd, rs1, rs2, mask=VecMask.NO):
        """Strided load of 64-bit elements."""
        self.vlssege64(1, vd, rs1, rs2, mask)

    def vlssege8(self, num_segments, vd, rs1, rs2, mask=VecMask.NO):
        """Strided segment load of 8-bit elements."""
        self._strided_load(num_segments, vd, rs1, rs2, mask, WidthEncoding.E8)

    def vlssege16(self, num_segments, vd, rs1, rs2, mask=VecMask.NO):
        """Strided segment load of 16-bit elements."""
        self._strided_load(num_segments, vd, rs1, rs2, mask, WidthEncoding.E16)

    def vlssege32(self, num_segments, vd, rs1, rs2, mask=VecMask.NO):
        """Strided segment load of 32-bit elements."""
        self._strided_load(num_segments, vd, rs1, rs2, mask, WidthEncoding.E32)

    def vlssege64(self, num_segments, vd, rs1, rs2, mask=VecMask.NO):
        """Strided segment load of 64-bit elements."""
        self._strided_load(num_segments, vd, rs1, rs2, mask, WidthEncoding.E64)

    # Indexed loads

    def vloxei8(self, vd, rs, vs, mask=VecMask.NO):
        """Ordered indexed load with 8-bit indices."""
        self.vloxsegei8(1, vd, rs, vs, mask)

    def vloxei16(self, vd, rs, vs, mask=VecMask.NO):
        """Ordered indexed load with 16-bit indices."""
        self.vloxsegei16(1, vd, rs, vs, mask)

    def vloxei32(self, vd, rs, vs, mask=VecMask.NO):
        """Ordered indexed load with 32-bit indices."""
        self.vloxsegei32(1, vd, rs, vs, mask)

    def vloxei64(self, vd, rs, vs, mask=VecMask.NO):
        """Ordered indexed load with 64-bit indices."""
        self.vloxsegei64(1, vd, rs, vs, mask)

    def vluxei8(self, vd, rs, vs, mask=VecMask.NO):
        """Unordered indexed load with 8-bit indices."""
        self.vluxsegei8(1, vd, rs, vs, mask)

    def vluxei16(self, vd, rs, vs, mask=VecMask.NO):
        """Unordered indexed load with 16-bit indices."""
        self.vluxsegei16(1, vd, rs, vs, mask)

    def vluxei32(self, vd, rs, vs, mask=VecMask.NO):
        """Unordered indexed load with 32-bit indices."""
        self.vluxsegei32(1, vd, rs, vs, mask)

    def vluxei64(self, vd, rs, vs, mask=VecMask.NO):
        """Unordered indexed load with 64-bit indices."""
        self.vluxsegei64(1, vd, rs, vs, mask)

    def vloxsegei8(self, num_segments, vd, rs, vs, mask=VecMask.NO):
        """Ordered indexed segment load with 8-bit indices."""
        self._indexed_load(AddressingMode.INDEXED_ORDERED, num_segments,
                           vd, rs, vs, mask, WidthEncoding.E8)

    def vloxsegei16(self, num_segments, vd, rs, vs, mask=VecMask.NO):
        """Ordered indexed segment load with 16-bit indices."""
        self._indexed_load(AddressingMode.INDEXED_ORDERED, num_segments,
                           vd, rs, vs, mask, WidthEncoding.E16)

    def vloxsegei32(self, num_segments, vd, rs, vs, mask=VecMask.NO):
        """Ordered indexed segment load with 32-bit indices."""
        self._indexed_load(AddressingMode.INDEXED_ORDERED, num_segments,
                           vd, rs, vs, mask, WidthEncoding.E32)

    def vloxsegei64(self, num_segments, vd, rs, vs, mask=VecMask.NO):
        """Ordered indexed segment load with 64-bit indices."""
        self._indexed_load(AddressingMode.INDEXED_ORDERED, num_segments,
                           vd, rs, vs, mask, WidthEncoding.E64)

    def vluxsegei8(self, num_segments, vd, rs, vs, mask=VecMask.NO):
        """Unordered indexed segment load with 8-bit indices."""
        self._indexed_load(AddressingMode.INDEXED_UNORDERED, num_segments,
                           vd, rs, vs, mask, WidthEncoding.E8)

    def vluxsegei16(self, num_segments, vd, rs, vs, mask=VecMask.NO):
        """Unordered indexed segment load with 16-bit indices."""
        self._indexed_load(AddressingMode.INDEXED_UNORDERED, num_segments,
                           vd, rs, vs, mask, WidthEncoding.E16)

    def vluxsegei32(self, num_segments, vd, rs, vs, mask=VecMask.NO):
        """Unordered indexed segment load with 32-bit indices."""
        self._indexed_load(AddressingMode.INDEXED_UNORDERED, num_segments,
                           vd, rs, vs, mask, WidthEncoding.E32)

    def vluxsegei64(self, num_segments, vd, rs, vs, mask=VecMask.NO):
        """Unordered indexed segment load with 64-bit indices."""
        self._indexed_load(AddressingMode.INDEXED_UNORDERED, num_segments,
                           vd, rs, vs, mask, WidthEncoding.E64)

    # Whole-register loads

    def vlre8(self, num_registers, vd, rs):
        """Load 1, 2, 4 or 8 whole registers of 8-bit elements."""
        self._whole_load(num_registers, vd, rs, WidthEncoding.E8)

    def vl1re8(self, vd, rs):
        """Load one whole register of 8-bit elements."""
        self.vlre8(1, vd, rs)

    def vl2re8(self, vd, rs):
        """Load two whole registers of 8-bit elements."""
        self.vlre8(2, vd, rs)

    def vl4re8(self, vd, rs):
        """Load four whole registers of 8-bit elements."""
        self.vlre8(4, vd, rs)

    def vl8re8(self, vd, rs):
        """Load eight whole registers of 8-bit elements."""
        self.vlre8(8, vd, rs)

    def vlre16(self, num_registers, vd, rs):
        """Load 1, 2, 4 or 8 whole registers of 16-bit elements."""
        self._whole_load(num_registers, vd, rs, WidthEncoding.E16)

    def vl1re16(self, vd, rs):
        """Load one whole register of 16-bit elements."""
        self.vlre16(1, vd, rs)

    def vl2re16(self, vd, rs):
        """Load two whole registers of 16-bit elements."""
        self.vlre16(2, vd, rs)

    def vl4re16(self, vd, rs):
        """Load four whole registers of 16-bit elements."""
        self.vlre16(4, vd, rs)

    def vl8re16(self, vd, rs):
        """Load eight whole registers of 16-bit elements."""
        self.vlre16(8, vd, rs)

    def vlre32(self, num_registers, vd, rs):
        """Load 1, 2, 4 or 8 whole registers of 32-bit elements."""
        self._whole_load(num_registers, vd, rs, WidthEncoding.E32)

    def vl1re32(self, vd, rs):
        """Load one whole register of 32-bit elements."""
        self.vlre32(1, vd, rs)

    def vl2re32(self, vd, rs):
        """Load two whole registers of 32-bit elements."""
        self.vlre32(2, vd, rs)

    def vl4re32(self, vd, rs):
        """Load four whole registers of 32-bit elements."""
        self.vlre32(4, vd, rs)

    def vl8re32(self, vd, rs):
        """Load eight whole registers of 32-bit elements."""
        self.vlre32(8, vd, rs)

    def vlre64(self, num_registers, vd, rs):
        """Load 1, 2, 4 or 8 whole registers of 64-bit elements."""
        self._whole_load(num_registers, vd, rs, WidthEncoding.E64)

    def vl1re64(self, vd, rs):
        """Load one whole register of 64-bit elements."""
        self.vlre64(1, vd, rs)

    def vl2re64(self, vd, rs):
        """Load two whole registers of 64-bit elements."""
        self.vlre64(2, vd, rs)

    def vl4re64(self, vd, rs):
        """Load four whole registers of 64-bit elements."""
        self.vlre64(4, vd, rs)

    def vl8re64(self, vd, rs):
        """Load eight whole registers of 64-bit elements."""
        self.vlre64(8, vd, rs)

    # Unit-stride stores

    def vse8(self, vs, rs, mask=VecMask.NO):
        """Store 8-bit elements."""
        self.vssege8(1, vs, rs, mask)

    def vse16(self, vs, rs, mask=VecMask.NO):
        """Store 16-bit elements."""
        self.vssege16(1, vs, rs, mask)

    def vse32(self, vs, rs, mask=VecMask.NO):
        """Store 32-bit elements."""
        self.vssege32(1, vs, rs, mask)

    def vse64(self, vs, rs, mask=VecMask.NO):
        """Store 64-bit elements."""
        self.vssege64(1, vs, rs, mask)

    def vsm(self, vs, rs):
        """Store a mask register."""
        emit_store(self._buffer, 0, False, AddressingMode.UNIT_STRIDE, VecMask.NO,
                   UnitStrideStoreMode.MASK_STORE, rs, WidthEncoding.E8, vs)

    def vssege8(self, num_segments, vs, rs, mask=VecMask.NO):
        """Segment store of 8-bit elements."""
        self._unit_store(num_segments, vs, rs, mask, WidthEncoding.E8)

    def vssege16(self, num_segments, vs, rs, mask=VecMask.NO):
        """Segment store of 16-bit elements."""
        self._unit_store(num_segments, vs, rs, mask, WidthEncoding.E16)

    def vssege32(self, num_segments, vs, rs, mask=VecMask.NO):
        """Segment store of 32-bit elements."""
        self._unit_store(num_segments, vs, rs, mask, WidthEncoding.E32)

    def vssege64(self, num_segments, vs, rs, mask=VecMask.NO):
        """Segment store of 64-bit elements."""
        self._unit_store(num_segments, vs, rs, mask, WidthEncoding.E64)

    # Strided stores

    def vsse8(self, vs, rs1, rs2, mask=VecMask.NO):
        """Strided store of 8-bit elements; rs2 holds the stride."""
        self.vsssege8(1, vs, rs1, rs2, mask)

    def vsse16(self, vs, rs1, rs2, mask=VecMask.NO):
        """Strided store of 16-bit elements."""
        self.vsssege16(1, vs, rs1, rs2, mask)

    def vsse32(self, vs, rs1, rs2, mask=VecMask.NO):
        """Strided store of 32-bit elements."""
        self.vsssege32(1, vs, rs1, rs2, mask)

    def vsse64(self, vs, rs1, rs2, mask=VecMask.NO):
        """Strided store of 64-bit elements."""
        self.vsssege64(1, vs, rs1, rs2, mask)

    def vsssege8(self, num_segments, vs, rs1, rs2, mask=VecMask.NO):
        """Strided segment store of 8-bit elements."""
        self._strided_store(num_segments, vs, rs1, rs2, mask, WidthEncoding.E8)

    def vsssege16(self, num_segments, vs, rs1, rs2, mask=VecMask.NO):
        """Strided segment store of 16-bit elements."""
        self._strided_store(num_segments, vs, rs1, rs2, mask, WidthEncoding.E16)

    def vsssege32(self, num_segments, vs, rs1, rs2, mask=VecMask.NO):
        """Strided segment store of 32-bit elements."""
        self._strided_store(num_segments, vs, rs1, rs2, mask, WidthEncoding.E32)

    def vsssege64(self, num_segments, vs, rs1, rs2, mask=VecMask.NO):
        """Strided segment store of 64-bit elements."""
        self._strided_store(num_segments, vs, rs1, rs2, mask, WidthEncoding.E64)

    # Indexed stores

    def vsoxei8(self, vd, rs, vs, mask=VecMask.NO):
        """Ordered indexed store with 8-bit indices."""
        self.vsoxsegei8(1, vd, rs, vs, mask)

    def vsoxei16(self, vd, rs, vs, mask=VecMask.NO):
        """Ordered indexed store with 16-bit indices."""
        self.vsoxsegei16(1, vd, rs, vs, mask)

    def vsoxei32(self, vd, rs, vs, mask=VecMask.NO):
        """Ordered indexed store with 32-bit indices."""
        self.vsoxsegei32(1, vd, rs, vs, mask)

    def vsoxei64(self, vd, rs, vs, mask=VecMask.NO):
        """Ordered indexed store with 64-bit indices."""
        self.vsoxsegei64(1, vd, rs, vs, mask)

    def vsuxei8(self, vd, rs, vs, mask=VecMask.NO):
        """Unordered indexed store with 8-bit indices."""
        self.vsuxsegei8(1, vd, rs, vs, mask)

    def vsuxei16(self, vd, rs, vs, mask=VecMask.NO):
        """Unordered indexed store with 16-bit indices."""
        self.vsuxsegei16(1, vd, rs, vs, mask)

    def vsuxei32(self, vd, rs, vs, mask=VecMask.NO):
        """Unordered indexed store with 32-bit indices."""
        self.vsuxsegei32(1, vd, rs, vs, mask)

    def vsuxei64(self, vd, rs, vs, mask=VecMask.NO):
        """Unordered indexed store with 64-bit indices."""
        self.vsuxsegei64(1, vd, rs, vs, mask)

    def vsoxsegei8(self, num_segments, vd, rs, vs, mask=VecMask.NO):
        """Ordered indexed segment store with 8-bit indices."""
        self._indexed_store(AddressingMode.INDEXED_ORDERED, num_segments,
                            vd, rs, vs, mask, WidthEncoding.E8)

    def vsoxsegei16(self, num_segments, vd, rs, vs, mask=VecMask.NO):
        """Ordered indexed segment store with 16-bit indices."""
        self._indexed_store(AddressingMode.INDEXED_ORDERED, num_segments,
                            vd, rs, vs, mask, WidthEncoding.E16)

    def vsoxsegei32(self, num_segments, vd, rs, vs, mask=VecMask.NO):
        """Ordered indexed segment store with 32-bit indices."""
        self._indexed_store(AddressingMode.INDEXED_ORDERED, num_segments,
                            vd, rs, vs, mask, WidthEncoding.E32)

    def vsoxsegei64(self, num_segments, vd, rs, vs, mask=VecMask.NO):
        """Ordered indexed segment store with 64-bit indices."""
        self._indexed_store(AddressingMode.INDEXED_ORDERED, num_segments,
                            vd, rs, vs, mask, WidthEncoding.E64)

    def vsuxsegei8(self, num_segments, vd, rs, vs, mask=VecMask.NO):
        """Unordered indexed segment store with 8-bit indices."""
        self._indexed_store(AddressingMode.INDEXED_UNORDERED, num_segments,
                            vd, rs, vs, mask, WidthEncoding.E8)

    def vsuxsegei16(self, num_segments, vd, rs, vs, mask=VecMask.NO):
        """Unordered indexed segment store with 16-bit indices."""
        self._indexed_store(AddressingMode.INDEXED_UNORDERED, num_segments,
                            vd, rs, vs, mask, WidthEncoding.E16)

    def vsuxsegei32(self, num_segments, vd, rs, vs, mask=VecMask.NO):
        """Unordered indexed segment store with 32-bit indices."""
        self._indexed_store(AddressingMode.INDEXED_UNORDERED, num_segments,
                            vd, rs, vs, mask, WidthEncoding.E32)

    def vsuxsegei64(self, num_segments, vd, rs, vs, mask=VecMask.NO):
        """Unordered indexed segment store with 64-bit indices."""
        self._indexed_store(AddressingMode.INDEXED_UNORDERED, num_segments,
                            vd, rs, vs, mask, WidthEncoding.E64)

    # Whole-register stores

    def vsr(self, num_registers, vs, rs):
        """Store 1, 2, 4 or 8 whole registers."""
        emit_store_whole_reg(self._buffer, num_registers, rs, vs)

    def vs1r(self, vs, rs):
        """Store one whole register."""
        self.vsr(1, vs, rs)

    def vs2r(self, vs, rs):
        """Store two whole registers."""
        _check_aligned(vs, 2, "vs2r")
        self.vsr(2, vs, rs)

    def vs4r(self, vs, rs):
        """Store four whole registers."""
        _check_aligned(vs, 4, "vs4r")
        self.vsr(4, vs, rs)

    def vs8r(self, vs, rs):
        """Store eight whole registers."""
        _check_aligned(vs, 8, "vs8r")
        self.vsr(8, vs, rs)

    # Configuration

    def vsetivli(self, rd, imm, sew, lmul, vta=VTA.NO, vma=VMA.NO):
        """Set vector length from a 5-bit immediate and the vector type."""
        if not 0 <= imm <= 31:
            raise EncodingError(f"immediate {imm} is outside 0..31")
        zimm = _vtype(sew, lmul, vta, vma)
        self._buffer.emit32(
            _VSETIVLI_BASE | (zimm << 20) | (imm << 15) | (rd.index << 7)
        )

    def vsetvl(self, rd, rs1, rs2):
        """Set vector length and type from registers."""
        self._buffer.emit32(
            _VSETVL_BASE | (rs2.index << 20) | (rs1.index << 15) | (rd.index << 7)
        )

    def vsetvli(self, rd, rs, sew, lmul, vta=VTA.NO, vma=VMA.NO):
        """Set vector length from a register and type from an immediate."""
        zimm = _vtype(sew, lmul, vta, vma)
        self._buffer.emit32(
            _VSETVLI_BASE | (zimm << 20) | (rs.index << 15) | (rd.index << 7)
        )