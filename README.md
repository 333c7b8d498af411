# rvasm

`rvasm` encodes RISC-V vector (RVV 1.0) instructions, together with the
vector bit-manipulation and cryptography instructions (AES, GHASH, SHA-2,
SM3, SM4) and the BF16 vector conversions, into 32-bit little-endian machine
words held in a `CodeBuffer`. It is meant for code generators that build
RISC-V vector code directly from Python.

## Installation

```
pip install rvasm
```

## Usage

```python
from rvasm.assembler import Assembler
from rvasm.code_buffer import CodeBuffer
from rvasm.registers import GPR, Vec, VecMask, SEW, LMUL, VTA, VMA

asm = Assembler(CodeBuffer(4096))

asm.vsetvli(GPR(10), GPR(11), SEW.E32, LMUL.M1, VTA.NO, VMA.NO)
asm.vle32(Vec(1), GPR(12))
asm.vadd(Vec(2), Vec(1), 5)                   # immediate form
asm.vadd(Vec(3), Vec(2), Vec(1), VecMask.YES) # vector-vector form, masked by v0
asm.vse32(Vec(3), GPR(13))

for word in asm.words():
    print(f"{word:08X}")

asm.rewind_buffer(0)  # write again from the start of the buffer
```

`Assembler()` with no argument allocates a 4096-byte buffer; an integer
argument gives the capacity of a new buffer.

### Operands

- `GPR`, `FPR` and `Vec` (in `rvasm.registers`) are register operands
  numbered 0 to 31; other numbers raise `ValueError`.
- Instruction methods pick the encoding from the type of the source operand:
  a `Vec` gives the vector-vector form, a `GPR` the vector-scalar form, an
  `FPR` the vector-float form and an `int` the immediate form. Passing a kind
  of operand that the instruction has no form for raises `TypeError`.
- `mask` defaults to `VecMask.NO` (unmasked); `VecMask.YES` masks by `v0`.
- `SEW`, `LMUL`, `VTA` and `VMA` configure `vsetvli` and `vsetivli`.

Operands that cannot be encoded (an immediate out of range, a misaligned
register group, an overlap the encoding reserves, a bad segment or
whole-register count) raise `rvasm.encoding.EncodingError`, a subclass of
`ValueError`.

### Code buffers

`CodeBuffer(capacity)` owns its memory and can be enlarged with `grow()`,
keeping its contents and cursor. `CodeBuffer(buffer=bytearray(...))` writes
straight into caller-supplied writable storage of fixed size. `emit32()`
raises `BufferError` when there is no room. `tobytes()` returns what has
been emitted, `rewind(offset)` moves the cursor back, and `capacity`,
`cursor_offset` and `remaining` report its state.

`set_executable()` only marks the buffer as no longer writable, so that
further emits raise `PermissionError`; `set_writable()` undoes it.

### Lower-level encoders

`rvasm.encoding` exposes the format encoders used by the instruction
methods (`emit_opivv`, `emit_opmvx`, `emit_opfvf`, `emit_load`,
`emit_store` and the rest) for emitting encodings directly into a buffer.

## What it does not do

- Only vector instructions are encoded; there are no scalar integer,
  floating-point, compressed or privileged instructions.
- There is no text assembler, disassembler or command-line tool; code is
  built by calling methods.
- Buffers are ordinary Python memory: nothing is mapped executable and no
  emitted code is run.

## Running the tests

```
pip install -e ".[test]"
pytest
```