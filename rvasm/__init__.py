"""Encoder for RISC-V vector instructions into a code buffer."""

__version__ = "0.17.0"

__all__ = [
    "assembler",
    "code_buffer",
    "encoding",
    "registers",
    "vector_arith",
    "vector_crypto",
    "vector_float",
    "vector_memory",
    "vector_permute",
]