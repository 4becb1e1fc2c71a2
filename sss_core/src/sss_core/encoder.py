"""Reversible mapping between ASCII chunks and field elements."""
from __future__ import annotations


def is_ascii(text: str) -> bool:
    return all(ord(ch) < 128 for ch in text)


def encode(chunk: str | bytes) -> int:
    """Interpret the chunk's bytes as a big-endian unsigned integer.

    The caller guarantees the chunk is short enough to stay below the field
    modulus; see :func:`sss_core.chunker.split_chunks`.
    """
    data = chunk.encode("ascii") if isinstance(chunk, str) else chunk
    return int.from_bytes(data, "big")


def decode(value: int) -> bytes:
    """Inverse of :func:`encode`; ``0`` decodes to ``b""``."""
    if value < 0:
        raise ValueError("Field elements are non-negative")
    return value.to_bytes((value.bit_length() + 7) // 8, "big")


def decode_text(value: int) -> str:
    # Non-ASCII output only arises from inconsistent shares
    return decode(value).decode("ascii", errors="replace")


__all__ = ["decode", "decode_text", "encode", "is_ascii"]
