"""Split secrets into bounded chunks and join them back."""
from __future__ import annotations

from typing import Iterable, List

from .field import PrimeField


def split_chunks(secret: str, max_len: int) -> List[str]:
    """Partition ``secret`` into consecutive pieces of ``max_len`` characters.

    The final piece is shorter when the length is not an exact multiple.
    For example ``split_chunks("Hello, World!", 3)`` returns
    ``["Hel", "lo,", " Wo", "rld", "!"]``.
    """
    if max_len < 1:
        raise ValueError("Chunk length must be at least 1")
    return [secret[start : start + max_len] for start in range(0, len(secret), max_len)]


def join_chunks(chunks: Iterable[str]) -> str:
    return "".join(chunks)


def chunk_bound(field: PrimeField, requested: int | None = None) -> int:
    """Resolve the chunk length for ``field``, validating an explicit request."""
    limit = field.max_chunk_length()
    if requested is None:
        return limit
    if not 1 <= requested <= limit:
        raise ValueError(f"Chunk size must be between 1 and {limit} for this modulus")
    return requested


__all__ = ["chunk_bound", "join_chunks", "split_chunks"]
