"""Per-party share bundles and their text form."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .errors import MalformedInteger

SEPARATOR = "+"

_SHARE_LINE = re.compile(r"^\s*Share\s+\d+:\s*\(\s*(\d+)\s*,\s*([0-9+]+)\s*\)\s*$")


@dataclass(frozen=True, slots=True)
class ShareBundle:
    """One party's shares: ``x`` and the ``y`` value for every chunk."""

    x: int
    values: Tuple[int, ...]

    def to_wire(self) -> str:
        return SEPARATOR.join(str(value) for value in self.values)

    def format_line(self) -> str:
        return f"Share {self.x}: ({self.x}, {self.to_wire()})"

    @classmethod
    def from_wire(cls, x: int, bundle: str) -> "ShareBundle":
        """Parse a ``y1+y2+...`` bundle that has already passed validation."""
        try:
            values = tuple(int(token, 10) for token in bundle.split(SEPARATOR))
        except ValueError as exc:
            raise MalformedInteger(f"Cannot parse subsecret in {bundle!r}") from exc
        return cls(x=x, values=values)


def transpose(chunk_shares: Sequence[Sequence[int]]) -> List[ShareBundle]:
    """Turn per-chunk share vectors into per-party bundles.

    ``[[23, 345], [100, 99], [19, 50]]`` becomes ``(1, 23+100+19)`` and
    ``(2, 345+99+50)``.
    """
    if not chunk_shares:
        return []
    parties = len(chunk_shares[0])
    if any(len(vector) != parties for vector in chunk_shares):
        raise ValueError("Share vectors are not all the same length")
    return [
        ShareBundle(x=index + 1, values=tuple(vector[index] for vector in chunk_shares))
        for index in range(parties)
    ]


def parse_share_lines(text: str) -> List[str]:
    """Extract flattened combine tokens from printed ``split`` output.

    Lines that are not ``Share i: (x, bundle)`` are ignored.
    """
    tokens: List[str] = []
    for line in text.splitlines():
        match = _SHARE_LINE.match(line)
        if match:
            tokens.extend(match.groups())
    return tokens


__all__ = ["SEPARATOR", "ShareBundle", "parse_share_lines", "transpose"]
