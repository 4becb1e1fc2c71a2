"""Lagrange interpolation over a prime field."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Dict, Iterable, Tuple, Union

from .errors import DuplicateShareIndex
from .field import PrimeField

Points = Union[Mapping[int, int], Iterable[Tuple[int, int]]]


def _as_mapping(points: Points) -> Dict[int, int]:
    if isinstance(points, Mapping):
        return dict(points)
    mapping: Dict[int, int] = {}
    for x, y in points:
        if x in mapping:
            raise DuplicateShareIndex(x)
        mapping[x] = y
    return mapping


def interpolate_at(field: PrimeField, points: Points, x: int) -> int:
    """Value at ``x`` of the unique polynomial through ``points``."""
    mapping = _as_mapping(points)
    if not mapping:
        raise ValueError("At least one point is required")
    total = 0
    for xi, yi in mapping.items():
        basis = 1
        for xj in mapping:
            if xj == xi:
                continue
            # (x - xj) / (xi - xj)
            basis = field.mul(basis, field.mul(x - xj, field.modinv(xi - xj)))
        total = field.add(total, field.mul(yi, basis))
    return total


def reconstruct(field: PrimeField, points: Points) -> int:
    """Recover the constant term from ``threshold`` shares.

    Fewer points than the original threshold yield a well-formed but wrong
    value; the scheme cannot detect this.
    """
    return interpolate_at(field, points, 0)


__all__ = ["Points", "interpolate_at", "reconstruct"]
