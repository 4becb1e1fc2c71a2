"""Random threshold polynomials and Horner evaluation."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .field import PrimeField


@dataclass(frozen=True, slots=True)
class Polynomial:
    """Coefficients in ascending order: ``coefficients[i]`` multiplies ``x^i``.

    ``7x^2 + 5`` is ``Polynomial((5, 0, 7))``.
    """

    coefficients: Tuple[int, ...]

    @property
    def degree(self) -> int:
        return len(self.coefficients) - 1

    @property
    def constant(self) -> int:
        return self.coefficients[0]


def generate_polynomial(field: PrimeField, constant: int, degree: int) -> Polynomial:
    """Build a random polynomial of exactly ``degree`` with a fixed constant term.

    Middle coefficients are uniform over the field; the leading coefficient is
    redrawn until non-zero so the polynomial really has the requested degree.
    """
    if degree < 1:
        raise ValueError("Polynomial degree must be at least 1")
    if not field.contains(constant):
        raise ValueError("Constant term must be a field element")
    coefficients = [constant]
    coefficients.extend(field.random_element() for _ in range(1, degree))
    coefficients.append(field.random_nonzero())
    return Polynomial(tuple(coefficients))


def evaluate(field: PrimeField, poly: Polynomial, x: int) -> int:
    """Evaluate ``poly`` at ``x`` using Horner's method."""
    acc = 0
    for coeff in reversed(poly.coefficients):
        acc = acc * x + coeff
    return field.reduce(acc)


def evaluate_many(field: PrimeField, poly: Polynomial, xs: Iterable[int]) -> List[int]:
    return [evaluate(field, poly, x) for x in xs]


def split_value_with_polynomial(field: PrimeField, poly: Polynomial, n: int) -> List[int]:
    """Share vector ``[poly(1), ..., poly(n)]``.

    Only safe for real secrets when ``poly`` came from
    :func:`generate_polynomial`; exposed for deterministic tests.
    """
    return evaluate_many(field, poly, range(1, n + 1))


def split_value(field: PrimeField, value: int, n: int, t: int) -> List[int]:
    poly = generate_polynomial(field, value, t - 1)
    return split_value_with_polynomial(field, poly, n)


__all__ = [
    "Polynomial",
    "evaluate",
    "evaluate_many",
    "generate_polynomial",
    "split_value",
    "split_value_with_polynomial",
]
