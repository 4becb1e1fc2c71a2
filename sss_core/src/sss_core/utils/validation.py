"""Validation of user-supplied split parameters and combine tokens."""
from __future__ import annotations

import re
from typing import Iterable, Optional, Sequence

from ..encoder import is_ascii
from ..errors import DuplicateShareIndex, ShareValidationError
from ..shares import SEPARATOR

_DIGITS = re.compile(r"[0-9]+")


def validate_split_parameters(secret: str, n: int, t: int) -> None:
    """Reject parameters that cannot produce a recoverable share set.

    Raises
    ------
    ShareValidationError
        With a message suitable for showing to the user.
    """

    if secret == "":
        raise ShareValidationError("Empty secret.")
    if not is_ascii(secret):
        raise ShareValidationError("Secret must be ASCII.")
    if "\x00" in secret:
        raise ShareValidationError("Secret must not contain NUL characters.")
    if n < 1:
        raise ShareValidationError("Number of shares less than 1.")
    if t < 2:
        raise ShareValidationError("Threshold less than 2.")
    if n < t:
        raise ShareValidationError("Number of shares is less than the threshold.")


def validate_combine_tokens(tokens: Sequence[str], modulus: Optional[int] = None) -> None:
    """Check a flattened ``x1 bundle1 x2 bundle2 ...`` sequence.

    Only the shape is checked. Whether enough shares were supplied to meet the
    original threshold is unknowable here: the combiner never learns ``t``.
    When ``modulus`` is given, share numbers must also lie below it.
    """

    if len(tokens) < 4:
        raise ShareValidationError("Must combine at least two shares.")
    if len(tokens) % 2 != 0:
        raise ShareValidationError("Combine command takes an even number of arguments.")

    expected = len(tokens[1].split(SEPARATOR))
    for bundle in tokens[1::2]:
        subsecrets = bundle.split(SEPARATOR)
        if len(subsecrets) != expected:
            raise ShareValidationError(
                "Each share must contain the same number of subsecrets (numbers separated by '+')."
            )
        if not all(_DIGITS.fullmatch(token) for token in subsecrets):
            raise ShareValidationError("Shares must be of the form: 'int+int+int+..+int'.")

    for token in tokens[0::2]:
        if not _DIGITS.fullmatch(token):
            raise ShareValidationError("Share numbers must be positive integers.")
    validate_share_numbers([int(token) for token in tokens[0::2]], modulus)


def validate_share_numbers(xs: Iterable[int], modulus: Optional[int] = None) -> None:
    """Share numbers must be distinct, at least 1 and below ``modulus``.

    A number at or above the modulus aliases a smaller one (or ``x = 0``) in
    the field, so it is rejected rather than reduced.
    """

    seen: set[int] = set()
    for x in xs:
        if x < 1:
            raise ShareValidationError("Share numbers must be positive integers.")
        if modulus is not None and x >= modulus:
            raise ShareValidationError("Share numbers must be smaller than the field modulus.")
        if x in seen:
            raise DuplicateShareIndex(x)
        seen.add(x)


__all__ = ["validate_combine_tokens", "validate_share_numbers", "validate_split_parameters"]
