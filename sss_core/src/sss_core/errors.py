"""Central exception hierarchy for sss-core."""
from __future__ import annotations


class ShamirError(Exception):
    """Base exception for all failures"""


class ShareValidationError(ShamirError):
    """Raised when user-supplied parameters or shares are malformed"""


class DuplicateShareIndex(ShareValidationError):
    """Raised when two shares carry the same share number"""

    def __init__(self, x: int) -> None:
        super().__init__(f"Duplicate share number: {x}.")
        self.x = x


class FatalShamirError(ShamirError):
    """Broken precondition or environment; never retried"""


class EntropyUnavailable(FatalShamirError):
    """Raised when the secure random source cannot produce a value"""


class NotInvertible(FatalShamirError):
    """Raised when a modular inverse is requested for zero"""


class MalformedInteger(FatalShamirError):
    """Raised when an internally built integer literal cannot be parsed"""


__all__ = [
    "ShamirError",
    "ShareValidationError",
    "DuplicateShareIndex",
    "FatalShamirError",
    "EntropyUnavailable",
    "NotInvertible",
    "MalformedInteger",
]
