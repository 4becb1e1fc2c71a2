"""Utility exports."""
from .validation import validate_combine_tokens, validate_share_numbers, validate_split_parameters

__all__ = ["validate_combine_tokens", "validate_share_numbers", "validate_split_parameters"]
