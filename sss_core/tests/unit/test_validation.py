import pytest

from sss_core.errors import DuplicateShareIndex, ShareValidationError
from sss_core.utils.validation import (
    validate_combine_tokens,
    validate_share_numbers,
    validate_split_parameters,
)


@pytest.mark.parametrize(
    ("secret", "n", "t", "message"),
    [
        ("", 5, 3, "Empty secret."),
        ("héllo", 5, 3, "Secret must be ASCII."),
        ("a\x00b", 5, 3, "Secret must not contain NUL characters."),
        ("ok", 0, 2, "Number of shares less than 1."),
        ("ok", 5, 1, "Threshold less than 2."),
        ("ok", 2, 5, "Number of shares is less than the threshold."),
    ],
)
def test_split_parameters_rejected(secret: str, n: int, t: int, message: str) -> None:
    with pytest.raises(ShareValidationError) as excinfo:
        validate_split_parameters(secret, n, t)
    assert str(excinfo.value) == message


@pytest.mark.parametrize(("n", "t"), [(2, 2), (5, 3), (255, 2)])
def test_split_parameters_accepted(n: int, t: int) -> None:
    validate_split_parameters("secret", n, t)


@pytest.mark.parametrize(
    ("tokens", "message"),
    [
        ([], "Must combine at least two shares."),
        (["1", "12"], "Must combine at least two shares."),
        (["2", "12+34", "4"], "Must combine at least two shares."),
        (["2", "12+34", "4", "56", "6"], "Combine command takes an even number of arguments."),
        (
            ["2", "12", "4", "56+78"],
            "Each share must contain the same number of subsecrets (numbers separated by '+').",
        ),
        (["2", "12+x", "4", "56+78"], "Shares must be of the form: 'int+int+int+..+int'."),
        (["2", "12+", "4", "56+78"], "Shares must be of the form: 'int+int+int+..+int'."),
        (["2", "-12", "4", "56"], "Shares must be of the form: 'int+int+int+..+int'."),
        (["two", "12", "4", "56"], "Share numbers must be positive integers."),
        (["0", "12", "4", "56"], "Share numbers must be positive integers."),
        (["2\n", "12", "4", "56"], "Share numbers must be positive integers."),
    ],
)
def test_combine_tokens_rejected(tokens, message: str) -> None:
    with pytest.raises(ShareValidationError) as excinfo:
        validate_combine_tokens(tokens)
    assert str(excinfo.value) == message


def test_combine_duplicate_share_number():
    with pytest.raises(DuplicateShareIndex) as excinfo:
        validate_combine_tokens(["3", "12", "3", "56"])
    assert excinfo.value.x == 3


def test_combine_tokens_accepted():
    validate_combine_tokens(["1", "12+34", "3", "56+78", "4", "0+9"])


@pytest.mark.parametrize("tokens", [["1", "12", "257", "56"], ["258", "12", "1", "56"]])
def test_combine_share_numbers_bounded_by_modulus(tokens) -> None:
    with pytest.raises(ShareValidationError) as excinfo:
        validate_combine_tokens(tokens, modulus=257)
    assert str(excinfo.value) == "Share numbers must be smaller than the field modulus."


def test_combine_share_numbers_below_modulus_accepted() -> None:
    validate_combine_tokens(["1", "12", "256", "56"], modulus=257)


def test_validate_share_numbers() -> None:
    validate_share_numbers([1, 2, 3], modulus=257)
    with pytest.raises(DuplicateShareIndex):
        validate_share_numbers([4, 4])
    with pytest.raises(ShareValidationError):
        validate_share_numbers([0, 1])
