import pytest

from devfeed.shared.utils.email_validation import normalize_email, validate_email
from devfeed.shared.utils.input_validation import InputValidator


@pytest.mark.parametrize(
    "password",
    ["Str0ng!pw", "Abcdef1~", "Tr1cky`pass", "Br4ckets[]", "x" * 95 + "Aa1!x"],
)
def test_valid_passwords(password):
    assert InputValidator.validate_password(password) == (True, None)


@pytest.mark.parametrize(
    "password",
    [
        "weakpass",  # no upper, digit or special
        "Sh0rt!",  # too short
        "NoDigits!!",
        "n0upper!!",
        "N0LOWER!!",
        "N0special",
        "With space1!",
        "Tab\t1Aa!xx",
        "Aa1!" + "x" * 97,  # 101 characters
    ],
)
def test_invalid_passwords(password):
    valid, message = InputValidator.validate_password(password)

    assert valid is False
    assert message == InputValidator.PASSWORD_RULE_MESSAGE


def test_missing_password():
    assert InputValidator.validate_password("") == (False, "Password is required")


@pytest.mark.parametrize("username,valid", [("bob", True), ("  bob  ", True), ("bo", False), ("  ", False),
                                            ("b" * 50, True), ("b" * 51, False)])
def test_username_length(username, valid):
    assert InputValidator.validate_username(username)[0] is valid


def test_validate_text():
    assert InputValidator.validate_text("Title", "Title", 200) == (True, None)
    assert InputValidator.validate_text("", "Title") == (False, "Title is mandatory")
    assert InputValidator.validate_text("abc", "Name", 2) == (False, "Name must not exceed 2 characters")


@pytest.mark.parametrize("email", ["a@b.c", "alice@example.com", "first.last+tag@sub.example.org"])
def test_valid_emails(email):
    assert validate_email(email) == (True, "")


@pytest.mark.parametrize("email", ["plain", "@example.com", "alice@", "alice@@example.com", "a b@example.com"])
def test_invalid_emails(email):
    assert validate_email(email) == (False, "Email must be valid")


def test_blank_email():
    assert validate_email("  ") == (False, "Email is required")


def test_overlong_email():
    valid, message = validate_email("a" * 250 + "@example.com")

    assert valid is False
    assert "255" in message


def test_normalize_email():
    assert normalize_email("  Alice@Example.COM ") == "alice@example.com"
