import pytest

from devfeed.adapters.outbound.security.password_hasher import PasswordHasher


@pytest.fixture(scope="module")
def hasher():
    return PasswordHasher(rounds=4)


def test_hash_is_salted(hasher):
    first = hasher.hash("Str0ng!pw")
    second = hasher.hash("Str0ng!pw")

    assert first != second
    assert first.startswith("$2")
    assert "Str0ng!pw" not in first


def test_verify_round_trip(hasher):
    hashed = hasher.hash("Str0ng!pw")

    assert hasher.verify("Str0ng!pw", hashed) is True
    assert hasher.verify("Str0ng!pX", hashed) is False


def test_verify_uses_configured_cost(hasher):
    assert "$04$" in hasher.hash("Str0ng!pw")


@pytest.mark.parametrize("stored", ["", "not-a-bcrypt-hash", "$2b$04$short"])
def test_verify_malformed_hash_returns_false(hasher, stored):
    assert hasher.verify("Str0ng!pw", stored) is False


def test_verify_empty_password_returns_false(hasher):
    assert hasher.verify("", hasher.hash("Str0ng!pw")) is False


def test_verify_dummy_never_matches(hasher):
    assert hasher.verify_dummy("Str0ng!pw") is False
    assert hasher.verify_dummy("") is False
