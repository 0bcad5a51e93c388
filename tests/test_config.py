import pytest
from pydantic import ValidationError

from devfeed.adapters.configuration.config import MAX_TOKEN_TTL_MS, Settings
from devfeed.application.context import AppContext

SECRET = "a-perfectly-fine-secret-of-32-bytes!"


def test_defaults(monkeypatch):
    monkeypatch.delenv("BCRYPT_ROUNDS", raising=False)
    monkeypatch.delenv("JWT_EXPIRATION", raising=False)

    settings = Settings(JWT_SECRET=SECRET, _env_file=None)

    assert settings.JWT_ALGORITHM == "HS256"
    assert settings.JWT_EXPIRATION == 86_400_000
    assert settings.token_ttl_seconds == 86_400
    assert settings.BCRYPT_ROUNDS == 12


@pytest.mark.parametrize("secret", ["", "   ", "too-short"])
def test_secret_must_be_long_enough(secret):
    with pytest.raises(ValidationError):
        Settings(JWT_SECRET=secret, _env_file=None)


def test_secret_length_counts_bytes():
    # 16 two-byte characters
    Settings(JWT_SECRET="é" * 16, _env_file=None)


def test_algorithm_is_normalised():
    assert Settings(JWT_SECRET=SECRET, JWT_ALGORITHM="hs512", _env_file=None).JWT_ALGORITHM == "HS512"


@pytest.mark.parametrize("algorithm", ["RS256", "none"])
def test_asymmetric_or_missing_algorithm_rejected(algorithm):
    with pytest.raises(ValidationError):
        Settings(JWT_SECRET=SECRET, JWT_ALGORITHM=algorithm, _env_file=None)


@pytest.mark.parametrize("rounds", [3, 32])
def test_bcrypt_rounds_bounds(rounds):
    with pytest.raises(ValidationError):
        Settings(JWT_SECRET=SECRET, BCRYPT_ROUNDS=rounds, _env_file=None)


@pytest.mark.parametrize("expiration", [0, -1, 500, 999, MAX_TOKEN_TTL_MS + 1])
def test_expiration_out_of_bounds(expiration):
    with pytest.raises(ValidationError):
        Settings(JWT_SECRET=SECRET, JWT_EXPIRATION=expiration, _env_file=None)


def test_shortest_expiration_gives_working_tokens():
    settings = Settings(JWT_SECRET=SECRET, JWT_EXPIRATION=1000, BCRYPT_ROUNDS=4, _env_file=None)
    context = AppContext.from_settings(settings)
    now = context.clock()

    token = context.codec.sign("alice@example.com", now, context.token_ttl)

    assert settings.token_ttl_seconds == 1
    assert context.codec.parse(token, now).subject == "alice@example.com"


def test_longest_expiration_accepted():
    assert Settings(JWT_SECRET=SECRET, JWT_EXPIRATION=MAX_TOKEN_TTL_MS, _env_file=None).token_ttl_seconds == 31_536_000


def test_invalid_log_level():
    with pytest.raises(ValidationError):
        Settings(JWT_SECRET=SECRET, LOG_LEVEL="chatty", _env_file=None)


def test_database_url_assembled_from_parts(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)

    settings = Settings(
        JWT_SECRET=SECRET,
        POSTGRES_USER="feed",
        POSTGRES_PASSWORD="pw",
        POSTGRES_HOST="db",
        POSTGRES_PORT=5433,
        POSTGRES_DB="devfeed",
        _env_file=None,
    )

    assert settings.DATABASE_URL == "postgresql+asyncpg://feed:pw@db:5433/devfeed"


def test_explicit_database_url_wins():
    settings = Settings(JWT_SECRET=SECRET, DATABASE_URL="sqlite+aiosqlite:///./feed.db", _env_file=None)

    assert settings.DATABASE_URL == "sqlite+aiosqlite:///./feed.db"


def test_context_from_settings():
    settings = Settings(JWT_SECRET=SECRET, JWT_EXPIRATION=60_000, BCRYPT_ROUNDS=4, _env_file=None)

    context = AppContext.from_settings(settings)

    assert context.token_ttl.total_seconds() == 60
    assert context.codec.algorithm == "HS256"
    assert context.revocations.size() == 0
    assert context.gate.revocations is context.revocations


def test_contexts_do_not_share_revocations():
    settings = Settings(JWT_SECRET=SECRET, BCRYPT_ROUNDS=4, _env_file=None)

    first = AppContext.from_settings(settings)
    second = AppContext.from_settings(settings)
    first.revocations.revoke("token", first.clock())

    assert second.revocations.is_revoked("token") is False
