"""Test domain configuration and error kinds."""
import pytest
from sqlalchemy.exc import IntegrityError

from core.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from patterns.domain_config import BooksConfig
from patterns.repository import is_unique_violation, parse_id


def test_default_config():
    config = BooksConfig.default()
    assert config.api_prefix == "/api"
    assert config.auth.jwt_algorithm == "HS256"
    assert config.auth.cookie_name == "jwt"
    assert config.rules.max_price == 1000


def test_from_env_overrides(monkeypatch):
    monkeypatch.setenv("BOOKS_JWT_SECRET", "from-env")
    monkeypatch.setenv("BOOKS_ACCESS_TOKEN_TTL_MINUTES", "5")
    monkeypatch.setenv("BOOKS_AUTH_COOKIE", "session")
    monkeypatch.setenv("BOOKS_API_PREFIX", "/v1/")
    monkeypatch.setenv("BOOKS_LOG_LEVEL", "debug")
    monkeypatch.setenv("BOOKS_JSON_LOGS", "false")
    config = BooksConfig.from_env()
    assert config.auth.jwt_secret == "from-env"
    assert config.auth.access_token_ttl_minutes == 5
    assert config.auth.cookie_name == "session"
    assert config.api_prefix == "/v1"
    assert config.log_level == "DEBUG"
    assert config.json_logs is False


def test_from_env_without_overrides(monkeypatch):
    for suffix in ("JWT_SECRET", "JWT_ALGORITHM", "ACCESS_TOKEN_TTL_MINUTES", "AUTH_COOKIE",
                   "API_PREFIX", "LOG_LEVEL", "JSON_LOGS"):
        monkeypatch.delenv(f"BOOKS_{suffix}", raising=False)
    assert BooksConfig.from_env() == BooksConfig.default()


@pytest.mark.parametrize(
    "error,status,phrase",
    [
        (ValidationError("bad"), 400, "Bad Request"),
        (AuthenticationError(), 401, "Unauthorized"),
        (AuthorizationError(), 403, "Forbidden"),
        (NotFoundError("gone"), 404, "Not Found"),
        (ConflictError("taken"), 409, "Conflict"),
    ],
)
def test_error_kinds_map_to_status(error, status, phrase):
    body = error.to_dict()
    assert body["statusCode"] == status
    assert body["error"] == phrase


def test_unique_violation_detection():
    sqlite_error = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: books.title"))
    fk_error = IntegrityError("INSERT", {}, Exception("FOREIGN KEY constraint failed"))
    assert is_unique_violation(sqlite_error)
    assert not is_unique_violation(fk_error)


def test_parse_id():
    assert parse_id("not-a-uuid") is None
    assert str(parse_id("6F1C2B1E-0D7E-4C1A-9A52-1D2F3E4A5B6C")) == "6f1c2b1e-0d7e-4c1a-9a52-1d2f3e4a5b6c"
