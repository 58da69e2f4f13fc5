"""Dataclass-based domain configuration pattern.

The books domain defines its limits, auth settings and runtime switches as
a frozen dataclass. Defaults work out of the box for local development and
tests; deployments override them through ``BOOKS_*`` environment variables.
"""

import os
from dataclasses import dataclass, field


# ---------------------------------------------------------------------------
# Nested config sections
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AuthConfig:
    """JWT verification settings."""

    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    access_token_ttl_minutes: int = 60
    cookie_name: str = "jwt"


@dataclass(frozen=True)
class BookRules:
    """Field constraints applied to book payloads."""

    title_min_length: int = 3
    title_max_length: int = 100
    min_rating: int = 1
    max_rating: int = 5
    min_price: float = 0
    max_price: float = 1000


# ---------------------------------------------------------------------------
# Top-level domain config
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BooksConfig:
    """Complete configuration for the books API.

    Usage::

        config = BooksConfig.from_env()
        app = create_app(config)
    """

    auth: AuthConfig = field(default_factory=AuthConfig)
    rules: BookRules = field(default_factory=BookRules)

    api_prefix: str = "/api"
    service_name: str = "books-api"
    log_level: str = "INFO"
    json_logs: bool = True

    @classmethod
    def default(cls) -> "BooksConfig":
        """Create config with all defaults."""
        return cls()

    @classmethod
    def from_env(cls, prefix: str = "BOOKS_") -> "BooksConfig":
        """Create config from environment variables.

        Example: BOOKS_JWT_SECRET=s3cret BOOKS_API_PREFIX=/v1
        """
        auth_overrides = {}
        secret = os.getenv(f"{prefix}JWT_SECRET")
        if secret:
            auth_overrides["jwt_secret"] = secret
        algorithm = os.getenv(f"{prefix}JWT_ALGORITHM")
        if algorithm:
            auth_overrides["jwt_algorithm"] = algorithm
        ttl = os.getenv(f"{prefix}ACCESS_TOKEN_TTL_MINUTES")
        if ttl:
            auth_overrides["access_token_ttl_minutes"] = int(ttl)
        cookie = os.getenv(f"{prefix}AUTH_COOKIE")
        if cookie:
            auth_overrides["cookie_name"] = cookie

        overrides = {"auth": AuthConfig(**auth_overrides)}
        api_prefix = os.getenv(f"{prefix}API_PREFIX")
        if api_prefix is not None:
            overrides["api_prefix"] = api_prefix.rstrip("/")
        log_level = os.getenv(f"{prefix}LOG_LEVEL")
        if log_level:
            overrides["log_level"] = log_level.upper()
        json_logs = os.getenv(f"{prefix}JSON_LOGS")
        if json_logs:
            overrides["json_logs"] = json_logs.lower() == "true"

        return cls(**overrides)
