"""
core/config.py
----------------

Application configuration module.

Defines strongly‑typed settings loaded from the environment using
``pydantic-settings``. These settings control the document store
connection, token signing, the authentication strategy and the
defaults served for sheets that have never been saved. The values
provided here are development defaults and must be overridden via
environment variables at deployment time (in particular the secrets).
"""

from __future__ import annotations

from functools import lru_cache
from typing import List, Literal

from fastapi import Request
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "change-me"
DEFAULT_SESSION_SECRET = "change-me-too"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    The settings structure is flat and uses environment variables
    prefixed with ``APP_``.  For example, to point the service at a
    different database you can set
    ``APP_MONGO_URI=mongodb://db.internal:27017``.  The connection URI and
    the secrets also accept the unprefixed names used by older
    deployments (``MONGO_URI``, ``JWT_SECRET``, ``SESSION_SECRET``), and a
    ``.env`` file in the working directory is read when present.

    See :class:`pydantic_settings.BaseSettings` for details on how
    environment variables are mapped onto fields.
    """

    # Document store
    mongo_uri: str = Field(
        "mongodb://localhost:27017",
        validation_alias=AliasChoices("APP_MONGO_URI", "MONGO_URI"),
        description="MongoDB connection URI.",
    )
    mongo_database: str = Field("gridsheets", description="Database holding users, metadata and tables.")
    mongo_connect_mode: Literal["lazy", "eager"] = Field(
        "lazy", description="'eager' pings the store at startup and fails fast; 'lazy' connects on first use."
    )
    server_selection_timeout_ms: int = Field(5000, ge=1, description="Time allowed to establish store connectivity.")

    # Authentication
    auth_strategy: Literal["token", "session"] = Field("token", description="How protected routes authenticate callers.")
    jwt_secret: str = Field(
        DEFAULT_JWT_SECRET,
        validation_alias=AliasChoices("APP_JWT_SECRET", "JWT_SECRET"),
        description="Secret used to sign bearer tokens.",
    )
    jwt_algorithm: str = Field("HS256", description="Signing algorithm for bearer tokens.")
    jwt_expires_minutes: int = Field(60, ge=1, description="Lifetime of issued bearer tokens.")
    session_secret: str = Field(
        DEFAULT_SESSION_SECRET,
        validation_alias=AliasChoices("APP_SESSION_SECRET", "SESSION_SECRET"),
        description="Secret used to sign session cookies.",
    )

    # HTTP surface
    api_prefix: str = Field("/api", description="Base path under which the API routes are mounted.")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    index_file: str = Field("public/index.html", description="File served by the protected index route.")

    # Sheets
    default_collection: str = Field("defaultCollection", description="Active sheet before any selection.")
    default_rows: int = Field(5, ge=0)
    default_columns: int = Field(5, ge=0)

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
        case_sensitive=False,
    )

    def default_secrets_in_use(self) -> List[str]:
        """Names of secrets still set to their development defaults."""
        in_use = []
        if self.jwt_secret == DEFAULT_JWT_SECRET:
            in_use.append("jwt_secret")
        if self.session_secret == DEFAULT_SESSION_SECRET:
            in_use.append("session_secret")
        return in_use


@lru_cache()
def get_settings() -> Settings:
    """Return a cached instance of the application settings.

    Using a cache prevents expensive environment parsing on every call.
    Tests that need different values call ``get_settings.cache_clear()``
    or override the dependency on the application.
    """
    return Settings()


def get_app_settings(request: Request) -> Settings:
    """Dependency returning the settings the application was built with."""
    return request.app.state.settings
