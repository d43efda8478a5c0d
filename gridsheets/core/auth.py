"""
core/auth.py
-------------

Authentication primitives and the gate guarding protected routes.

Password hashing is delegated to ``bcrypt`` and bearer tokens to
``PyJWT``.  Two strategies implement :class:`AuthStrategy`:

* :class:`TokenAuthStrategy` issues a signed, time‑limited JWT on login
  and expects ``Authorization: Bearer <token>`` on protected calls.
* :class:`SessionAuthStrategy` stores the user in the signed session
  cookie maintained by Starlette's ``SessionMiddleware`` and redirects
  to the index page after login.

The application picks one according to ``Settings.auth_strategy`` and
stores it on ``app.state.auth_strategy``.  Protected routes depend on
:func:`require_user`.
"""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import bcrypt
import jwt
from fastapi import Depends, Request
from fastapi.responses import RedirectResponse

from gridsheets.core.config import Settings
from gridsheets.core.errors import ForbiddenError, ValidationError
from gridsheets.logging_config import logger

BCRYPT_ROUNDS = 10
# bcrypt only looks at the first 72 bytes of a password.
BCRYPT_MAX_BYTES = 72


def hash_password(password: str) -> str:
    """Return a salted bcrypt hash of ``password``."""
    raw = password.encode("utf-8")
    if len(raw) > BCRYPT_MAX_BYTES:
        raise ValidationError("Password too long")
    return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def check_password(password: str, hashed: str) -> bool:
    """Verify ``password`` against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


class AuthStrategy:
    """How callers prove who they are.

    Subclasses implement :meth:`login_response`, :meth:`authenticate`
    and optionally :meth:`logout`.
    """

    name = "base"

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def login_response(self, request: Request, identity: Dict[str, Any]) -> Any:
        raise NotImplementedError

    def authenticate(self, request: Request) -> Dict[str, Any]:
        raise NotImplementedError

    def logout(self, request: Request) -> None:
        return None


class TokenAuthStrategy(AuthStrategy):
    name = "token"

    def issue_token(self, identity: Dict[str, Any], now: datetime | None = None) -> str:
        """Sign a token carrying ``identity`` that expires after the configured lifetime."""
        now = now or datetime.now(timezone.utc)
        claims = dict(identity)
        claims["iat"] = now
        claims["exp"] = now + timedelta(minutes=self.settings.jwt_expires_minutes)
        return jwt.encode(claims, self.settings.jwt_secret, algorithm=self.settings.jwt_algorithm)

    def decode_token(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(token, self.settings.jwt_secret, algorithms=[self.settings.jwt_algorithm])
        except jwt.ExpiredSignatureError:
            logger.warning(json.dumps({"event": "auth_token_expired"}))
            raise ForbiddenError("Invalid token")
        except jwt.InvalidTokenError as exc:
            logger.warning(json.dumps({"event": "auth_token_invalid", "reason": type(exc).__name__}))
            raise ForbiddenError("Invalid token")

    def login_response(self, request: Request, identity: Dict[str, Any]) -> Dict[str, Any]:
        return {"success": True, "token": self.issue_token(identity)}

    def authenticate(self, request: Request) -> Dict[str, Any]:
        header = request.headers.get("Authorization")
        if not header:
            raise ForbiddenError("Access denied")
        parts = header.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise ForbiddenError("Access denied")
        return self.decode_token(parts[1])


class SessionAuthStrategy(AuthStrategy):
    name = "session"

    def _session(self, request: Request) -> Dict[str, Any]:
        if "session" not in request.scope:
            # SessionMiddleware is not installed; no one can be logged in.
            return {}
        return request.session

    def login_response(self, request: Request, identity: Dict[str, Any]) -> RedirectResponse:
        self._session(request)["user"] = identity
        return RedirectResponse(url=f"{self.settings.api_prefix}/index", status_code=303)

    def authenticate(self, request: Request) -> Dict[str, Any]:
        user = self._session(request).get("user")
        if not user:
            raise ForbiddenError("Access denied. Please log in.")
        return user

    def logout(self, request: Request) -> None:
        self._session(request).pop("user", None)


STRATEGIES = {
    TokenAuthStrategy.name: TokenAuthStrategy,
    SessionAuthStrategy.name: SessionAuthStrategy,
}


def build_auth_strategy(settings: Settings) -> AuthStrategy:
    return STRATEGIES[settings.auth_strategy](settings)


def get_auth_strategy(request: Request) -> AuthStrategy:
    """Dependency returning the strategy stored on the application state."""
    return request.app.state.auth_strategy


def require_user(request: Request, strategy: AuthStrategy = Depends(get_auth_strategy)) -> Dict[str, Any]:
    """Auth gate for protected routes.

    Raises :class:`ForbiddenError` (403) when the caller has no valid
    token or session; otherwise attaches the identity to
    ``request.state.user`` and returns it.
    """
    try:
        identity = strategy.authenticate(request)
    except ForbiddenError as exc:
        logger.info(json.dumps({
            "event": "auth_rejected",
            "path": request.url.path,
            "strategy": strategy.name,
            "detail": exc.message,
        }))
        raise
    request.state.user = identity
    return identity
