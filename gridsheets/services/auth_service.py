"""
services/auth_service.py
------------------------

Business logic for user signup and credential checks.  Users are
stored in the ``users`` collection as ``{username, password}`` where
``password`` is a bcrypt hash.  Neither the hash nor the plaintext is
ever returned to callers or written to the logs.
"""

from __future__ import annotations

import json
from typing import Any, Dict

from pymongo.errors import DuplicateKeyError, PyMongoError

from gridsheets.clients.mongo_client import DocumentStore
from gridsheets.core.auth import check_password, hash_password
from gridsheets.core.errors import ConflictError, StoreError, UnauthorizedError, ValidationError
from gridsheets.logging_config import logger, log_call
from gridsheets.schemas.auth import Credentials


@log_call
def signup_user(data: Credentials, store: DocumentStore) -> Dict[str, Any]:
    """Create a user with a hashed password.

    :raises ValidationError: if the username is blank
    :raises ConflictError: if the username is already registered
    :raises StoreError: if the document store fails
    """
    username = data.username
    if not username:
        raise ValidationError("Username required")
    try:
        if store.users.find_one({"username": username}):
            logger.warning(json.dumps({"event": "signup_conflict", "username": username}))
            raise ConflictError("User already exists")
        store.users.insert_one({"username": username, "password": hash_password(data.password)})
    except DuplicateKeyError:
        # lost a race with a concurrent signup for the same name
        logger.warning(json.dumps({"event": "signup_conflict", "username": username}))
        raise ConflictError("User already exists")
    except PyMongoError as e:
        logger.error(json.dumps({
            "event": "signup_error",
            "username": username,
            "detail": str(e),
        }), exc_info=True)
        raise StoreError("Error creating user")
    logger.info(json.dumps({"event": "signup_success", "username": username}))
    return {"success": True, "message": "User created"}


@log_call
def authenticate_user(data: Credentials, store: DocumentStore) -> Dict[str, Any]:
    """Check credentials and return the identity to embed in a token or session.

    :raises UnauthorizedError: if the user is unknown or the password is wrong
    :raises StoreError: if the document store fails
    """
    username = data.username
    try:
        user = store.users.find_one({"username": username})
    except PyMongoError as e:
        logger.error(json.dumps({
            "event": "login_error",
            "username": username,
            "detail": str(e),
        }), exc_info=True)
        raise StoreError("Error checking credentials")
    if not user or not check_password(data.password, user.get("password", "")):
        logger.warning(json.dumps({"event": "login_failed", "username": username}))
        raise UnauthorizedError("Invalid credentials")
    logger.info(json.dumps({"event": "login_success", "username": username}))
    return {"userId": str(user["_id"]), "username": username}
