"""
routes/auth.py
---------------

API routes for signup, login and logout.  What a successful login
returns depends on the configured strategy: a bearer token for the
``token`` strategy, a session cookie plus a redirect to the index page
for the ``session`` strategy.
"""

from __future__ import annotations

import json

from fastapi import APIRouter, Depends, Request

from gridsheets.clients.mongo_client import DocumentStore, get_store
from gridsheets.core.auth import AuthStrategy, get_auth_strategy
from gridsheets.logging_config import logger
from gridsheets.schemas.auth import Credentials, LogoutResponse, SignupResponse
from gridsheets.services.auth_service import authenticate_user, signup_user

router = APIRouter()


@router.post("/signup", response_model=SignupResponse, status_code=201)
def signup(data: Credentials, store: DocumentStore = Depends(get_store)):
    logger.info(json.dumps({"event": "signup_request", "username": data.username}))
    return signup_user(data, store)


@router.post("/login")
def login(
    data: Credentials,
    request: Request,
    store: DocumentStore = Depends(get_store),
    strategy: AuthStrategy = Depends(get_auth_strategy),
):
    logger.info(json.dumps({"event": "login_request", "username": data.username, "strategy": strategy.name}))
    identity = authenticate_user(data, store)
    return strategy.login_response(request, identity)


@router.post("/logout", response_model=LogoutResponse)
def logout(request: Request, strategy: AuthStrategy = Depends(get_auth_strategy)):
    strategy.logout(request)
    return {"success": True}
