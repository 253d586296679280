"""Registration, login and logout endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response, status

from wellness.audit import record_audit
from wellness.auth import authenticate_account
from wellness.config import Settings
from wellness.errors import Unauthenticated
from wellness.schemas import AuthResponse, LoginRequest, RegisterRequest
from wellness.security import (
    Identity,
    create_access_token,
    get_app_settings,
    get_current_identity,
)
from wellness.store import RecordStore, get_store

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    request: Request,
    store: RecordStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """Create an account and return it with a fresh access token."""

    account = store.create_account(payload)
    token = create_access_token(account.id, account.role, settings)
    record_audit(
        store,
        account.id,
        "login",
        target="auth",
        metadata={"method": "register"},
        request=request,
    )
    return AuthResponse(user=account.to_safe(), token=token)


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginRequest,
    request: Request,
    store: RecordStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    account = authenticate_account(store, payload.email, payload.password)
    if account is None:
        raise Unauthenticated("Invalid email or password")
    token = create_access_token(account.id, account.role, settings)
    record_audit(store, account.id, "login", target="auth", request=request)
    return AuthResponse(user=account.to_safe(), token=token)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def logout(
    request: Request,
    identity: Identity = Depends(get_current_identity),
    store: RecordStore = Depends(get_store),
):
    """Record the logout.

    Tokens are stateless; the client discards its copy and the token stays
    valid until it expires.
    """

    record_audit(store, identity.account_id, "logout", target="auth", request=request)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
