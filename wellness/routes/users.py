"""Endpoints for the caller's own account."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Request

from wellness.audit import record_audit
from wellness.errors import NotFound
from wellness.schemas import AuditEntry, ProfileUpdate, SafeAccount
from wellness.security import Identity, get_current_identity
from wellness.store import RecordStore, get_store

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/me", response_model=SafeAccount)
async def get_me(
    request: Request,
    identity: Identity = Depends(get_current_identity),
    store: RecordStore = Depends(get_store),
):
    account = store.get_safe_account(identity.account_id)
    if account is None:
        raise NotFound("User not found")
    record_audit(
        store,
        identity.account_id,
        "viewProfile",
        target=f"user:{identity.account_id}",
        request=request,
    )
    return account


@router.put("/me", response_model=SafeAccount)
async def update_me(
    payload: ProfileUpdate,
    request: Request,
    identity: Identity = Depends(get_current_identity),
    store: RecordStore = Depends(get_store),
):
    account = store.update_account(identity.account_id, payload)
    if account is None:
        raise NotFound("User not found")
    record_audit(
        store,
        identity.account_id,
        "updateProfile",
        target=f"user:{identity.account_id}",
        request=request,
    )
    return account


@router.get("/me/audit", response_model=List[AuditEntry])
async def get_my_audit_log(
    identity: Identity = Depends(get_current_identity),
    store: RecordStore = Depends(get_store),
):
    """Return the caller's own audit trail, newest first."""

    return store.list_audit(identity.account_id)
