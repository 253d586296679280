"""Reminder endpoints; mirrors the goal routes."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from wellness.audit import record_audit
from wellness.errors import NotFound
from wellness.schemas import Reminder, ReminderCreate, ReminderUpdate
from wellness.security import Identity, get_current_identity, verify_ownership
from wellness.store import RecordStore, get_store

router = APIRouter(prefix="/api/reminders", tags=["reminders"])


@router.get("", response_model=List[Reminder])
async def list_reminders(
    request: Request,
    identity: Identity = Depends(get_current_identity),
    store: RecordStore = Depends(get_store),
):
    reminders = store.list_reminders(identity.account_id)
    record_audit(store, identity.account_id, "viewReminders", target="reminders", request=request)
    return reminders


@router.post("", response_model=Reminder, status_code=status.HTTP_201_CREATED)
async def create_reminder(
    payload: ReminderCreate,
    request: Request,
    identity: Identity = Depends(get_current_identity),
    store: RecordStore = Depends(get_store),
):
    reminder = store.create_reminder(identity.account_id, payload)
    record_audit(
        store,
        identity.account_id,
        "createReminder",
        target=f"reminder:{reminder.id}",
        request=request,
    )
    return reminder


@router.put("/{reminder_id}", response_model=Reminder)
async def update_reminder(
    reminder_id: str,
    payload: ReminderUpdate,
    request: Request,
    identity: Identity = Depends(get_current_identity),
    store: RecordStore = Depends(get_store),
):
    verify_ownership(store.get_reminder(reminder_id), identity, kind="Reminder")
    reminder = store.update_reminder(reminder_id, payload)
    if reminder is None:
        raise NotFound("Reminder not found")
    record_audit(
        store,
        identity.account_id,
        "updateReminder",
        target=f"reminder:{reminder_id}",
        metadata={"fields": sorted(payload.model_fields_set)},
        request=request,
    )
    return reminder


@router.delete("/{reminder_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_reminder(
    reminder_id: str,
    request: Request,
    identity: Identity = Depends(get_current_identity),
    store: RecordStore = Depends(get_store),
):
    verify_ownership(store.get_reminder(reminder_id), identity, kind="Reminder")
    if not store.delete_reminder(reminder_id):
        raise NotFound("Reminder not found")
    record_audit(
        store, identity.account_id, "deleteReminder", target=f"reminder:{reminder_id}", request=request
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
