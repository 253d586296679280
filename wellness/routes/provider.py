"""Provider dashboard endpoints.

A provider only ever sees patients whose ``providerId`` names them.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Request

from wellness.audit import record_audit
from wellness.errors import Forbidden, NotFound
from wellness.schemas import PatientDetails, PatientSummary
from wellness.security import Identity, require_role
from wellness.store import RecordStore, get_store
from wellness.time_utils import utc_today

router = APIRouter(prefix="/api/provider", tags=["provider"])


@router.get("/patients", response_model=List[PatientSummary])
async def list_patients(
    request: Request,
    identity: Identity = Depends(require_role("provider")),
    store: RecordStore = Depends(get_store),
):
    summaries = store.patient_summaries(identity.account_id, utc_today())
    record_audit(store, identity.account_id, "viewPatients", target="patients", request=request)
    return summaries


@router.get("/patients/{patient_id}", response_model=PatientDetails)
async def get_patient(
    patient_id: str,
    request: Request,
    identity: Identity = Depends(require_role("provider")),
    store: RecordStore = Depends(get_store),
):
    patient = store.get_account(patient_id)
    if patient is None or patient.role != "patient":
        raise NotFound("Patient not found")
    if patient.provider_id != identity.account_id:
        raise Forbidden("Access denied")
    details = store.patient_details(patient_id, utc_today())
    if details is None:
        raise NotFound("Patient not found")
    record_audit(
        store,
        identity.account_id,
        "viewPatientDetails",
        target=f"patient:{patient_id}",
        request=request,
    )
    return details
