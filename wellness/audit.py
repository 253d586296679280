"""Audit trail helpers.

Handlers call :func:`record_audit` once an operation has succeeded.  The entry
lands in the store's append-only audit log and is mirrored to the structured
log so it can be shipped off-box.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import structlog
from fastapi import Request

from wellness.schemas import AuditAction, AuditEntry
from wellness.store import RecordStore

logger = structlog.get_logger(__name__)


def audit_details_from_request(request: Optional[Request]) -> Dict[str, Any]:
    """Capture structured request metadata for audit logging."""

    if request is None:
        return {}
    payload: Dict[str, Any] = {
        "method": request.method,
        "path": request.url.path,
    }
    if request.client:
        payload["client"] = request.client.host
    return payload


def record_audit(
    store: RecordStore,
    user_id: str,
    action: AuditAction,
    *,
    target: Optional[str] = None,
    metadata: Optional[Mapping[str, Any]] = None,
    request: Optional[Request] = None,
) -> AuditEntry:
    """Append an audit entry for ``user_id`` and log it."""

    details = audit_details_from_request(request)
    entry = store.append_audit(
        user_id,
        action,
        target_resource=target,
        metadata=metadata,
        ip_address=details.get("client"),
    )
    logger.info(
        "audit_recorded",
        actor=user_id,
        action=action,
        target=target,
        method=details.get("method"),
        path=details.get("path"),
    )
    return entry


__all__ = ["audit_details_from_request", "record_audit"]
