"""Health tip and public health information endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from wellness.content import public_content, random_health_tip
from wellness.schemas import HealthTip, PublicContent
from wellness.security import Identity, get_current_identity

router = APIRouter(prefix="/api", tags=["content"])


@router.get("/health-tip", response_model=HealthTip)
async def get_health_tip(identity: Identity = Depends(get_current_identity)):
    return random_health_tip()


@router.get("/public/health-info", response_model=List[PublicContent])
async def get_public_health_info():
    """Public health topics; no authentication required."""

    return public_content()
