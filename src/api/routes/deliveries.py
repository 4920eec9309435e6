"""
Driver feed endpoints
=====================

GET   /api/v1/deliveries                        -- deliveries, nearest first
PATCH /api/v1/deliveries/{delivery_id}/status        -- set delivery status
PATCH /api/v1/deliveries/{delivery_id}/delivery-time -- reschedule
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_db
from src.api.middleware import limiter
from src.api.schemas import (
    DeliveryResponse,
    DeliveryTimeUpdateRequest,
    ErrorResponse,
    RankedDeliveryResponse,
    StatusUpdateRequest,
)
from src.config import settings
from src.domain.entities import ReferencePoint
from src.domain.enums import DeliveryStatus
from src.services.deliveries import DeliveryService

router = APIRouter(prefix="/deliveries", tags=["deliveries"])

NOT_FOUND = {404: {"model": ErrorResponse}}


@router.get(
    "",
    response_model=list[RankedDeliveryResponse],
    summary="List deliveries sorted by distance from the driver",
    description=(
        "Pass the driver's current ``lat``/``lng`` to rank by distance. "
        "Without them, or for deliveries with no known location, the "
        "distance label reads 'Location unknown'."
    ),
)
@limiter.limit(settings.rate_limit)
async def list_deliveries(
    request: Request,
    status: Optional[DeliveryStatus] = None,
    driver_id: Optional[str] = None,
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180),
    accuracy: Optional[float] = Query(None, ge=0),
    db: AsyncSession = Depends(get_db),
):
    if (lat is None) != (lng is None):
        raise HTTPException(
            status_code=422, detail="lat and lng must be given together"
        )

    reference = (
        ReferencePoint(latitude=lat, longitude=lng, accuracy=accuracy)
        if lat is not None
        else None
    )
    ranked = await DeliveryService(db).ranked_deliveries(
        reference, status=status, driver_id=driver_id
    )
    return [RankedDeliveryResponse.from_ranked(r) for r in ranked]


@router.patch(
    "/{delivery_id}/status",
    response_model=DeliveryResponse,
    responses=NOT_FOUND,
    summary="Update a delivery's status",
)
@limiter.limit(settings.rate_limit)
async def update_status(
    request: Request,
    delivery_id: str,
    body: StatusUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    return await DeliveryService(db).update_status(delivery_id, body.status)


@router.patch(
    "/{delivery_id}/delivery-time",
    response_model=DeliveryResponse,
    responses=NOT_FOUND,
    summary="Reschedule a delivery",
)
@limiter.limit(settings.rate_limit)
async def update_delivery_time(
    request: Request,
    delivery_id: str,
    body: DeliveryTimeUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    return await DeliveryService(db).update_delivery_time(
        delivery_id, body.delivery_time
    )
