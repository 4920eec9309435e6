"""
Driver-facing delivery feed.

Reads raw rows from the repository, normalises them, and ranks them by
distance from the driver.  Reads are fail-safe: a storage error is logged
and the driver gets an empty list rather than an error page.

Unknown locations
-----------------
A delivery on the ``(0, 0)`` sentinel has no usable position.  Such
deliveries are kept out of the distance ranking, labelled
``settings.unknown_location_label`` and listed after the ranked ones in
their original order.  Without a reference point nothing is ranked and
every delivery gets that label.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import settings
from src.domain.entities import DeliveryRecord, RankedDelivery, ReferencePoint
from src.domain.enums import DeliveryStatus
from src.domain.normalize import normalize_delivery
from src.domain.ranking import rank_by_distance
from src.infrastructure.repositories import DeliveryRepository, as_dict

logger = logging.getLogger(__name__)


def _unranked(record: DeliveryRecord) -> RankedDelivery:
    return RankedDelivery(record, 0.0, settings.unknown_location_label)


class DeliveryService:
    def __init__(self, session: AsyncSession):
        self.repo = DeliveryRepository(session)

    async def list_deliveries(
        self,
        status: Optional[DeliveryStatus] = None,
        driver_id: Optional[str] = None,
    ) -> list[DeliveryRecord]:
        try:
            rows = await self.repo.list_raw()
        except SQLAlchemyError:
            logger.exception("Error fetching deliveries")
            return []

        records = [normalize_delivery(row) for row in rows]
        if status is not None:
            records = [r for r in records if r.status == status]
        if driver_id is not None:
            records = [r for r in records if r.driver_id == driver_id]
        return records

    async def ranked_deliveries(
        self,
        reference: Optional[ReferencePoint],
        status: Optional[DeliveryStatus] = None,
        driver_id: Optional[str] = None,
    ) -> list[RankedDelivery]:
        records = await self.list_deliveries(status, driver_id)
        if reference is None:
            return [_unranked(r) for r in records]

        located = [r for r in records if r.has_location]
        unlocated = [r for r in records if not r.has_location]
        if unlocated:
            logger.info(
                "%d deliveries without a location left out of ranking",
                len(unlocated),
            )
        return rank_by_distance(located, reference) + [
            _unranked(r) for r in unlocated
        ]

    async def update_status(
        self, delivery_id: str, status: DeliveryStatus
    ) -> DeliveryRecord:
        # Any status may be written at any time; see DELIVERY_TRANSITIONS.
        row = await self.repo.update(delivery_id, status=status.value)
        return normalize_delivery(as_dict(row))

    async def update_delivery_time(
        self, delivery_id: str, delivery_time: str
    ) -> DeliveryRecord:
        row = await self.repo.update(delivery_id, delivery_time=delivery_time)
        return normalize_delivery(as_dict(row))
