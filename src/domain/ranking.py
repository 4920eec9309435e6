"""
Ranking pipeline: order deliveries by distance from the driver.

Every record is ranked, including ones sitting on the ``(0, 0)``
"unknown location" sentinel.  Callers that want those handled differently
must split them out first (see ``DeliveryService.ranked_deliveries``).

Complexity: O(N log N); ``sorted`` is stable, so equal distances keep
their input order.
"""

from __future__ import annotations

import logging
from typing import Iterable

from .distance import format_distance, haversine_km
from .entities import DeliveryRecord, RankedDelivery, ReferencePoint

logger = logging.getLogger(__name__)


def rank_by_distance(
    records: Iterable[DeliveryRecord], reference: ReferencePoint
) -> list[RankedDelivery]:
    logger.debug(
        "Ranking from reference (%.6f, %.6f)",
        reference.latitude,
        reference.longitude,
    )
    ranked = []
    for record in records:
        km = haversine_km(
            reference.latitude,
            reference.longitude,
            record.latitude,
            record.longitude,
        )
        logger.debug(
            "Delivery %s at (%s, %s): %.2f km",
            record.id,
            record.latitude,
            record.longitude,
            km,
        )
        ranked.append(RankedDelivery(record, km, format_distance(km)))

    return sorted(ranked, key=lambda r: r.distance_km)
