"""
Domain entities for the delivery feed.

* ``DeliveryRecord`` is the strict, post-normalisation shape of a delivery.
  Every field has a usable value; coordinates are always finite floats and
  ``(0, 0)`` means "no location available".
* ``RankedDelivery`` wraps a record with its distance from the driver.  It
  is built per request and never persisted.
* ``ReferencePoint`` is the driver's current position.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from .enums import DeliveryStatus, Priority


# ── Value Objects ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class ReferencePoint:
    latitude: float
    longitude: float
    accuracy: Optional[float] = None
    captured_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )


@dataclass
class LinkedRecordSummary:
    """Denormalised snapshot of a referenced driver / product / customer."""

    id: str
    title: Optional[str] = None
    name: Optional[str] = None
    raw: Optional[dict[str, Any]] = None


# ── Entities ──────────────────────────────────────────────────────────


@dataclass
class DeliveryRecord:
    id: str = ""
    external_id: Optional[str] = None

    customer_id: Optional[str] = None
    driver_id: Optional[str] = None
    product_id: Optional[str] = None

    customer_name: str = ""
    customer_phone: str = ""
    customer_address: str = ""
    customer_city: Optional[str] = None
    customer_country: Optional[str] = None

    latitude: float = 0.0
    longitude: float = 0.0

    status: DeliveryStatus = DeliveryStatus.PENDING
    priority: Priority = Priority.MEDIUM

    delivery_time: Optional[str] = None
    estimated_delivery_time: Optional[str] = None
    notes: Optional[str] = None
    order_value: Optional[float] = None

    created_at: str = ""
    updated_at: str = ""

    driver: Optional[LinkedRecordSummary] = None
    product: Optional[LinkedRecordSummary] = None
    customer_record: Optional[LinkedRecordSummary] = None

    @property
    def has_location(self) -> bool:
        return not (self.latitude == 0 and self.longitude == 0)


@dataclass
class RankedDelivery:
    delivery: DeliveryRecord
    distance_km: float
    distance_label: str


@dataclass
class AdminStats:
    total_customers: int = 0
    total_products: int = 0
    total_drivers: int = 0
    active_drivers: int = 0
    pending_deliveries: int = 0
    completed_deliveries: int = 0
