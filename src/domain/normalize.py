"""
Record normaliser: raw backend rows -> ``DeliveryRecord``.

Rows reach us from the current schema, from older imports that used
camelCase keys, and from hand-edited data.  Every parser here is total:
it returns a typed default instead of raising, so a single bad row can
never take down a driver's list.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Optional

from .entities import DeliveryRecord, LinkedRecordSummary
from .enums import DeliveryStatus, Priority

_WHITESPACE = re.compile(r"\s+")
# Plain ASCII decimals only: no digit-group underscores, no non-Latin digits
_DECIMAL = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

_STATUS_SYNONYMS: dict[DeliveryStatus, frozenset[str]] = {
    DeliveryStatus.PENDING: frozenset({"pending", "not_started"}),
    DeliveryStatus.ON_WAY: frozenset(
        {"on_way", "in_progress", "inprogress", "onway", "on way"}
    ),
    DeliveryStatus.DELIVERED: frozenset({"delivered", "completed", "complete"}),
    DeliveryStatus.NO_ANSWER: frozenset({"no_answer", "noanswer"}),
    DeliveryStatus.CANCELLED: frozenset({"cancelled", "canceled"}),
}


# ── Field parsers ─────────────────────────────────────────────────────


def to_number(value: Any, fallback: float = 0.0) -> float:
    """Finite float from a number or numeric string, else *fallback*."""
    if isinstance(value, bool):
        return fallback
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return fallback
        return number if math.isfinite(number) else fallback
    if isinstance(value, str):
        text = value.strip()
        if not _DECIMAL.fullmatch(text):
            return fallback
        number = float(text)
        return number if math.isfinite(number) else fallback
    return fallback


def normalize_status(value: Any) -> DeliveryStatus:
    """Map any status spelling onto the five canonical ones (default Pending)."""
    if not isinstance(value, str):
        return DeliveryStatus.PENDING

    key = _WHITESPACE.sub("_", value.strip().lower())
    for status, synonyms in _STATUS_SYNONYMS.items():
        if key in synonyms:
            return status

    return DeliveryStatus.PENDING


def normalize_priority(value: Any) -> Priority:
    if isinstance(value, Priority):
        return value
    if isinstance(value, str):
        try:
            return Priority(value.strip().lower())
        except ValueError:
            pass
    return Priority.MEDIUM


def _optional_str(value: Any) -> Optional[str]:
    if value is None or (isinstance(value, str) and not value):
        return None
    return str(value)


def _timestamp(value: Any) -> Optional[str]:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, str) and value:
        return value
    return None


def _from_epoch_ms(value: Any) -> Optional[str]:
    millis = to_number(value, 0.0)
    if not millis:
        return None
    try:
        return datetime.fromtimestamp(millis / 1000, tz=timezone.utc).isoformat()
    except (OverflowError, OSError, ValueError):
        return None


def _linked_summary(value: Any) -> Optional[LinkedRecordSummary]:
    if not isinstance(value, Mapping) or value.get("id") in (None, ""):
        return None
    raw = value.get("raw")
    return LinkedRecordSummary(
        id=str(value["id"]),
        title=_optional_str(value.get("title")),
        name=_optional_str(value.get("name")),
        raw=dict(raw) if isinstance(raw, Mapping) else None,
    )


def _pick(raw: Mapping, *keys: str) -> Any:
    """First non-None value among *keys* (snake_case first, legacy after)."""
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


# ── Record ────────────────────────────────────────────────────────────


def normalize_delivery(
    raw: Any, now: Optional[datetime] = None
) -> DeliveryRecord:
    """Build a ``DeliveryRecord`` from an arbitrary backend row.  Never raises."""
    if not isinstance(raw, Mapping):
        raw = {}

    created_at = (
        _timestamp(_pick(raw, "created_at", "createdAt"))
        or _from_epoch_ms(_pick(raw, "_creation_time", "_creationTime"))
        or (now or datetime.now(timezone.utc)).isoformat()
    )
    updated_at = _timestamp(_pick(raw, "updated_at", "updatedAt")) or created_at

    order_value = _pick(raw, "order_value", "orderValue")

    return DeliveryRecord(
        id=_optional_str(_pick(raw, "_id", "id")) or "",
        external_id=_optional_str(_pick(raw, "external_id", "externalId")),
        customer_id=_optional_str(_pick(raw, "customer_id", "customerId")),
        driver_id=_optional_str(_pick(raw, "driver_id", "driverId")),
        product_id=_optional_str(_pick(raw, "product_id", "productId")),
        customer_name=_optional_str(_pick(raw, "customer_name", "customerName")) or "",
        customer_phone=_optional_str(_pick(raw, "customer_phone", "customerPhone")) or "",
        customer_address=_optional_str(_pick(raw, "customer_address", "customerAddress")) or "",
        customer_city=_optional_str(_pick(raw, "customer_city", "customerCity")),
        customer_country=_optional_str(_pick(raw, "customer_country", "customerCountry")),
        latitude=to_number(raw.get("latitude"), 0.0),
        longitude=to_number(raw.get("longitude"), 0.0),
        status=normalize_status(raw.get("status")),
        priority=normalize_priority(raw.get("priority")),
        delivery_time=_optional_str(_pick(raw, "delivery_time", "deliveryTime")),
        estimated_delivery_time=_optional_str(
            _pick(raw, "estimated_delivery_time", "estimatedDeliveryTime")
        ),
        notes=_optional_str(raw.get("notes")),
        order_value=None if order_value is None else to_number(order_value),
        created_at=created_at,
        updated_at=updated_at,
        driver=_linked_summary(raw.get("driver")),
        product=_linked_summary(raw.get("product")),
        customer_record=_linked_summary(
            _pick(raw, "customer_record", "customerRecord")
        ),
    )
