"""Domain enumerations and the delivery lifecycle."""

import enum


class DeliveryStatus(str, enum.Enum):
    PENDING = "Pending"
    ON_WAY = "On Way"
    DELIVERED = "Delivered"
    NO_ANSWER = "No Answer"
    CANCELLED = "Cancelled"


# Informational only: writes are not validated against this map.
DELIVERY_TRANSITIONS: dict[DeliveryStatus, set[DeliveryStatus]] = {
    DeliveryStatus.PENDING: {DeliveryStatus.ON_WAY, DeliveryStatus.CANCELLED},
    DeliveryStatus.ON_WAY: {
        DeliveryStatus.DELIVERED,
        DeliveryStatus.NO_ANSWER,
        DeliveryStatus.CANCELLED,
    },
    DeliveryStatus.DELIVERED: set(),
    DeliveryStatus.NO_ANSWER: set(),
    DeliveryStatus.CANCELLED: set(),
}

# Deliveries a driver still has to act on
OPEN_STATUSES: frozenset[DeliveryStatus] = frozenset(
    status for status, nxt in DELIVERY_TRANSITIONS.items() if nxt
)


class Priority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class VehicleType(str, enum.Enum):
    CAR = "car"
    BIKE = "bike"
    SCOOTER = "scooter"
    VAN = "van"
