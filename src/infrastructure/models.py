"""
SQLAlchemy ORM models.

Tables
------
* ``customers``   -- people we deliver to, with an optional home location
* ``products``    -- catalogue items; price becomes an order's value
* ``drivers``     -- couriers and their vehicles
* ``deliveries``  -- orders, denormalising the customer's contact details

``deliveries.status`` is a plain string rather than an enum column: older
rows carry spellings like ``in_progress`` or ``completed``, which the
record normaliser maps onto the canonical statuses on read.

Identities are opaque hex strings.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)

from .database import Base
from src.domain.enums import DeliveryStatus, Priority, VehicleType


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CustomerModel(Base):
    __tablename__ = "customers"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(200), nullable=False)
    phone = Column(String(40), nullable=False)
    address = Column(String(500), nullable=False)
    city = Column(String(120), nullable=True)
    country = Column(String(120), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    email = Column(String(255), nullable=True)
    total_orders = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    __table_args__ = (Index("idx_customers_phone", "phone"),)


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(String(32), primary_key=True, default=new_id)
    title = Column(String(200), nullable=False)
    price = Column(Float, nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(120), nullable=True)
    in_stock = Column(Boolean, default=True, nullable=False)
    image_url = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    __table_args__ = (Index("idx_products_category", "category"),)


class DriverModel(Base):
    __tablename__ = "drivers"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(200), nullable=False)
    phone = Column(String(40), nullable=False)
    vehicle_type = Column(Enum(VehicleType), default=VehicleType.CAR, nullable=False)
    license_number = Column(String(60), nullable=True)
    area_coverage = Column(String(200), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    current_latitude = Column(Float, nullable=True)
    current_longitude = Column(Float, nullable=True)
    rating = Column(Float, default=5.0)
    total_deliveries = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index("idx_drivers_vehicle_type", "vehicle_type"),
        Index("idx_drivers_active", "is_active"),
    )


class DeliveryModel(Base):
    __tablename__ = "deliveries"

    id = Column(String(32), primary_key=True, default=new_id)
    external_id = Column(String(64), nullable=True)

    customer_id = Column(
        String(32), ForeignKey("customers.id", ondelete="SET NULL"), nullable=True
    )
    driver_id = Column(
        String(32), ForeignKey("drivers.id", ondelete="SET NULL"), nullable=True
    )
    product_id = Column(
        String(32), ForeignKey("products.id", ondelete="SET NULL"), nullable=True
    )

    # Snapshot of the customer at order time
    customer_name = Column(String(200), nullable=False, default="")
    customer_phone = Column(String(40), nullable=False, default="")
    customer_address = Column(String(500), nullable=False, default="")
    customer_city = Column(String(120), nullable=True)
    customer_country = Column(String(120), nullable=True)

    latitude = Column(Float, nullable=False, default=0.0)
    longitude = Column(Float, nullable=False, default=0.0)

    status = Column(String(32), default=DeliveryStatus.PENDING.value, nullable=False)
    priority = Column(String(16), default=Priority.MEDIUM.value, nullable=False)
    delivery_time = Column(String(32), nullable=True)
    estimated_delivery_time = Column(String(64), nullable=True)
    notes = Column(Text, nullable=True)
    order_value = Column(Float, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index("idx_deliveries_status", "status"),
        Index("idx_deliveries_customer", "customer_id"),
        Index("idx_deliveries_driver", "driver_id"),
        Index("idx_deliveries_product", "product_id"),
    )
