"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from src.domain.entities import RankedDelivery
from src.domain.enums import DeliveryStatus, Priority, VehicleType


# ── Requests ──────────────────────────────────────────────────────────


class CustomerRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    phone: str = Field(..., min_length=1, max_length=40)
    address: str = Field(..., min_length=1, max_length=500)
    city: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    email: Optional[str] = None


class ProductRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    price: float = Field(..., ge=0)
    description: Optional[str] = None
    category: Optional[str] = None
    in_stock: bool = True
    image_url: Optional[str] = None


class DriverCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    phone: str = Field(..., min_length=1, max_length=40)
    vehicle_type: VehicleType = VehicleType.CAR
    license_number: Optional[str] = None
    area_coverage: Optional[str] = Field(
        None, description="City or region this driver covers."
    )


class DriverUpdateRequest(DriverCreateRequest):
    is_active: bool
    rating: Optional[float] = Field(None, ge=0, le=5)


class OrderCreateRequest(BaseModel):
    customer_id: str
    product_id: str
    priority: Priority = Priority.MEDIUM
    notes: Optional[str] = None
    delivery_time: Optional[str] = Field(
        None, description="'today', 'tomorrow', '2-days' or free text."
    )
    latitude: Optional[float] = Field(
        None, ge=-90, le=90, description="Defaults to the customer's location."
    )
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class AssignmentCreateRequest(BaseModel):
    customer_id: str
    driver_id: str
    product_id: str
    priority: Priority = Priority.MEDIUM
    notes: Optional[str] = None
    estimated_delivery_time: Optional[str] = None


class OrderUpdateRequest(BaseModel):
    status: DeliveryStatus
    priority: Priority
    notes: Optional[str] = None
    delivery_time: Optional[str] = None
    product_id: Optional[str] = None
    driver_id: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class DriverAssignRequest(BaseModel):
    driver_id: str
    priority: Priority = Priority.MEDIUM
    notes: Optional[str] = None


class StatusUpdateRequest(BaseModel):
    status: DeliveryStatus


class DeliveryTimeUpdateRequest(BaseModel):
    delivery_time: str = Field(..., min_length=1, max_length=32)


# ── Responses ─────────────────────────────────────────────────────────


class CustomerResponse(BaseModel):
    id: str
    name: str
    phone: str
    address: str
    city: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    email: Optional[str] = None
    total_orders: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ProductResponse(BaseModel):
    id: str
    title: str
    price: float
    description: Optional[str] = None
    category: Optional[str] = None
    in_stock: bool
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class DriverResponse(BaseModel):
    id: str
    name: str
    phone: str
    vehicle_type: VehicleType
    license_number: Optional[str] = None
    area_coverage: Optional[str] = None
    is_active: bool
    current_latitude: Optional[float] = None
    current_longitude: Optional[float] = None
    rating: Optional[float] = None
    total_deliveries: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class OrderResponse(BaseModel):
    """A stored delivery row, exactly as persisted."""

    id: str
    external_id: Optional[str] = None
    customer_id: Optional[str] = None
    driver_id: Optional[str] = None
    product_id: Optional[str] = None
    customer_name: str
    customer_phone: str
    customer_address: str
    latitude: float
    longitude: float
    status: str
    priority: str
    delivery_time: Optional[str] = None
    estimated_delivery_time: Optional[str] = None
    notes: Optional[str] = None
    order_value: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class LinkedRecordResponse(BaseModel):
    id: str
    title: Optional[str] = None
    name: Optional[str] = None

    model_config = {"from_attributes": True}


class DeliveryResponse(BaseModel):
    """A normalised delivery as the driver sees it."""

    id: str
    external_id: Optional[str] = None
    customer_id: Optional[str] = None
    driver_id: Optional[str] = None
    product_id: Optional[str] = None
    customer_name: str
    customer_phone: str
    customer_address: str
    customer_city: Optional[str] = None
    customer_country: Optional[str] = None
    latitude: float
    longitude: float
    status: DeliveryStatus
    priority: Priority
    delivery_time: Optional[str] = None
    estimated_delivery_time: Optional[str] = None
    notes: Optional[str] = None
    order_value: Optional[float] = None
    created_at: str
    updated_at: str
    driver: Optional[LinkedRecordResponse] = None
    product: Optional[LinkedRecordResponse] = None
    customer_record: Optional[LinkedRecordResponse] = None

    model_config = {"from_attributes": True}


class RankedDeliveryResponse(DeliveryResponse):
    distance_km: float
    distance_label: str

    @classmethod
    def from_ranked(cls, ranked: RankedDelivery) -> "RankedDeliveryResponse":
        base = DeliveryResponse.model_validate(ranked.delivery)
        return cls(
            **base.model_dump(),
            distance_km=ranked.distance_km,
            distance_label=ranked.distance_label,
        )


class StatsResponse(BaseModel):
    total_customers: int
    total_products: int
    total_drivers: int
    active_drivers: int
    pending_deliveries: int
    completed_deliveries: int

    model_config = {"from_attributes": True}


class FixDeliveriesResponse(BaseModel):
    success: bool
    fixed_count: int
    total_deliveries: int


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    detail: str
