"""Admin data entry: customers, products, drivers, orders and statistics."""

from __future__ import annotations

import logging
import time
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import AdminStats
from src.domain.enums import DeliveryStatus, OPEN_STATUSES, Priority
from src.domain.normalize import normalize_status
from src.infrastructure.models import (
    CustomerModel,
    DeliveryModel,
    DriverModel,
    ProductModel,
)
from src.infrastructure.repositories import (
    CustomerRepository,
    DeliveryRepository,
    DriverRepository,
    ProductRepository,
)

logger = logging.getLogger(__name__)

DEFAULT_PRODUCT_TITLE = "General Delivery Item"


def _external_id(prefix: str) -> str:
    return f"{prefix}-{int(time.time() * 1000)}"


class AdminService:
    def __init__(self, session: AsyncSession):
        self.customers = CustomerRepository(session)
        self.products = ProductRepository(session)
        self.drivers = DriverRepository(session)
        self.deliveries = DeliveryRepository(session)

    async def _safe_list(self, repo) -> list:
        try:
            return await repo.list_all()
        except SQLAlchemyError:
            logger.exception("Error fetching %s records", repo.kind.lower())
            return []

    # ── Customers ─────────────────────────────────────────────────────

    async def list_customers(self) -> list[CustomerModel]:
        return await self._safe_list(self.customers)

    async def create_customer(self, **fields: Any) -> CustomerModel:
        return await self.customers.create(total_orders=0, **fields)

    async def update_customer(self, customer_id: str, **fields: Any) -> CustomerModel:
        return await self.customers.update(customer_id, **fields)

    async def delete_customer(self, customer_id: str) -> None:
        await self.customers.delete(customer_id)

    # ── Products ──────────────────────────────────────────────────────

    async def list_products(self) -> list[ProductModel]:
        return await self._safe_list(self.products)

    async def create_product(self, **fields: Any) -> ProductModel:
        return await self.products.create(**fields)

    async def update_product(self, product_id: str, **fields: Any) -> ProductModel:
        return await self.products.update(product_id, **fields)

    async def delete_product(self, product_id: str) -> None:
        await self.products.delete(product_id)

    # ── Drivers ───────────────────────────────────────────────────────

    async def list_drivers(self) -> list[DriverModel]:
        return await self._safe_list(self.drivers)

    async def create_driver(self, **fields: Any) -> DriverModel:
        return await self.drivers.create(
            is_active=True, rating=5.0, total_deliveries=0, **fields
        )

    async def update_driver(self, driver_id: str, **fields: Any) -> DriverModel:
        return await self.drivers.update(driver_id, **fields)

    async def delete_driver(self, driver_id: str) -> None:
        await self.drivers.delete(driver_id)

    # ── Orders ────────────────────────────────────────────────────────

    async def _new_delivery(
        self,
        prefix: str,
        customer: CustomerModel,
        product: ProductModel,
        latitude: Optional[float],
        longitude: Optional[float],
        **fields: Any,
    ) -> DeliveryModel:
        return await self.deliveries.create(
            external_id=_external_id(prefix),
            customer_id=customer.id,
            product_id=product.id,
            customer_name=customer.name,
            customer_phone=customer.phone,
            customer_address=customer.address,
            customer_city=customer.city,
            customer_country=customer.country,
            latitude=latitude if latitude is not None else (customer.latitude or 0.0),
            longitude=longitude if longitude is not None else (customer.longitude or 0.0),
            status=DeliveryStatus.PENDING.value,
            order_value=product.price,
            **fields,
        )

    async def create_order(
        self,
        customer_id: str,
        product_id: str,
        priority: Priority = Priority.MEDIUM,
        notes: Optional[str] = None,
        delivery_time: Optional[str] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> DeliveryModel:
        customer = await self.customers.get_or_raise(customer_id)
        product = await self.products.get_or_raise(product_id)
        return await self._new_delivery(
            "ORD",
            customer,
            product,
            latitude,
            longitude,
            priority=Priority(priority).value,
            notes=notes,
            delivery_time=delivery_time,
        )

    async def create_delivery_with_assignment(
        self,
        customer_id: str,
        driver_id: str,
        product_id: str,
        priority: Priority = Priority.MEDIUM,
        notes: Optional[str] = None,
        estimated_delivery_time: Optional[str] = None,
    ) -> DeliveryModel:
        customer = await self.customers.get_or_raise(customer_id)
        driver = await self.drivers.get_or_raise(driver_id)
        product = await self.products.get_or_raise(product_id)
        return await self._new_delivery(
            "DEL",
            customer,
            product,
            None,
            None,
            driver_id=driver.id,
            priority=Priority(priority).value,
            notes=notes,
            estimated_delivery_time=estimated_delivery_time,
        )

    async def update_order(
        self,
        order_id: str,
        status: DeliveryStatus,
        priority: Priority,
        notes: Optional[str] = None,
        delivery_time: Optional[str] = None,
        product_id: Optional[str] = None,
        driver_id: Optional[str] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> DeliveryModel:
        changes: dict[str, Any] = {
            "status": DeliveryStatus(status).value,
            "priority": Priority(priority).value,
            "notes": notes,
            "driver_id": driver_id,
        }
        if delivery_time is not None:
            changes["delivery_time"] = delivery_time
        if latitude is not None:
            changes["latitude"] = latitude
        if longitude is not None:
            changes["longitude"] = longitude
        if product_id:
            product = await self.products.get_or_raise(product_id)
            changes["product_id"] = product.id
            changes["order_value"] = product.price
        if driver_id:
            await self.drivers.get_or_raise(driver_id)

        return await self.deliveries.update(order_id, **changes)

    async def assign_driver_to_order(
        self,
        order_id: str,
        driver_id: str,
        priority: Priority,
        notes: Optional[str] = None,
    ) -> DeliveryModel:
        await self.deliveries.get_or_raise(order_id)
        await self.drivers.get_or_raise(driver_id)
        return await self.deliveries.update(
            order_id,
            driver_id=driver_id,
            priority=Priority(priority).value,
            notes=notes,
        )

    async def delete_order(self, order_id: str) -> None:
        await self.deliveries.delete(order_id)

    # ── Statistics & maintenance ──────────────────────────────────────

    async def get_stats(self) -> AdminStats:
        statuses = [normalize_status(s) for s in await self.deliveries.list_statuses()]
        return AdminStats(
            total_customers=await self.customers.count(),
            total_products=await self.products.count(),
            total_drivers=await self.drivers.count(),
            active_drivers=await self.drivers.count_active(),
            pending_deliveries=sum(1 for s in statuses if s in OPEN_STATUSES),
            completed_deliveries=sum(
                1 for s in statuses if s == DeliveryStatus.DELIVERED
            ),
        )

    async def fix_deliveries_schema(self) -> dict[str, Any]:
        """Back-fill deliveries that lost their customer or product link.

        A missing customer is matched by phone or name, else created from
        the delivery's contact snapshot.  A missing product falls back to a
        "default"/"general" product, created on first need.
        """
        deliveries = await self.deliveries.list_all()
        customers = await self.customers.list_all()
        products = await self.products.list_all()

        default_product = next(
            (
                p
                for p in products
                if "default" in p.title.lower() or "general" in p.title.lower()
            ),
            None,
        )

        fixed = 0
        for delivery in deliveries:
            changes: dict[str, Any] = {}

            if not delivery.customer_id:
                customer = next(
                    (
                        c
                        for c in customers
                        if c.phone == delivery.customer_phone
                        or c.name == delivery.customer_name
                    ),
                    None,
                )
                if customer is None:
                    customer = await self.customers.create(
                        name=delivery.customer_name,
                        phone=delivery.customer_phone,
                        address=delivery.customer_address,
                        city=delivery.customer_city,
                        country=delivery.customer_country,
                        total_orders=1,
                    )
                    customers.append(customer)
                changes["customer_id"] = customer.id

            if not delivery.product_id:
                if default_product is None:
                    default_product = await self.products.create(
                        title=DEFAULT_PRODUCT_TITLE,
                        price=delivery.order_value or 0.0,
                        description="Default product for legacy deliveries",
                        category="General",
                        in_stock=True,
                    )
                changes["product_id"] = default_product.id

            if changes:
                await self.deliveries.update(delivery.id, **changes)
                fixed += 1

        logger.info("Fixed %d of %d deliveries", fixed, len(deliveries))
        return {
            "success": True,
            "fixed_count": fixed,
            "total_deliveries": len(deliveries),
        }
