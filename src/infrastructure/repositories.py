"""
Repository Pattern -- abstracts DB access so domain logic stays DB-agnostic.

Each repository receives an ``AsyncSession`` (unit-of-work) and exposes
create / read / update / delete for one table.  ``DeliveryRepository``
additionally produces the *raw* delivery rows the record normaliser
consumes, with driver / product / customer snapshots joined in.
"""

from __future__ import annotations

from typing import Any, ClassVar, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import (
    CustomerModel,
    DeliveryModel,
    DriverModel,
    ProductModel,
    utcnow,
)


class RecordNotFound(LookupError):
    """Raised when an id does not resolve to a stored record."""

    def __init__(self, kind: str, record_id: str):
        super().__init__(f"{kind} {record_id} not found")
        self.kind = kind
        self.record_id = record_id


def as_dict(model: Any) -> dict[str, Any]:
    """Column values of an ORM instance as a plain dict."""
    return {c.name: getattr(model, c.name) for c in model.__table__.columns}


class _Repository:
    model: ClassVar[type]
    kind: ClassVar[str]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_all(self) -> list:
        result = await self.session.execute(
            select(self.model).order_by(self.model.created_at)
        )
        return list(result.scalars().all())

    async def get_by_id(self, record_id: str) -> Optional[Any]:
        return await self.session.get(self.model, record_id)

    async def get_or_raise(self, record_id: str) -> Any:
        record = await self.get_by_id(record_id)
        if record is None:
            raise RecordNotFound(self.kind, record_id)
        return record

    async def get_many(self, ids: set[str]) -> dict[str, Any]:
        if not ids:
            return {}
        result = await self.session.execute(
            select(self.model).where(self.model.id.in_(ids))
        )
        return {r.id: r for r in result.scalars().all()}

    async def create(self, **fields: Any) -> Any:
        record = self.model(**fields)
        self.session.add(record)
        await self.session.flush()
        return record

    async def update(self, record_id: str, **fields: Any) -> Any:
        record = await self.get_or_raise(record_id)
        for key, value in fields.items():
            setattr(record, key, value)
        record.updated_at = utcnow()
        await self.session.flush()
        return record

    async def delete(self, record_id: str) -> None:
        record = await self.get_or_raise(record_id)
        await self.session.delete(record)
        await self.session.flush()

    async def count(self) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(self.model)
        )
        return result.scalar() or 0


class CustomerRepository(_Repository):
    model = CustomerModel
    kind = "Customer"


class ProductRepository(_Repository):
    model = ProductModel
    kind = "Product"


class DriverRepository(_Repository):
    model = DriverModel
    kind = "Driver"

    async def count_active(self) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(DriverModel)
            .where(DriverModel.is_active.is_(True))
        )
        return result.scalar() or 0


class DeliveryRepository(_Repository):
    model = DeliveryModel
    kind = "Delivery"

    async def list_statuses(self) -> list[Optional[str]]:
        result = await self.session.execute(select(DeliveryModel.status))
        return list(result.scalars().all())

    async def list_raw(self) -> list[dict[str, Any]]:
        """Every delivery as a raw dict with linked-record snapshots.

        Three batched look-ups, one per referenced table, instead of one
        query per row.
        """
        deliveries = await self.list_all()

        drivers = await DriverRepository(self.session).get_many(
            {d.driver_id for d in deliveries if d.driver_id}
        )
        products = await ProductRepository(self.session).get_many(
            {d.product_id for d in deliveries if d.product_id}
        )
        customers = await CustomerRepository(self.session).get_many(
            {d.customer_id for d in deliveries if d.customer_id}
        )

        rows = []
        for d in deliveries:
            row = as_dict(d)
            driver = drivers.get(d.driver_id)
            product = products.get(d.product_id)
            customer = customers.get(d.customer_id)
            row["driver"] = (
                {"id": driver.id, "name": driver.name, "raw": as_dict(driver)}
                if driver
                else None
            )
            row["product"] = (
                {
                    "id": product.id,
                    "title": product.title,
                    "name": product.title,
                    "raw": as_dict(product),
                }
                if product
                else None
            )
            row["customer_record"] = (
                {"id": customer.id, "name": customer.name, "raw": as_dict(customer)}
                if customer
                else None
            )
            rows.append(row)
        return rows
