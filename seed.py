"""
Seed script -- populates the database with sample data for reviewers.

Run after migrations:
    python seed.py

Creates:
  - 4 sample customers (one without a known location)
  - 3 sample products
  - 3 sample drivers
  - 6 sample deliveries, two of them carrying legacy status spellings
"""

import asyncio

from sqlalchemy import text

from src.infrastructure.database import async_session_factory, engine
from src.infrastructure.models import (
    CustomerModel,
    DeliveryModel,
    DriverModel,
    ProductModel,
)
from src.domain.enums import DeliveryStatus, Priority, VehicleType


CUSTOMERS = [
    {"name": "John Smith", "phone": "+1234567890", "address": "123 Main St, Downtown",
     "city": "New York", "country": "USA", "latitude": 40.7128, "longitude": -74.0060,
     "email": "john@example.com", "total_orders": 5},
    {"name": "Sarah Johnson", "phone": "+1234567891", "address": "456 Oak Ave, Uptown",
     "city": "New York", "country": "USA", "latitude": 40.7831, "longitude": -73.9712,
     "email": "sarah@example.com", "total_orders": 3},
    {"name": "Mike Chen", "phone": "+1234567892", "address": "789 Pine Rd, Brooklyn",
     "city": "New York", "country": "USA", "latitude": 40.6782, "longitude": -73.9442,
     "email": "mike@example.com", "total_orders": 2},
    # No geocode yet -- shows up as "Location unknown" in the driver feed
    {"name": "Emma Davis", "phone": "+1234567893", "address": "12 Harbor Ln",
     "city": "Jersey City", "country": "USA", "latitude": None, "longitude": None,
     "email": "emma@example.com", "total_orders": 1},
]

PRODUCTS = [
    {"title": "Premium Headphones", "price": 129.99, "category": "Electronics",
     "description": "Wireless headphones with noise cancellation", "in_stock": True},
    {"title": "Coffee Beans - Premium Blend", "price": 24.50, "category": "Food & Beverage",
     "description": "Organic coffee beans from South America", "in_stock": True},
    {"title": "Fitness Tracker", "price": 89.99, "category": "Electronics",
     "description": "Smart fitness tracker with heart rate monitor", "in_stock": False},
]

DRIVERS = [
    {"name": "Alex Rodriguez", "phone": "+1555123456", "vehicle_type": VehicleType.CAR,
     "license_number": "DL123456", "area_coverage": "Manhattan",
     "current_latitude": 40.7589, "current_longitude": -73.9851, "rating": 4.8},
    {"name": "Maria Garcia", "phone": "+1555123457", "vehicle_type": VehicleType.BIKE,
     "license_number": "DL234567", "area_coverage": "Brooklyn",
     "current_latitude": 40.6892, "current_longitude": -73.9442, "rating": 4.9},
    {"name": "David Kim", "phone": "+1555123458", "vehicle_type": VehicleType.VAN,
     "license_number": "DL345678", "area_coverage": "New Jersey", "rating": 4.6,
     "is_active": False},
]

# (customer index, product index, driver index, status, priority)
DELIVERIES = [
    (0, 0, 0, DeliveryStatus.PENDING.value, Priority.HIGH),
    (1, 1, 0, DeliveryStatus.ON_WAY.value, Priority.MEDIUM),
    (2, 2, 1, DeliveryStatus.DELIVERED.value, Priority.LOW),
    (3, 1, 0, DeliveryStatus.PENDING.value, Priority.URGENT),
    # Legacy spellings from the first import
    (2, 0, 1, "in_progress", Priority.MEDIUM),
    (1, 2, 0, "completed", Priority.LOW),
]


async def seed():
    async with async_session_factory() as session:
        # Check if already seeded
        result = await session.execute(text("SELECT count(*) FROM customers"))
        if result.scalar() > 0:
            print("Database already seeded. Skipping.")
            return

        # ── Customers ─────────────────────────────────────────────────
        customers = [CustomerModel(**c) for c in CUSTOMERS]
        session.add_all(customers)
        await session.flush()
        print(f"  Created {len(customers)} customers")

        # ── Products ──────────────────────────────────────────────────
        products = [ProductModel(**p) for p in PRODUCTS]
        session.add_all(products)
        await session.flush()
        print(f"  Created {len(products)} products")

        # ── Drivers ───────────────────────────────────────────────────
        drivers = [DriverModel(**d) for d in DRIVERS]
        session.add_all(drivers)
        await session.flush()
        print(f"  Created {len(drivers)} drivers")

        # ── Deliveries ────────────────────────────────────────────────
        for n, (ci, pi, di, status, priority) in enumerate(DELIVERIES, start=1):
            customer, product = customers[ci], products[pi]
            session.add(
                DeliveryModel(
                    external_id=f"ORD-SEED-{n:03d}",
                    customer_id=customer.id,
                    driver_id=drivers[di].id,
                    product_id=product.id,
                    customer_name=customer.name,
                    customer_phone=customer.phone,
                    customer_address=customer.address,
                    customer_city=customer.city,
                    customer_country=customer.country,
                    latitude=customer.latitude or 0.0,
                    longitude=customer.longitude or 0.0,
                    status=status,
                    priority=priority.value,
                    delivery_time="today",
                    order_value=product.price,
                )
            )
        await session.flush()
        print(f"  Created {len(DELIVERIES)} deliveries")

        await session.commit()
        print("\nSeed complete!")


async def main():
    print("Seeding database...")
    await seed()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
