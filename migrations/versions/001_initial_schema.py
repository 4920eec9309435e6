"""Initial schema: customers, products, drivers, deliveries.

Revision ID: 001
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    ]


def upgrade() -> None:
    # ── customers ─────────────────────────────────────────────────────
    op.create_table(
        "customers",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("phone", sa.String(40), nullable=False),
        sa.Column("address", sa.String(500), nullable=False),
        sa.Column("city", sa.String(120), nullable=True),
        sa.Column("country", sa.String(120), nullable=True),
        sa.Column("latitude", sa.Float, nullable=True),
        sa.Column("longitude", sa.Float, nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("total_orders", sa.Integer, default=0, nullable=False),
        *_timestamps(),
    )
    op.create_index("idx_customers_phone", "customers", ["phone"])

    # ── products ──────────────────────────────────────────────────────
    op.create_table(
        "products",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("price", sa.Float, nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("category", sa.String(120), nullable=True),
        sa.Column("in_stock", sa.Boolean, default=True, nullable=False),
        sa.Column("image_url", sa.String(500), nullable=True),
        *_timestamps(),
    )
    op.create_index("idx_products_category", "products", ["category"])

    # ── drivers ───────────────────────────────────────────────────────
    op.create_table(
        "drivers",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("phone", sa.String(40), nullable=False),
        sa.Column(
            "vehicle_type",
            sa.Enum("CAR", "BIKE", "SCOOTER", "VAN", name="vehicletype"),
            default="CAR",
            nullable=False,
        ),
        sa.Column("license_number", sa.String(60), nullable=True),
        sa.Column("area_coverage", sa.String(200), nullable=True),
        sa.Column("is_active", sa.Boolean, default=True, nullable=False),
        sa.Column("current_latitude", sa.Float, nullable=True),
        sa.Column("current_longitude", sa.Float, nullable=True),
        sa.Column("rating", sa.Float, default=5.0),
        sa.Column("total_deliveries", sa.Integer, default=0, nullable=False),
        *_timestamps(),
    )
    op.create_index("idx_drivers_vehicle_type", "drivers", ["vehicle_type"])
    op.create_index("idx_drivers_active", "drivers", ["is_active"])

    # ── deliveries ────────────────────────────────────────────────────
    op.create_table(
        "deliveries",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column("external_id", sa.String(64), nullable=True),
        sa.Column(
            "customer_id",
            sa.String(32),
            sa.ForeignKey("customers.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "driver_id",
            sa.String(32),
            sa.ForeignKey("drivers.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "product_id",
            sa.String(32),
            sa.ForeignKey("products.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("customer_name", sa.String(200), nullable=False),
        sa.Column("customer_phone", sa.String(40), nullable=False),
        sa.Column("customer_address", sa.String(500), nullable=False),
        sa.Column("customer_city", sa.String(120), nullable=True),
        sa.Column("customer_country", sa.String(120), nullable=True),
        sa.Column("latitude", sa.Float, nullable=False, server_default="0"),
        sa.Column("longitude", sa.Float, nullable=False, server_default="0"),
        # Free text on purpose: legacy rows hold non-canonical spellings
        sa.Column("status", sa.String(32), nullable=False, server_default="Pending"),
        sa.Column("priority", sa.String(16), nullable=False, server_default="medium"),
        sa.Column("delivery_time", sa.String(32), nullable=True),
        sa.Column("estimated_delivery_time", sa.String(64), nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("order_value", sa.Float, nullable=True),
        *_timestamps(),
    )
    op.create_index("idx_deliveries_status", "deliveries", ["status"])
    op.create_index("idx_deliveries_customer", "deliveries", ["customer_id"])
    op.create_index("idx_deliveries_driver", "deliveries", ["driver_id"])
    op.create_index("idx_deliveries_product", "deliveries", ["product_id"])


def downgrade() -> None:
    op.drop_table("deliveries")
    op.drop_table("drivers")
    op.drop_table("products")
    op.drop_table("customers")
    op.execute("DROP TYPE IF EXISTS vehicletype")
