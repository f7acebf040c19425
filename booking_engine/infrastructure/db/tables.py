from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()

units = Table(
    "units",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("base_price_per_night", Numeric(12, 2), nullable=False),
    Column("cleaning_fee", Numeric(12, 2), nullable=False, default=0),
    Column("max_occupancy", Integer, nullable=False),
    Column("is_active", Boolean, nullable=False, default=True),
)

customers = Table(
    "customers",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("full_name", String(255), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("phone", String(50)),
    Column("created_at", DateTime, nullable=False),
    Column("updated_at", DateTime, nullable=False),
)

reservations = Table(
    "reservations",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("reservation_number", String(32), nullable=False, unique=True),
    Column("unit_id", Integer, ForeignKey("units.id"), nullable=False),
    Column("customer_id", Integer, ForeignKey("customers.id"), nullable=False),
    Column("check_in", Date, nullable=False),
    Column("check_out", Date, nullable=False),
    Column("guest_count", Integer, nullable=False),
    Column("base_amount", Numeric(12, 2), nullable=False),
    Column("cleaning_fee", Numeric(12, 2), nullable=False),
    Column("tax_amount", Numeric(12, 2), nullable=False),
    Column("discount_amount", Numeric(12, 2), nullable=False),
    Column("total_amount", Numeric(12, 2), nullable=False),
    Column("amount_paid", Numeric(12, 2), nullable=False),
    Column("refund_amount", Numeric(12, 2), nullable=False, default=0),
    Column("status", String(32), nullable=False),
    Column("payment_status", String(32), nullable=False),
    Column("approval_status", String(32), nullable=False),
    Column("payment_option", String(16), nullable=False),
    Column("notes", Text),
    Column("created_at", DateTime, nullable=False),
    Column("cancelled_at", DateTime),
    Column("cancellation_reason", String(500)),
    Column("lock_version", Integer, nullable=False, default=0),
)

# Una fila por noche ocupada de cada reservación activa. La restricción
# UNIQUE(unit_id, night) impide en el almacén que dos reservaciones se traslapen.
reservation_nights = Table(
    "reservation_nights",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("reservation_id", Integer, ForeignKey("reservations.id"), nullable=False),
    Column("unit_id", Integer, nullable=False),
    Column("night", Date, nullable=False),
    UniqueConstraint("unit_id", "night", name="uq_reservation_nights_unit_night"),
)

audit_logs = Table(
    "audit_logs",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("action", String(100), nullable=False),
    Column("actor_id", String(64)),
    Column("actor_email", String(255)),
    Column("details", Text),
    Column("created_at", DateTime, nullable=False),
)
