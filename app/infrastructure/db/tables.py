from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    UniqueConstraint,
)

metadata = MetaData()

vehicles = Table(
    "vehicles",
    metadata,
    Column("id", String(50), primary_key=True),
    Column("name", String(150), nullable=False),
    Column("type", String(50), nullable=False, default=""),
    Column("category", String(20), nullable=False),
    Column("price_per_day", Numeric(10, 2), nullable=False),
    Column("available", Boolean, nullable=False, default=True),
    Column("location", String(150), nullable=False, default=""),
    Column("seats", Integer, nullable=False, default=5),
    Column("created_at", DateTime(timezone=True)),
    Column("updated_at", DateTime(timezone=True)),
)

reservations = Table(
    "reservations",
    metadata,
    Column("id", String(50), primary_key=True),
    Column("user_id", String(50), nullable=False, index=True),
    Column("vehicle_id", String(50), ForeignKey("vehicles.id"), nullable=False),
    Column("start_date", Date, nullable=False),
    Column("end_date", Date, nullable=False),
    Column("start_time", String(5), nullable=False),
    Column("end_time", String(5), nullable=False),
    Column("pickup_location", String(150), nullable=False),
    Column("return_location", String(150), nullable=False),
    Column("status", String(16), nullable=False),
    Column("tariff", String(16), nullable=False),
    Column("total_price", Numeric(12, 2), nullable=False),
    Column("created_at", DateTime(timezone=True)),
    Column("updated_at", DateTime(timezone=True)),
    Index("ix_reservations_vehicle_status", "vehicle_id", "status"),
)

# One row per calendar day held by an active reservation. The unique
# constraint is the storage backstop against double-booking a vehicle.
reservation_days = Table(
    "reservation_days",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("vehicle_id", String(50), ForeignKey("vehicles.id"), nullable=False),
    Column("day", Date, nullable=False),
    Column("reservation_id", String(50), ForeignKey("reservations.id"), nullable=False, index=True),
    UniqueConstraint("vehicle_id", "day", name="uq_reservation_days_vehicle_day"),
)

payments = Table(
    "payments",
    metadata,
    Column("id", String(50), primary_key=True),
    Column("reservation_id", String(50), ForeignKey("reservations.id"), nullable=False, unique=True),
    Column("user_id", String(50), nullable=False),
    Column("amount", Numeric(12, 2), nullable=False),
    Column("currency", String(3), nullable=False),
    Column("payment_method", String(20), nullable=False),
    Column("status", String(16), nullable=False),
    Column("transaction_id", String(64)),
    Column("created_at", DateTime(timezone=True)),
    Column("updated_at", DateTime(timezone=True)),
)

idempotency_keys = Table(
    "idempotency_keys",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("scope", String(32), nullable=False),
    Column("idem_key", String(128), nullable=False),
    Column("request_hash", String(64), nullable=False),
    Column("response_json", JSON),
    Column("http_status", Integer),
    Column("reference_reservation_id", String(50)),
    UniqueConstraint("scope", "idem_key", name="uq_idempotency_scope_key"),
)
