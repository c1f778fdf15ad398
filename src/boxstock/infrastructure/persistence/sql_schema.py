"""Table definitions for the SQL store.

Raw materials and finished goods share ``inventory_items`` (discriminated
by ``kind``) so a balance update is always one statement against one
table. ``stock_logs`` has no foreign key to the items: ledger rows outlive
deleted items.
"""

from __future__ import annotations

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Column,
    Date,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)

from boxstock.infrastructure.persistence.sql_types import (
    DecimalText,
    Grams,
    Paise,
    UTCDateTime,
)

metadata = MetaData()

inventory_items = Table(
    "inventory_items",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("kind", String(20), nullable=False, index=True),
    Column("name", String(200), nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("weight_g", Grams, nullable=False),
    Column("created_by", String(36)),
    Column("created_at", UTCDateTime, nullable=False),
    Column("date_added", Date, nullable=False),
    # raw materials
    Column("material_type", String(20)),
    Column("supplier_id", String(36)),
    Column("invoice_number", String(100)),
    Column("material_form", String(10)),
    Column("size_width_cm", DecimalText),
    Column("gsm", Integer),
    Column("bf", Integer),
    Column("rate_per_kg", Paise),
    # finished goods
    Column("customer_id", String(36)),
    Column("length_cm", DecimalText),
    Column("width_cm", DecimalText),
    Column("height_cm", DecimalText),
    Column("number_of_ply", Integer),
    Column("unit_weight_g", Grams),
    Column("rate_per_piece", Paise),
    CheckConstraint("quantity >= 0", name="ck_inventory_items_quantity_non_negative"),
    CheckConstraint("weight_g >= 0", name="ck_inventory_items_weight_non_negative"),
)

stock_logs = Table(
    "stock_logs",
    metadata,
    Column("sequence", Integer, primary_key=True, autoincrement=True),
    Column("id", String(36), nullable=False, unique=True),
    Column("item_id", String(36), index=True),
    Column("item_kind", String(20)),
    Column("activity_type", String(20), nullable=False, index=True),
    Column("quantity", BigInteger, nullable=False),
    Column("weight_g", Grams, nullable=False),
    Column("actor_id", String(36), nullable=False, index=True),
    Column("notes", Text),
    Column("timestamp", UTCDateTime, nullable=False, index=True),
    CheckConstraint("quantity >= 0", name="ck_stock_logs_quantity_non_negative"),
    CheckConstraint("weight_g >= 0", name="ck_stock_logs_weight_non_negative"),
)

wastage_sales = Table(
    "wastage_sales",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("sale_date", Date, nullable=False, index=True),
    Column("item_description", String(500), nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("weight_g", Grams, nullable=False),
    Column("sale_amount", Paise, nullable=False),
    Column("notes", Text),
    Column("actor_id", String(36), nullable=False, index=True),
    Column("created_at", UTCDateTime, nullable=False),
)
