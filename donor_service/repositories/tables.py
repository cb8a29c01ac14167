# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Table definitions for donors, donations, and blood inventory."""
from sqlalchemy import (
    CheckConstraint, Column, DateTime, ForeignKey, Integer, MetaData, String, Table,
)

metadata = MetaData()

donors = Table(
    "donors", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("age", Integer, nullable=False),
    Column("blood_type", String(3), nullable=False),
    Column("contact", String(50), nullable=False),
    Column("email", String(255)),
    Column("last_donated", DateTime(timezone=True)),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    CheckConstraint("age BETWEEN 18 AND 65", name="ck_donors_age"),
)

donations = Table(
    "donations", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("donor_id", Integer, ForeignKey("donors.id", ondelete="CASCADE"),
           nullable=False, index=True),
    Column("donation_date", DateTime(timezone=True), nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    CheckConstraint("quantity > 0", name="ck_donations_quantity"),
)

blood_inventory = Table(
    "blood_inventory", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("donation_id", Integer, ForeignKey("donations.id", ondelete="CASCADE"),
           nullable=False, index=True),
    Column("blood_type", String(3), nullable=False),
    Column("units", Integer, nullable=False),
    Column("expiry_date", DateTime(timezone=True), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    CheckConstraint("units > 0", name="ck_blood_inventory_units"),
)
