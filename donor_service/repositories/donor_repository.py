# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Data-access layer for donors, donations, and their inventory entries."""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, func, insert, or_, select, text, update
from sqlalchemy.engine import Connection, Engine

from donor_service.repositories.tables import blood_inventory, donations, donors, metadata


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes; everything is stored as UTC.
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _donor_to_dict(row) -> Dict[str, Any]:
    return {
        "id": row.id,
        "name": row.name,
        "age": row.age,
        "blood_type": row.blood_type,
        "contact": row.contact,
        "email": row.email,
        "last_donated": _as_utc(row.last_donated),
        "created_at": _as_utc(row.created_at),
        "updated_at": _as_utc(row.updated_at),
    }


def _inventory_to_dict(row) -> Dict[str, Any]:
    return {
        "id": row.id,
        "blood_type": row.blood_type,
        "units": row.units,
        "expiry_date": _as_utc(row.expiry_date),
    }


def _donation_to_dict(row, inventory: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "id": row.id,
        "donor_id": row.donor_id,
        "donation_date": _as_utc(row.donation_date),
        "quantity": row.quantity,
        "inventory": inventory,
        "created_at": _as_utc(row.created_at),
    }


class DonorRepository:
    def __init__(self, engine: Engine):
        self._engine = engine

    def create_schema(self):
        metadata.create_all(self._engine)

    # ── Write ──────────────────────────────────────────────────────────

    def create_donor(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        now = datetime.now(timezone.utc)
        values = dict(fields)
        values["last_donated"] = _as_utc(values.get("last_donated"))
        with self._engine.begin() as conn:
            result = conn.execute(
                insert(donors).values(**values, created_at=now, updated_at=now)
            )
            donor_id = result.inserted_primary_key[0]
            row = conn.execute(select(donors).where(donors.c.id == donor_id)).fetchone()
        return _donor_to_dict(row)

    def update_donor(self, donor_id: int, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        values = dict(fields)
        if "last_donated" in values:
            values["last_donated"] = _as_utc(values["last_donated"])
        values["updated_at"] = datetime.now(timezone.utc)
        with self._engine.begin() as conn:
            result = conn.execute(
                update(donors).where(donors.c.id == donor_id).values(**values)
            )
            if result.rowcount == 0:
                return None
            row = conn.execute(select(donors).where(donors.c.id == donor_id)).fetchone()
        return _donor_to_dict(row)

    def delete_donor(self, donor_id: int) -> Optional[int]:
        """Delete a donor with its donations and inventory entries in one transaction.

        Returns the number of donations removed, or None if the donor does not exist.
        """
        owned = select(donations.c.id).where(donations.c.donor_id == donor_id)
        with self._engine.begin() as conn:
            conn.execute(
                delete(blood_inventory).where(blood_inventory.c.donation_id.in_(owned))
            )
            removed = conn.execute(
                delete(donations).where(donations.c.donor_id == donor_id)
            ).rowcount
            result = conn.execute(delete(donors).where(donors.c.id == donor_id))
            if result.rowcount == 0:
                return None
        return removed

    def create_donation(self, donor_id: int, donation_date: datetime, quantity: int,
                        inventory: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        """Insert a donation and its inventory entries, advancing the donor's last_donated.

        Returns None if the donor does not exist.
        """
        now = datetime.now(timezone.utc)
        donation_date = _as_utc(donation_date)
        with self._engine.begin() as conn:
            donor = conn.execute(
                select(donors.c.last_donated).where(donors.c.id == donor_id)
            ).fetchone()
            if donor is None:
                return None
            result = conn.execute(
                insert(donations).values(
                    donor_id=donor_id, donation_date=donation_date, quantity=quantity,
                    created_at=now, updated_at=now,
                )
            )
            donation_id = result.inserted_primary_key[0]
            for entry in inventory:
                conn.execute(
                    insert(blood_inventory).values(
                        donation_id=donation_id, blood_type=entry["blood_type"],
                        units=entry["units"], expiry_date=_as_utc(entry["expiry_date"]),
                        created_at=now,
                    )
                )
            last = _as_utc(donor.last_donated)
            if last is None or donation_date > last:
                conn.execute(
                    update(donors).where(donors.c.id == donor_id)
                    .values(last_donated=donation_date, updated_at=now)
                )
            return self._fetch_donation(conn, donation_id)

    # ── Read ───────────────────────────────────────────────────────────

    def get_donor(self, donor_id: int) -> Optional[Dict[str, Any]]:
        with self._engine.connect() as conn:
            row = conn.execute(select(donors).where(donors.c.id == donor_id)).fetchone()
        return _donor_to_dict(row) if row else None

    def list_donors(self, search: Optional[str] = None) -> List[Dict[str, Any]]:
        query = select(donors)
        term = (search or "").strip()
        if term:
            # autoescape: % and _ in the term match literally
            query = query.where(or_(
                donors.c.name.icontains(term, autoescape=True),
                donors.c.blood_type.icontains(term, autoescape=True),
                donors.c.contact.icontains(term, autoescape=True),
            ))
        query = query.order_by(donors.c.created_at.desc(), donors.c.id.desc())
        with self._engine.connect() as conn:
            rows = conn.execute(query).fetchall()
        return [_donor_to_dict(r) for r in rows]

    def list_donations_for_donor(self, donor_id: int) -> List[Dict[str, Any]]:
        with self._engine.connect() as conn:
            rows = conn.execute(
                select(donations).where(donations.c.donor_id == donor_id)
                .order_by(donations.c.donation_date.desc(), donations.c.id.desc())
            ).fetchall()
            entries = self._fetch_inventory(conn, [r.id for r in rows])
        return [_donation_to_dict(r, entries.get(r.id, [])) for r in rows]

    def get_donation(self, donation_id: int) -> Optional[Dict[str, Any]]:
        with self._engine.connect() as conn:
            return self._fetch_donation(conn, donation_id)

    def count_donors(self) -> int:
        with self._engine.connect() as conn:
            return conn.execute(select(func.count()).select_from(donors)).scalar() or 0

    def verify_connection(self):
        with self._engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def dispose(self):
        self._engine.dispose()

    # ── Private ────────────────────────────────────────────────────────

    def _fetch_donation(self, conn: Connection, donation_id: int) -> Optional[Dict[str, Any]]:
        row = conn.execute(select(donations).where(donations.c.id == donation_id)).fetchone()
        if row is None:
            return None
        entries = self._fetch_inventory(conn, [row.id])
        return _donation_to_dict(row, entries.get(row.id, []))

    def _fetch_inventory(self, conn: Connection,
                         donation_ids: List[int]) -> Dict[int, List[Dict[str, Any]]]:
        if not donation_ids:
            return {}
        rows = conn.execute(
            select(blood_inventory)
            .where(blood_inventory.c.donation_id.in_(donation_ids))
            .order_by(blood_inventory.c.id)
        ).fetchall()
        grouped: Dict[int, List[Dict[str, Any]]] = {}
        for r in rows:
            grouped.setdefault(r.donation_id, []).append(_inventory_to_dict(r))
        return grouped
