# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Employee data access — pure CRUD, no business rules.

The unique index on ``employees.name`` is the final word on duplicates;
``insert_many`` turns a violation of it into ``DuplicateNameError``.
"""

import threading
from datetime import datetime, timezone
from typing import Optional, Sequence

from sqlalchemy import func, insert, select, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from contact_directory.core.database import employees
from contact_directory.core.logging import get_logger
from contact_directory.models.domain import NormalizedRecord, StoredEmployee

logger = get_logger(__name__)

EMPLOYEE_COLS = (
    employees.c.id,
    employees.c.name,
    employees.c.email,
    employees.c.phone,
    employees.c.joined_date,
    employees.c.created_at,
)


class DuplicateNameError(Exception):
    """Names that already exist in the store."""

    def __init__(self, names: Sequence[str]):
        self.names = list(names)
        super().__init__(f"Duplicate employee names: {', '.join(self.names)}")


class IntakeCancelled(Exception):
    """The caller cancelled before the store committed anything."""


def _check_cancelled(cancel_event: Optional[threading.Event]) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise IntakeCancelled("Employee intake cancelled")


def _row_to_employee(row) -> StoredEmployee:
    created_at = row.created_at
    if created_at is not None and created_at.tzinfo is None:
        # SQLite drops the offset; values are always written in UTC
        created_at = created_at.replace(tzinfo=timezone.utc)
    return StoredEmployee(
        id=row.id,
        name=row.name,
        email=row.email,
        phone=row.phone,
        joined=row.joined_date,
        created_at=created_at,
    )


class EmployeeRepository:
    """Handles all direct database operations for employees."""

    def __init__(self, engine: Engine):
        self._engine = engine

    # ── Write ──────────────────────────────────────────────────────────

    def insert_many(self, records: Sequence[NormalizedRecord],
                    cancel_event: Optional[threading.Event] = None) -> list[StoredEmployee]:
        """Insert every record in one transaction, or none of them."""
        if not records:
            return []
        _check_cancelled(cancel_event)
        now = datetime.now(timezone.utc)
        names = [r.name for r in records]
        try:
            with self._engine.begin() as conn:
                conn.execute(
                    insert(employees),
                    [
                        {"name": r.name, "email": r.email, "phone": r.phone,
                         "joined_date": r.joined, "created_at": now}
                        for r in records
                    ],
                )
                # raising inside the block rolls the transaction back
                _check_cancelled(cancel_event)
                rows = conn.execute(
                    select(*EMPLOYEE_COLS).where(employees.c.name.in_(names))
                ).fetchall()
        except IntegrityError as exc:
            existing = self.find_existing_names(names)
            logger.warning("Unique name constraint rejected batch: %s", ", ".join(existing) or exc)
            raise DuplicateNameError(existing or names) from exc

        by_name = {row.name: _row_to_employee(row) for row in rows}
        return [by_name[name] for name in names]

    # ── Read ───────────────────────────────────────────────────────────

    def find_existing_names(self, names: Sequence[str],
                            cancel_event: Optional[threading.Event] = None) -> list[str]:
        """Return the subset of ``names`` already stored, in the order given."""
        if not names:
            return []
        _check_cancelled(cancel_event)
        with self._engine.connect() as conn:
            rows = conn.execute(
                select(employees.c.name).where(employees.c.name.in_(list(set(names))))
            ).fetchall()
        found = {row.name for row in rows}
        seen: set[str] = set()
        ordered: list[str] = []
        for name in names:
            if name in found and name not in seen:
                seen.add(name)
                ordered.append(name)
        return ordered

    def get_by_name(self, name: str) -> Optional[StoredEmployee]:
        with self._engine.connect() as conn:
            row = conn.execute(
                select(*EMPLOYEE_COLS).where(employees.c.name == name)
            ).fetchone()
        return _row_to_employee(row) if row else None

    def list_slice(self, offset: int, limit: int) -> list[StoredEmployee]:
        """One name-ordered slice."""
        with self._engine.connect() as conn:
            rows = conn.execute(
                select(*EMPLOYEE_COLS)
                .order_by(employees.c.name.asc())
                .offset(offset)
                .limit(limit)
            ).fetchall()
        return [_row_to_employee(r) for r in rows]

    def count(self) -> int:
        with self._engine.connect() as conn:
            return conn.execute(select(func.count()).select_from(employees)).scalar() or 0

    def verify_connection(self):
        with self._engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def clear(self):
        with self._engine.begin() as conn:
            conn.execute(employees.delete())

    def dispose(self):
        self._engine.dispose()
