"""Shared building blocks for capacity decisions and record numbering.

Capacity is never stored as a counter. Each module derives the committed
demand on a subject from its active bookings at decision time, after the
subject row has been locked with ``lock_row`` inside the write transaction.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, datetime, time as dt_time, timezone
import logging
import time
from typing import Iterator

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from ..core.constants import INVOICE_PREFIX, SALE_PREFIX
from ..db import models

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Admission:
    capacity: int
    committed: int
    requested: int

    @property
    def remaining(self) -> int:
        return max(self.capacity - self.committed, 0)

    @property
    def admitted(self) -> bool:
        return self.committed + self.requested <= self.capacity


def admit(capacity: int, committed: int, requested: int) -> Admission:
    return Admission(capacity=int(capacity or 0), committed=int(committed or 0), requested=int(requested))


def windows_overlap(start_a, end_a, start_b, end_b) -> bool:
    """Half-open intersection test: touching windows do not overlap."""
    return start_a < end_b and end_a > start_b


def parse_hhmm(value: str) -> dt_time:
    hours, minutes = value.split(":")
    return dt_time(int(hours), int(minutes))


def combine(day: date, hhmm: str) -> datetime:
    return datetime.combine(day, parse_hhmm(hhmm))


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    """Commit on success, roll back everything on any error."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


def lock_row(db: Session, model, *criteria):
    return db.execute(select(model).where(*criteria).with_for_update()).scalar_one_or_none()


def _insert_missing_sequence(db: Session, name: str) -> None:
    """Create the counter row, leaving it alone when another writer got there first."""
    if db.get_bind().dialect.name == "postgresql":
        insert = postgresql_insert
    else:
        insert = sqlite_insert
    db.execute(
        insert(models.Sequence)
        .values(name=name, value=0)
        .on_conflict_do_nothing(index_elements=[models.Sequence.name])
    )


def next_sequence_value(db: Session, name: str) -> int:
    sequence = lock_row(db, models.Sequence, models.Sequence.name == name)
    if sequence is None:
        _insert_missing_sequence(db, name)
        sequence = lock_row(db, models.Sequence, models.Sequence.name == name)
    sequence.value = (sequence.value or 0) + 1
    db.flush()
    return sequence.value


def booking_number(db: Session, prefix: str) -> str:
    seq = next_sequence_value(db, f"booking-{prefix}")
    epoch_tail = str(int(time.time()))[-6:]
    return f"{prefix}-{epoch_tail}-{seq:04d}"


def sale_number(db: Session, day: date) -> str:
    stamp = day.strftime("%y%m%d")
    seq = next_sequence_value(db, f"sale-{stamp}")
    return f"{SALE_PREFIX}-{stamp}-{seq:04d}"


def invoice_number(db: Session, year: int) -> str:
    seq = next_sequence_value(db, f"invoice-{year}")
    return f"{INVOICE_PREFIX}-{year}-{seq:04d}"


def record_audit(db: Session, actor_id: int | None, action: str, payload: dict | None = None) -> None:
    db.add(
        models.AuditLog(
            actor_type=models.ActorType.user if actor_id else models.ActorType.system,
            actor_id=actor_id,
            action=action,
            payload=payload,
        )
    )


def log_rejection(subject: str, admission: Admission) -> None:
    logger.info(
        "Capacity check rejected",
        extra={
            "subject": subject,
            "remaining": admission.remaining,
            "requested": admission.requested,
        },
    )


__all__ = [
    "Admission",
    "admit",
    "windows_overlap",
    "parse_hhmm",
    "combine",
    "utc_now",
    "atomic",
    "lock_row",
    "next_sequence_value",
    "booking_number",
    "sale_number",
    "invoice_number",
    "record_audit",
    "log_rejection",
]
