from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel

from seat_layout.seat_types import SeatTypeKey


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SeatStatus(str, Enum):
    available = "available"
    booked = "booked"
    blocked = "blocked"


class Screen(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    theater_id: int = Field(index=True)

    # Sellable and accessible seat counts at the time the layout was saved.
    capacity: int = 0
    accessible_capacity: int = 0

    # JSON layout blob, see seat_layout.payload.to_payload for shape.
    seat_layout_json: str = "{}"
    is_active: bool = True

    created_at: datetime = Field(default_factory=_utc_now)
    updated_at: datetime = Field(default_factory=_utc_now)


class Seat(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    screen_id: int = Field(index=True, foreign_key="screen.id")
    seat_number: str
    row: str
    column: int
    seat_type: SeatTypeKey = SeatTypeKey.normal
    status: SeatStatus = SeatStatus.available
    price: float = 0.0
    is_accessible: bool = False

    created_at: datetime = Field(default_factory=_utc_now)
