from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class SeatTypeKey(str, Enum):
    normal = "normal"
    premium = "premium"
    disabled_access = "disabled_access"
    couple = "couple"
    recliner = "recliner"
    walkway = "walkway"
    empty = "empty"

    @classmethod
    def parse(cls, value: object) -> Optional["SeatTypeKey"]:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            return None


NON_SEAT_TYPES = frozenset({SeatTypeKey.walkway, SeatTypeKey.empty})
ACCESSIBLE_TYPE = SeatTypeKey.disabled_access
DEFAULT_TYPE = SeatTypeKey.normal


@dataclass(frozen=True)
class SeatType:
    key: SeatTypeKey
    name: str
    price: float
    available: bool
    is_accessible: bool = False
    # Presentation-only, passed through to clients.
    color: str = ""
    icon: str = ""
    description: str = ""

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "color": self.color,
            "price": self.price,
            "available": self.available,
            "is_accessible": self.is_accessible,
            "icon": self.icon,
            "description": self.description,
        }


SEAT_TYPES: dict[SeatTypeKey, SeatType] = {
    SeatTypeKey.normal: SeatType(
        SeatTypeKey.normal, "Normal", 100, True, False, "#10B981", "🪑", "Standard seating"
    ),
    SeatTypeKey.premium: SeatType(
        SeatTypeKey.premium, "Premium", 200, True, False, "#F59E0B", "✨", "Premium comfortable seats"
    ),
    SeatTypeKey.disabled_access: SeatType(
        SeatTypeKey.disabled_access, "Wheelchair Access", 100, True, True, "#3B82F6", "♿", "Wheelchair accessible seats"
    ),
    SeatTypeKey.couple: SeatType(
        SeatTypeKey.couple, "Couple Seat", 300, True, False, "#EC4899", "💕", "Couple seating with shared armrest"
    ),
    SeatTypeKey.recliner: SeatType(
        SeatTypeKey.recliner, "Recliner", 250, True, False, "#8B5CF6", "🛋️", "Luxury reclining seats"
    ),
    SeatTypeKey.walkway: SeatType(
        SeatTypeKey.walkway, "Walkway/Aisle", 0, False, False, "#E5E7EB", "🚶", "Walking path - not counted in seating"
    ),
    SeatTypeKey.empty: SeatType(
        SeatTypeKey.empty, "Empty Space", 0, False, False, "transparent", "", "Empty space - not counted"
    ),
}


def lookup(key: Union[SeatTypeKey, str, None]) -> SeatType:
    # Persisted layouts may carry keys from an older catalog; never raise here.
    parsed = SeatTypeKey.parse(key)
    return SEAT_TYPES[parsed if parsed is not None else DEFAULT_TYPE]


def is_seat_type(key: Union[SeatTypeKey, str, None]) -> bool:
    return lookup(key).key not in NON_SEAT_TYPES


def registry_dict() -> dict[str, dict]:
    return {k.value: t.to_dict() for k, t in SEAT_TYPES.items()}
