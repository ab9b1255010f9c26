# app/services/activity_report.py
"""
Activity report value types.
ActivityLevel is the ordered crowd level (Light=1, Medium=2, Busy=3),
AreaType the fixed set of park areas that receive reports.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from app.errors import InvalidLevel, UnknownArea


class ActivityLevel(IntEnum):
    LIGHT = 1
    MEDIUM = 2
    BUSY = 3

    @property
    def label(self) -> str:
        """Display label: Light | Medium | Busy"""
        return self.name.title()

    @property
    def wire_value(self) -> str:
        """Remote store value: light | medium | busy"""
        return self.name.lower()


class AreaType(str, Enum):
    PICKLEBALL = "pickleball"
    BASKETBALL = "basketball"
    FUTSAL = "futsal"
    VOLLEYBALL = "volleyball"
    PARKING = "parking"


AREA_IDS = tuple(a.value for a in AreaType)


def parse_level(value) -> ActivityLevel:
    """Accept an ActivityLevel, its ordinal (1-3) or its label in any case."""
    if isinstance(value, ActivityLevel):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return ActivityLevel(value)
        except ValueError:
            raise InvalidLevel(value) from None
    if isinstance(value, str):
        member = ActivityLevel.__members__.get(value.strip().upper())
        if member is not None:
            return member
    raise InvalidLevel(value)


def parse_area(area_id: str) -> str:
    if isinstance(area_id, AreaType):
        return area_id.value
    normalized = (area_id or "").strip().lower()
    if normalized not in AREA_IDS:
        raise UnknownArea(area_id)
    return normalized


@dataclass(frozen=True)
class ActivityReport:
    area_id: str
    level: ActivityLevel
    observed_at: int          # epoch milliseconds

    def to_record(self) -> dict:
        # area_id is implicit in the storage key
        return {"level": int(self.level), "observed_at": self.observed_at}

    @classmethod
    def from_record(cls, area_id: str, record: dict) -> "ActivityReport":
        return cls(area_id=area_id,
                   level=parse_level(record["level"]),
                   observed_at=int(record["observed_at"]))
