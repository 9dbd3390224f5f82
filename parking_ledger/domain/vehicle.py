# parking_ledger/domain/vehicle.py
"""
Vehicle record — the single domain entity of the parking ledger.

A record is created on entry and transitions exactly once, irreversibly,
from active to inactive on exit. Records are frozen: mark_exit() returns a
new value instead of mutating the existing one.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional
from parking_ledger.exceptions import InvalidPlate, InvalidVehicleClass, AlreadyExited

PLATE_MIN_LENGTH = 6
PLATE_MAX_LENGTH = 7


class VehicleClass(str, Enum):
    CAR = "CAR"
    MOTORCYCLE = "MOTORCYCLE"

    @property
    def rate_per_hour(self) -> int:
        return _RATES[self]


_RATES = {
    VehicleClass.CAR: 1000,
    VehicleClass.MOTORCYCLE: 500,
}


def utcnow() -> datetime:
    """Naive UTC timestamp, matching what the DateTime columns store."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def normalize_plate(plate: str) -> str:
    return plate.strip().upper() if plate else plate


def validate_plate(plate: Optional[str]) -> None:
    if plate is None or not plate.strip():
        raise InvalidPlate("Plate must not be empty", plate=plate)
    if not PLATE_MIN_LENGTH <= len(plate) <= PLATE_MAX_LENGTH:
        raise InvalidPlate(
            f"Plate must be between {PLATE_MIN_LENGTH} and {PLATE_MAX_LENGTH} characters",
            plate=plate,
        )
    if not (plate.isascii() and plate.isalnum()):
        raise InvalidPlate("Plate must contain only letters and digits", plate=plate)


def parse_vehicle_class(vehicle_class) -> VehicleClass:
    try:
        return VehicleClass(vehicle_class)
    except ValueError:
        allowed = ", ".join(c.value for c in VehicleClass)
        raise InvalidVehicleClass(f"Vehicle class must be one of: {allowed}") from None


@dataclass(frozen=True)
class VehicleRecord:
    plate: str
    vehicle_class: VehicleClass
    entry_time: datetime
    exit_time: Optional[datetime] = None
    active: bool = True

    @classmethod
    def create(cls, plate: str, vehicle_class: VehicleClass, now: Optional[datetime] = None,
               not_before: Optional[datetime] = None) -> "VehicleRecord":
        """
        Factory for a new stay. Raises InvalidPlate or InvalidVehicleClass on bad input.
        not_before pushes entry_time forward when the clock lags a previous stay.
        """
        validate_plate(plate)
        entry_time = now or utcnow()
        if not_before is not None and entry_time < not_before:
            entry_time = not_before
        return cls(
            plate=plate.upper(),
            vehicle_class=parse_vehicle_class(vehicle_class),
            entry_time=entry_time,
        )

    def mark_exit(self, now: Optional[datetime] = None) -> "VehicleRecord":
        """Return the exited copy of this record. Raises AlreadyExited if inactive."""
        if not self.active:
            raise AlreadyExited(f"Vehicle {self.plate} has already left the lot", plate=self.plate)
        exit_time = max(now or utcnow(), self.entry_time)
        return replace(self, exit_time=exit_time, active=False)

    def duration(self) -> Optional[timedelta]:
        if self.exit_time is None:
            return None
        return self.exit_time - self.entry_time

    def billable_hours(self) -> int:
        """Whole hours elapsed, truncated, with a minimum of one hour."""
        elapsed = self.duration()
        if elapsed is None:
            raise ValueError("Billable hours are only defined for exited vehicles")
        return max(1, int(elapsed.total_seconds() // 3600))

    def __repr__(self):
        return f"<VehicleRecord {self.plate} class={self.vehicle_class.value} active={self.active}>"
