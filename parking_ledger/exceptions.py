# parking_ledger/exceptions.py
"""
Domain faults raised by the vehicle record and the parking ledger service.
Each fault carries the HTTP status the API layer reports it with.
"""

from typing import Optional


class ParkingError(Exception):
    """Base class for every fault the parking core raises."""

    status_code = 500

    def __init__(self, message: str, plate: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.plate = plate


class InvalidPlate(ParkingError):
    """Plate fails the shape constraints (blank, wrong length, bad characters)."""

    status_code = 400


class InvalidVehicleClass(ParkingError):
    status_code = 400


class VehicleNotFound(ParkingError):
    status_code = 404


class DuplicateActiveVehicle(ParkingError):
    """The plate already has an active stay in the lot."""

    status_code = 409


class AlreadyExited(ParkingError):
    status_code = 409


class StayConflict(ParkingError):
    """A finished stay cannot be reopened; a new stay needs its own entry time."""

    status_code = 409


class VehicleStillParked(ParkingError):
    """Cost was requested for a vehicle that has not exited yet."""

    status_code = 400
