"""
Storage port — the persistence contract the parking ledger service depends on.
Adapters: SqlVehicleStorage (SQLAlchemy) and InMemoryVehicleStorage.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from parking_ledger.domain.vehicle import VehicleRecord


class VehicleStoragePort(ABC):
    @abstractmethod
    def save(self, record: VehicleRecord) -> VehicleRecord:
        """
        Upsert the stay identified by (plate, entry_time) and return the stored value.
        Raises DuplicateActiveVehicle for a second active stay and StayConflict when
        an active record would reopen a finished stay.
        """
        raise NotImplementedError

    @abstractmethod
    def find_by_plate(self, plate: str) -> Optional[VehicleRecord]:
        """The plate's active stay if it has one, otherwise its most recent stay, or None."""
        raise NotImplementedError

    @abstractmethod
    def list_active(self) -> List[VehicleRecord]:
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> List[VehicleRecord]:
        raise NotImplementedError

    @abstractmethod
    def delete_by_plate(self, plate: str) -> None:
        raise NotImplementedError
