"""In-process storage adapter. Keeps stays in a dict, nothing survives a restart."""

import threading
from typing import Dict, List, Optional, Tuple
from datetime import datetime
from parking_ledger.domain.vehicle import VehicleRecord
from parking_ledger.exceptions import DuplicateActiveVehicle, StayConflict
from parking_ledger.storage.base import VehicleStoragePort


class InMemoryVehicleStorage(VehicleStoragePort):
    def __init__(self):
        self._stays: Dict[Tuple[str, datetime], VehicleRecord] = {}
        self._lock = threading.Lock()

    def save(self, record: VehicleRecord) -> VehicleRecord:
        key = (record.plate.upper(), record.entry_time)
        with self._lock:
            previous = self._stays.get(key)
            if previous is not None and not previous.active and record.active:
                raise StayConflict(
                    f"Stay of {record.plate} entered at {record.entry_time} is already finished",
                    plate=record.plate,
                )
            if record.active:
                clash = next(
                    (k for k, r in self._stays.items() if r.active and k[0] == key[0] and k != key),
                    None,
                )
                if clash is not None:
                    raise DuplicateActiveVehicle(
                        f"Vehicle {record.plate} is already in the lot", plate=record.plate
                    )
            self._stays[key] = record
        return record

    def find_by_plate(self, plate: str) -> Optional[VehicleRecord]:
        plate = plate.upper()
        with self._lock:
            stays = [r for (p, _), r in self._stays.items() if p == plate]
        return max(stays, key=lambda r: (r.active, r.entry_time), default=None)

    def list_active(self) -> List[VehicleRecord]:
        with self._lock:
            return [r for r in self._stays.values() if r.active]

    def list_all(self) -> List[VehicleRecord]:
        with self._lock:
            return list(self._stays.values())

    def delete_by_plate(self, plate: str) -> None:
        plate = plate.upper()
        with self._lock:
            for key in [k for k in self._stays if k[0] == plate]:
                del self._stays[key]
