from parking_ledger.domain.vehicle import VehicleClass, VehicleRecord   # noqa
