from parking_ledger.storage.base import VehicleStoragePort          # noqa
from parking_ledger.storage.memory import InMemoryVehicleStorage    # noqa
from parking_ledger.storage.sql import SqlVehicleStorage            # noqa
