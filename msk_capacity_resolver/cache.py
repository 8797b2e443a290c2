from typing import Optional

from msk_capacity_resolver.interface import BrokerCapacityInfo


class CapacityCache:
    """Holds the last capacity snapshot computed from an ACTIVE cluster

    Writers replace the whole (immutable) snapshot with a single reference
    rebind, so readers never see a partial update and never need a lock.
    There is no expiry: a stale snapshot is served until a newer one lands.
    """

    def __init__(self):
        self._capacity_info: Optional[BrokerCapacityInfo] = None

    def read(self) -> Optional[BrokerCapacityInfo]:
        return self._capacity_info

    def update(self, capacity_info: BrokerCapacityInfo) -> None:
        self._capacity_info = capacity_info

    def clear(self) -> None:
        self._capacity_info = None

    @property
    def empty(self) -> bool:
        return self._capacity_info is None
