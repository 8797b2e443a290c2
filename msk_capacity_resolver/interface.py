from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Dict
from typing import Mapping
from typing import Optional

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import field_serializer
from pydantic import field_validator


class ConfigurationError(ValueError):
    """A required resolver option is missing, empty or out of range"""


class CapacityFetchError(RuntimeError):
    """A refresh cycle could not produce a complete capacity snapshot"""


###############################################################################
#              Models (structs) for how we describe capacity                  #
###############################################################################


class Resource(str, Enum):
    def __str__(self):
        return str(self.value)

    CPU = "cpu"
    DISK = "disk"
    NW_IN = "nw_in"
    NW_OUT = "nw_out"


class ClusterState(str, Enum):
    def __str__(self):
        return str(self.value)

    ACTIVE = "ACTIVE"
    CREATING = "CREATING"
    DELETING = "DELETING"
    FAILED = "FAILED"
    HEALING = "HEALING"
    MAINTENANCE = "MAINTENANCE"
    REBOOTING_BROKER = "REBOOTING_BROKER"
    UPDATING = "UPDATING"
    # MSK reported something this enum does not know about yet
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_aws(cls, state: Optional[str]) -> ClusterState:
        try:
            return cls(state)
        except ValueError:
            return cls.UNKNOWN

    @property
    def is_active(self) -> bool:
        return self is ClusterState.ACTIVE


class InstanceDescriptor(BaseModel):
    """The handful of descriptor fields capacity is derived from

    instance_type is the raw EC2 type (e.g. t3.small), without the MSK
    product prefix. network_performance is EC2's free text bandwidth tier
    such as "Up to 10 Gigabit" and may be missing.
    """

    instance_type: str
    network_performance: Optional[str] = None
    volume_size_gb: float
    model_config = ConfigDict(frozen=True)


class BrokerCapacityInfo(BaseModel):
    """Capacity of a single broker, one value per Resource

    Units:
        cpu    - percentage points of one fully utilized core budget
        disk   - MB (decimal)
        nw_in  - KB/s
        nw_out - KB/s
    """

    capacity: Mapping[Resource, float]
    num_cpu_cores: int = 1
    model_config = ConfigDict(frozen=True)

    @field_validator("capacity")
    @classmethod
    def _every_resource_non_negative(
        cls, capacity: Mapping[Resource, float]
    ) -> Mapping[Resource, float]:
        missing = [r.value for r in Resource if r not in capacity]
        if missing:
            raise ValueError(f"capacity is missing resources {missing}")
        for resource, value in capacity.items():
            if value < 0:
                raise ValueError(f"{resource} capacity must be >= 0, got {value}")
        # Read only, every cache reader shares this mapping
        return MappingProxyType(dict(capacity))

    @field_serializer("capacity")
    def _dump_capacity(
        self, capacity: Mapping[Resource, float]
    ) -> Dict[Resource, float]:
        return dict(capacity)

    def __getitem__(self, resource: Resource) -> float:
        return self.capacity[resource]

    @property
    def cpu(self) -> float:
        return self.capacity[Resource.CPU]

    @property
    def disk_mb(self) -> float:
        return self.capacity[Resource.DISK]

    @property
    def nw_in_kbps(self) -> float:
        return self.capacity[Resource.NW_IN]

    @property
    def nw_out_kbps(self) -> float:
        return self.capacity[Resource.NW_OUT]
