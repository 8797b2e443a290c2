import logging
import re
from typing import Optional
from typing import Tuple

from msk_capacity_resolver.interface import BrokerCapacityInfo
from msk_capacity_resolver.interface import InstanceDescriptor
from msk_capacity_resolver.interface import Resource

logger = logging.getLogger(__name__)

# One full core's worth of CPU budget
CPU_BUDGET = 100.0
# Downstream consumers expect decimal MB, not MiB
MB_PER_GB = 1000
KBPS_PER_GIGABIT = 1_000_000
KBPS_PER_MEGABIT = 1_000

_NON_NUMERIC = re.compile(r"[^\d.]")


def cpu_capacity(cpu_ratio: float) -> float:
    return cpu_ratio * CPU_BUDGET


def disk_capacity_mb(volume_size_gb: float) -> float:
    return float(volume_size_gb) * MB_PER_GB


def _leading_number(text: str) -> float:
    digits = _NON_NUMERIC.sub("", text)
    try:
        return float(digits)
    except ValueError:
        logger.warning("Could not parse a bandwidth figure from %r", text)
        return 0.0


def parse_network_performance(network_performance: Optional[str]) -> float:
    """Convert EC2's NetworkPerformance text into KB/s

    EC2 describes bandwidth tiers as free text: "Up to 10 Gigabit",
    "500 Megabit", "25 Gigabit", "Low to Moderate". Only Gigabit and
    Megabit tiers carry a number; anything else is treated as 0.0.
    """
    if network_performance is None:
        return 0.0
    if "Gigabit" in network_performance:
        return _leading_number(network_performance) * KBPS_PER_GIGABIT
    if "Megabit" in network_performance:
        return _leading_number(network_performance) * KBPS_PER_MEGABIT
    return 0.0


def split_network(
    network_performance: float, incoming_ratio: float
) -> Tuple[float, float]:
    """Split total bandwidth into (inbound, outbound)"""
    nw_in = network_performance * incoming_ratio
    return nw_in, network_performance * (1 - incoming_ratio)


def broker_capacity(
    descriptor: InstanceDescriptor, cpu_ratio: float, incoming_ratio: float
) -> BrokerCapacityInfo:
    network = parse_network_performance(descriptor.network_performance)
    nw_in, nw_out = split_network(network, incoming_ratio)
    return BrokerCapacityInfo(
        capacity={
            Resource.CPU: cpu_capacity(cpu_ratio),
            Resource.DISK: disk_capacity_mb(descriptor.volume_size_gb),
            Resource.NW_IN: nw_in,
            Resource.NW_OUT: nw_out,
        }
    )
