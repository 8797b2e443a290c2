from msk_capacity_resolver.config import BROKER_CAPACITY_CONFIG_RESOLVER_AWS_FETCH_PERIOD_MINUTES
from msk_capacity_resolver.config import MSK_CLUSTER_ARN
from msk_capacity_resolver.config import MSK_CLUSTER_REGION
from msk_capacity_resolver.config import MSK_CPU_CAPACITY_RATIO
from msk_capacity_resolver.config import MSK_NETWORK_INBOUND_TRAFFIC_RATIO
from msk_capacity_resolver.interface import BrokerCapacityInfo
from msk_capacity_resolver.interface import Resource


def capacity_info(cpu=100.0):
    return BrokerCapacityInfo(
        capacity={
            Resource.CPU: cpu,
            Resource.DISK: 100.0,
            Resource.NW_IN: 10000.0,
            Resource.NW_OUT: 10000.0,
        }
    )


def config_map(**overrides):
    configs = {
        MSK_CLUSTER_ARN: "arn:aws:kafka:region:account:cluster/clusterName",
        MSK_CLUSTER_REGION: "region",
        MSK_CPU_CAPACITY_RATIO: 1.0,
        MSK_NETWORK_INBOUND_TRAFFIC_RATIO: 0.5,
        BROKER_CAPACITY_CONFIG_RESOLVER_AWS_FETCH_PERIOD_MINUTES: 5,
    }
    configs.update(overrides)
    return configs
