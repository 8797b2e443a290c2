import logging
from typing import Any
from typing import Dict
from typing import Tuple

import boto3
import botocore

from msk_capacity_resolver.interface import BrokerCapacityInfo
from msk_capacity_resolver.interface import CapacityFetchError
from msk_capacity_resolver.interface import ClusterState
from msk_capacity_resolver.interface import InstanceDescriptor
from msk_capacity_resolver.units import broker_capacity

logger = logging.getLogger(__name__)

MSK_INSTANCE_PREFIX = "kafka."


def ec2_instance_type(msk_instance_type: str) -> str:
    """kafka.m5.large -> m5.large"""
    return msk_instance_type.replace(MSK_INSTANCE_PREFIX, "")


def _broker_node_group(cluster_info: Dict[str, Any]) -> Dict[str, Any]:
    group = cluster_info.get("BrokerNodeGroupInfo")
    if not group or not group.get("InstanceType"):
        raise CapacityFetchError(
            f"Cluster {cluster_info.get('ClusterArn')} does not describe a "
            "broker node group instance type (serverless clusters are not supported)"
        )
    return group


def _volume_size_gb(group: Dict[str, Any]) -> float:
    try:
        return float(group["StorageInfo"]["EbsStorageInfo"]["VolumeSize"])
    except KeyError as exp:
        raise CapacityFetchError(
            f"Broker node group has no EBS volume size ({exp.args[0]} missing)"
        ) from exp


class AWSClient:
    """Reads broker hardware for one MSK cluster from the MSK and EC2 APIs

    Owns both boto3 clients: close() releases them and is safe to call
    more than once.
    """

    def __init__(
        self,
        cluster_arn: str,
        kafka_client: Any,
        ec2_client: Any,
        cpu_ratio: float,
        incoming_network_ratio: float,
    ):
        self._cluster_arn = cluster_arn
        self._kafka_client = kafka_client
        self._ec2_client = ec2_client
        self._cpu_ratio = cpu_ratio
        self._incoming_network_ratio = incoming_network_ratio
        self._closed = False

    @classmethod
    def from_region(
        cls,
        cluster_arn: str,
        region: str,
        cpu_ratio: float,
        incoming_network_ratio: float,
    ) -> "AWSClient":
        kafka_client = boto3.client("kafka", region_name=region)
        try:
            ec2_client = boto3.client("ec2", region_name=region)
        except Exception:
            kafka_client.close()
            raise
        return cls(
            cluster_arn, kafka_client, ec2_client, cpu_ratio, incoming_network_ratio
        )

    @property
    def cluster_arn(self) -> str:
        return self._cluster_arn

    def _describe(self) -> Tuple[ClusterState, InstanceDescriptor]:
        try:
            cluster_info = self._kafka_client.describe_cluster(
                ClusterArn=self._cluster_arn
            )["ClusterInfo"]
            group = _broker_node_group(cluster_info)
            instance_type = ec2_instance_type(group["InstanceType"])

            response = self._ec2_client.describe_instance_types(
                InstanceTypes=[instance_type]
            )
        except (
            botocore.exceptions.ClientError,
            botocore.exceptions.BotoCoreError,
        ) as exp:
            raise CapacityFetchError(
                f"Failed to describe MSK cluster {self._cluster_arn}: {exp}"
            ) from exp

        if not response.get("InstanceTypes"):
            raise CapacityFetchError(
                f"EC2 returned no instance type info for {instance_type}"
            )
        network_info = response["InstanceTypes"][0].get("NetworkInfo", {})

        state = ClusterState.from_aws(cluster_info.get("State"))
        if state is ClusterState.UNKNOWN:
            logger.warning(
                "Unrecognized MSK cluster state %s for %s",
                cluster_info.get("State"),
                self._cluster_arn,
            )
        return state, InstanceDescriptor(
            instance_type=instance_type,
            network_performance=network_info.get("NetworkPerformance"),
            volume_size_gb=_volume_size_gb(group),
        )

    def describe_instance_descriptor(self) -> InstanceDescriptor:
        return self._describe()[1]

    def get_broker_capacity_info(self) -> Tuple[ClusterState, BrokerCapacityInfo]:
        """
        Fetch the MSK cluster state and the capacity of its brokers.

        Emulates something like the following

        aws kafka describe-cluster --cluster-arn <arn>
        aws ec2 describe-instance-types --instance-types <type without kafka.>

        Every broker in an MSK cluster runs the same instance type and
        volume size so a single BrokerCapacityInfo describes all of them.
        Raises CapacityFetchError if either call fails; no partial result is
        ever returned.
        """
        state, descriptor = self._describe()
        logger.debug(
            "MSK cluster %s is %s on %s", self._cluster_arn, state, descriptor
        )
        capacity = broker_capacity(
            descriptor,
            cpu_ratio=self._cpu_ratio,
            incoming_ratio=self._incoming_network_ratio,
        )
        return state, capacity

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._kafka_client.close()
        finally:
            self._ec2_client.close()

    def __enter__(self) -> "AWSClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
