import logging
from typing import Any
from typing import Mapping
from typing import Optional

from msk_capacity_resolver.aws.msk_client import AWSClient
from msk_capacity_resolver.cache import CapacityCache
from msk_capacity_resolver.config import load_config
from msk_capacity_resolver.config import RefreshConfig
from msk_capacity_resolver.interface import BrokerCapacityInfo
from msk_capacity_resolver.refresher import CapacityRefresher

logger = logging.getLogger(__name__)


class AmazonMSKBrokerCapacityConfigResolver:
    """Serves broker capacity for an Amazon MSK cluster

    configure() starts a background refresher that periodically asks MSK and
    EC2 for the cluster's broker hardware. capacity_for_broker() only ever
    reads the last good snapshot: it never blocks on AWS and returns None
    until the cluster has been seen ACTIVE at least once.
    """

    def __init__(self):
        self._cache = CapacityCache()
        self._aws: Optional[AWSClient] = None
        self._refresher: Optional[CapacityRefresher] = None
        self._config: Optional[RefreshConfig] = None
        self._closed = False

    @property
    def config(self) -> Optional[RefreshConfig]:
        return self._config

    def configure(self, configs: Mapping[str, Any]) -> None:
        if self._config is not None:
            raise RuntimeError("Resolver is already configured")
        if self._closed:
            raise RuntimeError("Resolver is closed")
        config = load_config(configs)

        aws = self._aws_client(config)
        try:
            refresher = self._capacity_refresher(config, aws)
            refresher.start()
        except BaseException:
            aws.close()
            raise
        self._config = config
        self._aws = aws
        self._refresher = refresher

    def _aws_client(self, config: RefreshConfig) -> AWSClient:
        return AWSClient.from_region(
            config.cluster_arn,
            config.region,
            config.cpu_capacity_ratio,
            config.network_inbound_ratio,
        )

    def _capacity_refresher(
        self, config: RefreshConfig, aws: AWSClient
    ) -> CapacityRefresher:
        return CapacityRefresher(
            fetch=aws.get_broker_capacity_info,
            cache=self._cache,
            period_s=config.refresh_period_seconds,
        )

    def capacity_for_broker(
        self,
        rack: Optional[str],
        host: Optional[str],
        broker_id: int,
        timeout_ms: int = 0,
        allow_capacity_estimation: bool = True,
    ) -> Optional[BrokerCapacityInfo]:
        """Capacity of a broker, or None if it is not known yet

        MSK provisions every broker in a cluster identically, so the answer
        is the same cluster wide snapshot regardless of rack, host or
        broker_id. timeout_ms and allow_capacity_estimation are accepted for
        interface compatibility and ignored: reads never wait on AWS.
        """
        capacity_info = self._cache.read()
        logger.debug(
            "Querying cached AWS MSK Capacity Info for broker %s: %s",
            broker_id,
            "EMPTY" if capacity_info is None else capacity_info.capacity,
        )
        return capacity_info

    def refresh_capacity_info(self) -> bool:
        """Run one refresh cycle now, returns True if the cache was updated"""
        if self._refresher is None:
            raise RuntimeError("Resolver is not configured")
        return self._refresher.run_once()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            if self._refresher is not None:
                self._refresher.stop()
        finally:
            if self._aws is not None:
                self._aws.close()
            self._cache.clear()

    def __enter__(self) -> "AmazonMSKBrokerCapacityConfigResolver":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
