import logging
import threading
import time
from typing import Callable
from typing import Optional
from typing import Tuple

from msk_capacity_resolver.cache import CapacityCache
from msk_capacity_resolver.interface import BrokerCapacityInfo
from msk_capacity_resolver.interface import CapacityFetchError
from msk_capacity_resolver.interface import ClusterState

logger = logging.getLogger(__name__)

Fetcher = Callable[[], Tuple[ClusterState, BrokerCapacityInfo]]


class CapacityRefresher:
    """Periodically fetches capacity and stores ACTIVE results in a cache

    The first cycle runs as soon as the refresher starts, later cycles run at
    a fixed rate of period_s. A failed cycle is logged and the next one is
    still scheduled. Once stop() returns the cache is never written again,
    even if a cycle was in flight.
    """

    def __init__(
        self,
        fetch: Fetcher,
        cache: CapacityCache,
        period_s: float,
        shutdown_timeout_s: float = 30.0,
    ):
        if period_s <= 0:
            raise ValueError(f"period_s must be positive, got {period_s}")
        self._fetch = fetch
        self._cache = cache
        self._period_s = period_s
        self._shutdown_timeout_s = shutdown_timeout_s

        self._stopped = threading.Event()
        # Guards the stopped check + cache write against stop()
        self._write_lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()

    def start(self) -> None:
        if self._stopped.is_set():
            raise RuntimeError("A stopped CapacityRefresher cannot be restarted")
        if self.running:
            return
        logger.info(
            "Starting broker capacity refresher. Refresh period: %s minutes",
            self._period_s / 60,
        )
        self._thread = threading.Thread(
            target=self._run, name="MSKCapacityRefresher", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        with self._write_lock:
            if self._stopped.is_set():
                return
            self._stopped.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=self._shutdown_timeout_s)
            if thread.is_alive():
                logger.warning(
                    "Capacity refresh still in flight after %ss, abandoning it",
                    self._shutdown_timeout_s,
                )
        logger.info("Stopped broker capacity refresher")

    def run_once(self) -> bool:
        """Run one refresh cycle, returns True if the cache was updated"""
        try:
            state, capacity_info = self._fetch()
        except CapacityFetchError as exp:
            logger.error("Failed to get Broker Capacity Info: %s", exp)
            return False
        except Exception:  # pylint: disable=broad-except
            # A single bad cycle never ends the refresher thread
            logger.exception("Unexpected error refreshing Broker Capacity Info")
            return False

        if not state.is_active:
            logger.info(
                "MSK cluster is %s, keeping previous capacity info until it is ACTIVE",
                state,
            )
            return False

        with self._write_lock:
            if self._stopped.is_set():
                logger.debug("Refresher stopped mid-cycle, dropping capacity info")
                return False
            self._cache.update(capacity_info)
        logger.info("AWS MSK capacity info successfully refreshed")
        return True

    def _run(self) -> None:
        next_run = time.monotonic()
        while not self._stopped.is_set():
            self.run_once()
            next_run += self._period_s
            # Fixed rate: if a cycle overran, skip ahead rather than bunching up
            now = time.monotonic()
            while next_run <= now:
                next_run += self._period_s
            if self._stopped.wait(next_run - now):
                break
