"""Registration of a shard in the coordination service."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from shardkv.coordination import CoordinationError, CreateMode, ZookeeperService
from shardkv.network import get_hostname, get_server_address

logger = logging.getLogger(__name__)

MAX_RETRIES = 5
RETRY_DELAY = 2.0


class RegistrationError(RuntimeError):
    """Raised when a shard cannot be registered."""


class ShardRegistrar:
    """Registers this shard as an ephemeral node under /shards."""

    def __init__(
        self,
        zookeeper_service: ZookeeperService,
        hostname: str | None = None,
        server_address: str | None = None,
        max_retries: int = MAX_RETRIES,
        retry_delay: float = RETRY_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.zookeeper_service = zookeeper_service
        self.hostname = hostname
        self.server_address = server_address
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._sleep = sleep

    def register_shard(self) -> None:
        """Create /shards if needed, then this shard's node, retrying on failure."""
        address = self.server_address or get_server_address()

        try:
            self.zookeeper_service.create_znode("/shards", address, CreateMode.PERSISTENT)
        except CoordinationError:
            pass

        for _ in range(self.max_retries):
            hostname = self.hostname or get_hostname()
            try:
                self.zookeeper_service.create_znode(
                    f"/shards/{hostname}", address, CreateMode.EPHEMERAL
                )
                return
            except CoordinationError as exc:
                logger.warning("%s", exc)
                self._sleep(self.retry_delay)

        raise RegistrationError("Failed to register node")