"""Locating the shard responsible for a key."""

from __future__ import annotations

import logging
import zlib
from collections.abc import Callable

from shardkv.coordination import CoordinationError, ZookeeperService
from shardkv.shard import Backend, Shard

logger = logging.getLogger(__name__)

SHARDS_PATH = "/shards"
SHARD_PORT = 50051


class NoShardsError(RuntimeError):
    """Raised when no shard is registered."""


def shard_index(key: str, count: int) -> int:
    """Return the stable index in ``range(count)`` of the shard owning ``key``."""
    if count <= 0:
        raise ValueError("count must be positive")
    return zlib.crc32(key.encode("utf-8")) % count


class ShardDiscoveryService:
    """Chooses a shard for a key from the shards registered under /shards."""

    def __init__(
        self,
        zookeeper_service: ZookeeperService,
        connect: Callable[[str], Backend],
    ) -> None:
        self.zookeeper_service = zookeeper_service
        self._connect = connect

    def get_shard(self, key: str) -> Shard:
        try:
            shard_znodes = self.zookeeper_service.get_children(SHARDS_PATH)
        except CoordinationError as exc:
            logger.warning("Error getting znodes from zookeeper: %s", exc)
            shard_znodes = {}

        if not shard_znodes:
            raise NoShardsError("No shards registered")

        shards = list(shard_znodes.values())
        for address in shards:
            logger.debug("Server address %s", address)

        server_address = shards[shard_index(key, len(shards))]
        return Shard(self._connect(f"{server_address}:{SHARD_PORT}"))