"""The router's service: forwards each request to the owning shard."""

from __future__ import annotations

import logging

from shardkv.discovery import ShardDiscoveryService

logger = logging.getLogger(__name__)


class DbForwardService:
    """Routes get, set and delete requests to shards by key."""

    def __init__(self, shard_discovery_service: ShardDiscoveryService) -> None:
        self.shard_discovery_service = shard_discovery_service

    def get(self, key: str) -> str:
        logger.info("Forwarding GetRequest with key=%s", key)
        return self.shard_discovery_service.get_shard(key).get(key)

    def set(self, key: str, value: str) -> None:
        logger.info("Forwarding SetRequest with key=%s, value=%s", key, value)
        self.shard_discovery_service.get_shard(key).set(key, value)

    def delete(self, key: str) -> None:
        logger.info("Forwarding DelRequest with key=%s", key)
        self.shard_discovery_service.get_shard(key).delete(key)