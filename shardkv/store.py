"""The shard's in-memory key-value store."""

from __future__ import annotations

import enum
import logging
import threading

from shardkv.strings import valid_string

logger = logging.getLogger(__name__)

_INTERNAL_MESSAGE = "There was an error processing your request"


class StatusCode(enum.IntEnum):
    OK = 0
    INVALID_ARGUMENT = 3
    NOT_FOUND = 5
    INTERNAL = 13
    UNAVAILABLE = 14


class StoreError(Exception):
    """A failed store request, with its status code."""

    def __init__(self, code: StatusCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class KeyValueStore:
    """A thread-safe mapping of non-blank string keys to non-blank values."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> str:
        if key is None:
            raise StoreError(StatusCode.INTERNAL, _INTERNAL_MESSAGE)
        logger.info("Processing GetRequest with key=%s", key)
        if not valid_string(key):
            raise StoreError(StatusCode.INVALID_ARGUMENT, "Key must be non-empty")
        with self._lock:
            try:
                return self._data[key]
            except KeyError:
                raise StoreError(StatusCode.NOT_FOUND, "Db item not found") from None

    def set(self, key: str, value: str) -> None:
        if key is None or value is None:
            raise StoreError(StatusCode.INTERNAL, _INTERNAL_MESSAGE)
        logger.info("Processing SetRequest with key=%s, value=%s", key, value)
        if not valid_string(key) or not valid_string(value):
            raise StoreError(
                StatusCode.INVALID_ARGUMENT, "Key and value must be non-empty"
            )
        with self._lock:
            self._data[key] = value

    def delete(self, key: str) -> None:
        if key is None:
            raise StoreError(StatusCode.INTERNAL, _INTERNAL_MESSAGE)
        logger.info("Processing DelRequest with key=%s", key)
        if not valid_string(key):
            raise StoreError(StatusCode.INVALID_ARGUMENT, "Key must be non-empty")
        with self._lock:
            try:
                del self._data[key]
            except KeyError:
                raise StoreError(StatusCode.NOT_FOUND, "Db item not found") from None