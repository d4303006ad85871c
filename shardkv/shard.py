"""Client-side handle on a single shard."""

from __future__ import annotations

from typing import Protocol

from shardkv.store import StatusCode, StoreError


class Backend(Protocol):
    """What a shard connection must offer."""

    def get(self, key: str) -> str: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class Shard:
    """Forwards requests to one shard's store over a connection."""

    def __init__(self, backend: Backend) -> None:
        self._backend = backend

    def _unavailable(self, exc: OSError) -> StoreError:
        return StoreError(StatusCode.UNAVAILABLE, f"Shard unavailable: {exc}")

    def get(self, key: str) -> str:
        try:
            return self._backend.get(key)
        except OSError as exc:
            raise self._unavailable(exc) from exc

    def set(self, key: str, value: str) -> None:
        try:
            self._backend.set(key, value)
        except OSError as exc:
            raise self._unavailable(exc) from exc

    def delete(self, key: str) -> None:
        try:
            self._backend.delete(key)
        except OSError as exc:
            raise self._unavailable(exc) from exc