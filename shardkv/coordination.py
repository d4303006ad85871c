"""Coordination service: a znode tree with persistent and ephemeral nodes."""

from __future__ import annotations

import enum
import logging
import threading
import uuid
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_MAX_DATA_BYTES = 512


class CoordinationError(Exception):
    """Raised when a coordination operation fails."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


class CreateMode(enum.Enum):
    PERSISTENT = "persistent"
    EPHEMERAL = "ephemeral"


class SessionState(enum.Enum):
    CONNECTED = "connected"
    NOT_CONNECTED = "not_connected"
    EXPIRED = "expired"


@dataclass
class _Node:
    data: str
    owner: str | None


def _validate(path: str) -> None:
    if (
        not isinstance(path, str)
        or not path.startswith("/")
        or (path != "/" and path.endswith("/"))
        or "//" in path
    ):
        raise CoordinationError(f"Invalid path {path!r}", "BADARGUMENTS")


def _parent(path: str) -> str:
    return path.rsplit("/", 1)[0] or "/"


class InMemoryCoordinator:
    """A thread-safe, in-process znode tree."""

    def __init__(self) -> None:
        self._nodes: dict[str, _Node] = {"/": _Node("", None)}
        self._lock = threading.Lock()

    def create(
        self,
        path: str,
        data: str,
        mode: CreateMode = CreateMode.EPHEMERAL,
        session: str | None = None,
    ) -> str:
        """Create a node; ephemeral nodes belong to ``session``."""
        _validate(path)
        if path == "/":
            raise CoordinationError("Node exists: /", "NODEEXISTS")
        if mode is CreateMode.EPHEMERAL and session is None:
            raise CoordinationError("Ephemeral node needs a session", "BADARGUMENTS")
        with self._lock:
            if path in self._nodes:
                raise CoordinationError(f"Node exists: {path}", "NODEEXISTS")
            parent = self._nodes.get(_parent(path))
            if parent is None:
                raise CoordinationError(f"No parent node for {path}", "NONODE")
            if parent.owner is not None:
                raise CoordinationError(
                    f"Ephemeral node cannot have children: {path}",
                    "NOCHILDRENFOREPHEMERALS",
                )
            owner = session if mode is CreateMode.EPHEMERAL else None
            self._nodes[path] = _Node(data, owner)
        return path

    def get(self, path: str) -> str:
        """Return the data held at ``path``."""
        _validate(path)
        with self._lock:
            node = self._nodes.get(path)
            if node is None:
                raise CoordinationError(f"No node {path}", "NONODE")
            return node.data

    def children(self, path: str) -> list[str]:
        """Return the sorted names of the direct children of ``path``."""
        _validate(path)
        prefix = "/" if path == "/" else path + "/"
        with self._lock:
            if path not in self._nodes:
                raise CoordinationError(f"No node {path}", "NONODE")
            return sorted(
                p[len(prefix):]
                for p in self._nodes
                if p != path and p.startswith(prefix) and "/" not in p[len(prefix):]
            )

    def expire_session(self, session: str) -> None:
        """Remove every ephemeral node owned by ``session``."""
        with self._lock:
            owned = [p for p, node in self._nodes.items() if node.owner == session]
            for p in owned:
                del self._nodes[p]


class ZookeeperService:
    """A client session on a coordinator."""

    def __init__(self, coordinator: InMemoryCoordinator) -> None:
        self._coordinator = coordinator
        self.session = uuid.uuid4().hex
        self.connected = False
        self.expired = False
        self._closed = False
        self.on_session_event(SessionState.CONNECTED)

    def on_session_event(self, state: SessionState) -> None:
        """Track a change of session state; expiry closes the session."""
        if state is SessionState.CONNECTED:
            self.connected = True
        elif state is SessionState.NOT_CONNECTED:
            self.connected = False
        elif state is SessionState.EXPIRED:
            self.expired = True
            self.connected = False
            self.close()

    def _ensure_open(self) -> None:
        if self._closed:
            raise CoordinationError("Session is closed", "INVALIDSTATE")

    def create_znode(
        self, path: str, data: str, mode: CreateMode = CreateMode.EPHEMERAL
    ) -> None:
        self._ensure_open()
        try:
            self._coordinator.create(path, data, mode, self.session)
        except CoordinationError as exc:
            raise CoordinationError(
                f"Failed to create znode with error code {exc.code}", exc.code
            ) from exc

    def get_znode(self, path: str) -> str:
        """Return a node's data, cut to at most 512 bytes."""
        logger.debug("Getting ZooKeeper znode %s", path)
        self._ensure_open()
        try:
            data = self._coordinator.get(path)
        except CoordinationError as exc:
            logger.warning("Error getting ZooKeeper znode with error code %s", exc.code)
            raise CoordinationError(
                f"Failed getting znode with error code {exc.code}", exc.code
            ) from exc
        raw = data.encode("utf-8")[:_MAX_DATA_BYTES]
        return raw.decode("utf-8", errors="ignore")

    def get_children(self, path: str) -> dict[str, str]:
        """Map each child's full path to its data; unreadable children map to ""."""
        logger.info("Getting ZooKeeper children of znode %s", path)
        self._ensure_open()
        try:
            names = self._coordinator.children(path)
        except CoordinationError as exc:
            raise CoordinationError(
                f"Failed getting znodes with code {exc.code}", exc.code
            ) from exc
        znodes: dict[str, str] = {}
        base = "" if path == "/" else path
        for name in names:
            znode = f"{base}/{name}"
            logger.debug("Getting znode %s", znode)
            try:
                data = self.get_znode(znode)
            except CoordinationError as exc:
                logger.warning("Error getting znode %s: %s", znode, exc)
                data = ""
            logger.debug("Received znode %s with data: %s", znode, data)
            znodes[znode] = data
        return znodes

    def close(self) -> None:
        """End the session, removing its ephemeral nodes."""
        if self._closed:
            return
        self._closed = True
        self.connected = False
        self._coordinator.expire_session(self.session)

    def __enter__(self) -> ZookeeperService:
        return self

    def __exit__(self, *args) -> None:
        self.close()