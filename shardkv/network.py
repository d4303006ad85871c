"""Host name and cluster address lookup."""

import socket

_MAX_HOSTNAME = 255
_CLUSTER_DOMAIN = ".db.default.svc.cluster.local"


def get_hostname() -> str:
    """Return this machine's host name, at most 255 characters long."""
    try:
        hostname = socket.gethostname()
    except OSError as exc:
        raise RuntimeError("Failed to get hostname") from exc
    return hostname[:_MAX_HOSTNAME]


def get_server_address() -> str:
    """Return the address under which this shard is reachable in the cluster."""
    return get_hostname() + _CLUSTER_DOMAIN