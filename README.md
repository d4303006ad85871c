# shardkv

shardkv is a small sharded key-value store, usable as a library. It has
three parts:

- **Storage**: `KeyValueStore` keeps string keys and string values in memory.
- **Registration**: each storage node adds itself under `/shards` in a
  coordination tree.
- **Routing**: a router chooses the node that owns a key and passes the
  request to it.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Storage

`shardkv.store.KeyValueStore` is a thread-safe map from strings to strings.
Each failure raises `StoreError`. Its `code` attribute holds a `StatusCode`
and its `message` attribute holds the text.

- `get`, `set` and `delete` raise `StatusCode.INVALID_ARGUMENT` for a key
  that is empty or made only of whitespace. `set` also raises it for such a
  value.
- `get` and `delete` raise `StatusCode.NOT_FOUND` for a key that is not in
  the store.
- A `None` key or value raises `StatusCode.INTERNAL`.

```python
from shardkv.store import KeyValueStore, StoreError, StatusCode

store = KeyValueStore()
store.set("colour", "blue")
assert store.get("colour") == "blue"
store.delete("colour")

try:
    store.get("colour")
except StoreError as err:
    assert err.code is StatusCode.NOT_FOUND
```

The validation rule is also available on its own:

- `shardkv.strings.valid_string(s)` is true when `s` is neither empty nor
  made only of whitespace.
- `shardkv.strings.blank_string(s)` is true when `s` is made only of
  whitespace.

## Coordination

`shardkv.coordination.InMemoryCoordinator` is a thread-safe, in-process tree
of nodes.

- A node is either persistent or ephemeral (`CreateMode.PERSISTENT`,
  `CreateMode.EPHEMERAL`). An ephemeral node belongs to a session.
- A node can only be created under an existing parent. An ephemeral node
  cannot have children.
- `expire_session` removes every ephemeral node that a session owns.

`shardkv.coordination.ZookeeperService` is a client session on a
coordinator.

- The session starts out connected.
- `create_znode(path, data, mode)` creates a node. The default mode is
  ephemeral.
- `get_znode(path)` returns a node's data, cut to at most 512 bytes.
- `get_children(path)` maps the full path of each child to its data. A child
  that cannot be read maps to `""`.
- `on_session_event(SessionState.EXPIRED)` closes the session.
- `close()` ends the session and removes its ephemeral nodes. The service is
  also a context manager, and it closes the session on exit.

Failures raise `CoordinationError`. Its `code` attribute holds a short code
such as `"NODEEXISTS"` or `"NONODE"`.

## Registration

`shardkv.registration.ShardRegistrar(zookeeper_service).register_shard()`
works in two steps:

1. It tries to create the persistent node `/shards`. If that fails, for
   example because the node already exists, it carries on.
2. It creates the ephemeral node `/shards/<hostname>`, which holds the
   server address.

If step 2 fails, it retries up to `max_retries` times (default 5), sleeping
`retry_delay` seconds (default 2.0) between attempts. When every attempt
fails, it raises `RegistrationError`.

The host name and the address default to the values below. Both can be given
to the constructor instead.

- The host name comes from `shardkv.network.get_hostname()`.
- The address comes from `shardkv.network.get_server_address()`: the host
  name followed by `.db.default.svc.cluster.local`.

## Routing

`shardkv.discovery.ShardDiscoveryService(zookeeper_service, connect)` reads
the addresses registered under `/shards`.

- It chooses one address with `shard_index(key, count)`, a stable CRC-32
  hash of the key modulo the number of shards.
- It calls `connect("<address>:50051")` to obtain a backend. A backend is any
  object with `get`, `set` and `delete`; a `KeyValueStore` is one.
- It wraps that backend in a `shardkv.shard.Shard`.
- If no shards are registered, it raises `NoShardsError`.

`Shard` passes each call to its backend. If the backend raises `OSError`,
`Shard` raises `StoreError` with `StatusCode.UNAVAILABLE` in its place.

`shardkv.forward.DbForwardService` offers `get`, `set` and `delete`. Each
call goes to the shard that owns the key.

```python
from shardkv.coordination import InMemoryCoordinator, ZookeeperService
from shardkv.discovery import ShardDiscoveryService
from shardkv.forward import DbForwardService
from shardkv.registration import ShardRegistrar
from shardkv.store import KeyValueStore

coordinator = InMemoryCoordinator()
store = KeyValueStore()

with ZookeeperService(coordinator) as session:
    ShardRegistrar(session, hostname="node-a", server_address="node-a.local").register_shard()
    router = DbForwardService(ShardDiscoveryService(session, connect=lambda address: store))
    router.set("colour", "blue")
    assert router.get("colour") == "blue"
```

## What the package does not do

- It has no network server and no command to start one. Storage nodes and
  the router are Python objects that you call directly.
- It has no network client. Connecting to a shard's address is up to the
  `connect` function you pass to `ShardDiscoveryService`.
- The only coordination backend is the in-process `InMemoryCoordinator`. The
  package does not talk to an external coordination server.
- Data lives only in memory. Nothing is written to disk.