import pytest

from shardkv.coordination import CreateMode, InMemoryCoordinator, ZookeeperService
from shardkv.discovery import NoShardsError, ShardDiscoveryService, shard_index
from shardkv.store import KeyValueStore


def _cluster(addresses):
    coordinator = InMemoryCoordinator()
    sessions = []
    stores = {}
    for i, address in enumerate(addresses):
        session = ZookeeperService(coordinator)
        if i == 0:
            session.create_znode("/shards", address, CreateMode.PERSISTENT)
        session.create_znode(f"/shards/{address}", address, CreateMode.EPHEMERAL)
        sessions.append(session)
        stores[f"{address}:50051"] = KeyValueStore()
    client = ZookeeperService(coordinator)
    return coordinator, sessions, stores, client


def test_shard_index_single_shard_is_zero():
    assert shard_index("anything", 1) == 0


@pytest.mark.parametrize("count", [0, -1])
def test_shard_index_rejects_non_positive(count):
    with pytest.raises(ValueError):
        shard_index("key", count)


def test_shard_index_in_range_and_stable():
    for n in range(200):
        key = f"key-{n}"
        idx = shard_index(key, 7)
        assert 0 <= idx < 7
        assert shard_index(key, 7) == idx


def test_shard_index_spreads_keys():
    indexes = {shard_index(f"key-{n}", 3) for n in range(100)}
    assert indexes == {0, 1, 2}


def test_no_shards_path_raises():
    client = ZookeeperService(InMemoryCoordinator())
    discovery = ShardDiscoveryService(client, connect=lambda addr: KeyValueStore())
    with pytest.raises(NoShardsError, match="No shards registered"):
        discovery.get_shard("key")


def test_empty_shards_after_expiry_raises():
    _, sessions, stores, client = _cluster(["a"])
    sessions[0].close()
    discovery = ShardDiscoveryService(client, connect=stores.__getitem__)
    with pytest.raises(NoShardsError):
        discovery.get_shard("key")


def test_connect_receives_address_with_port():
    _, _, stores, client = _cluster(["a"])
    seen = []

    def connect(address):
        seen.append(address)
        return stores[address]

    discovery = ShardDiscoveryService(client, connect=connect)
    discovery.get_shard("key").set("key", "value")
    assert seen == ["a:50051"]
    assert stores["a:50051"].get("key") == "value"


def test_same_key_routes_to_same_shard():
    _, _, stores, client = _cluster(["a", "b", "c"])
    discovery = ShardDiscoveryService(client, connect=stores.__getitem__)
    for n in range(30):
        key = f"k{n}"
        discovery.get_shard(key).set(key, f"v{n}")
        assert discovery.get_shard(key).get(key) == f"v{n}"


def test_key_lands_in_exactly_one_store():
    _, _, stores, client = _cluster(["a", "b"])
    discovery = ShardDiscoveryService(client, connect=stores.__getitem__)
    keys = [f"k{n}" for n in range(40)]
    for key in keys:
        discovery.get_shard(key).set(key, "v")
    for key in keys:
        holders = []
        for store in stores.values():
            try:
                store.get(key)
                holders.append(store)
            except Exception:
                pass
        assert len(holders) == 1