import pytest

from shardkv.coordination import CreateMode, InMemoryCoordinator, ZookeeperService
from shardkv.registration import RegistrationError, ShardRegistrar


@pytest.fixture
def coordinator():
    return InMemoryCoordinator()


def test_register_creates_ephemeral_node_under_shards(coordinator):
    service = ZookeeperService(coordinator)
    registrar = ShardRegistrar(service, hostname="db-0", server_address="db-0.addr")
    registrar.register_shard()
    assert service.get_children("/shards") == {"/shards/db-0": "db-0.addr"}
    service.close()
    assert coordinator.children("/shards") == []


def test_register_tolerates_existing_shards_root(coordinator):
    coordinator.create("/shards", "old", CreateMode.PERSISTENT)
    service = ZookeeperService(coordinator)
    ShardRegistrar(service, hostname="db-1", server_address="db-1.addr").register_shard()
    assert coordinator.get("/shards") == "old"
    assert coordinator.get("/shards/db-1") == "db-1.addr"


def test_register_fails_after_all_retries(coordinator):
    holder = ZookeeperService(coordinator)
    holder.create_znode("/shards", "", CreateMode.PERSISTENT)
    holder.create_znode("/shards/db-0", "other")
    delays = []
    service = ZookeeperService(coordinator)
    registrar = ShardRegistrar(
        service, hostname="db-0", server_address="db-0.addr", sleep=delays.append
    )
    with pytest.raises(RegistrationError, match="Failed to register node"):
        registrar.register_shard()
    assert delays == [2.0] * 5
    assert coordinator.get("/shards/db-0") == "other"


def test_register_succeeds_once_conflict_clears(coordinator):
    holder = ZookeeperService(coordinator)
    holder.create_znode("/shards", "", CreateMode.PERSISTENT)
    holder.create_znode("/shards/db-0", "other")
    delays = []

    def sleep(delay):
        delays.append(delay)
        holder.close()

    service = ZookeeperService(coordinator)
    ShardRegistrar(
        service, hostname="db-0", server_address="db-0.addr", sleep=sleep
    ).register_shard()
    assert delays == [2.0]
    assert coordinator.get("/shards/db-0") == "db-0.addr"


def test_custom_retry_settings_are_used(coordinator):
    holder = ZookeeperService(coordinator)
    holder.create_znode("/shards", "", CreateMode.PERSISTENT)
    holder.create_znode("/shards/db-0", "other")
    delays = []
    registrar = ShardRegistrar(
        ZookeeperService(coordinator),
        hostname="db-0",
        server_address="db-0.addr",
        max_retries=2,
        retry_delay=0.5,
        sleep=delays.append,
    )
    with pytest.raises(RegistrationError):
        registrar.register_shard()
    assert delays == [0.5, 0.5]