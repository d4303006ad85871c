"""A sharded in-memory key-value store with shard registration and key-based routing."""

__version__ = "0.1.0"