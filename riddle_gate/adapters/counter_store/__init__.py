"""Counter store adapters.

The rate limiter only needs an atomic "increment with expiry" and a "time left"
query. This package provides that capability over an in-process table, a
direct Redis connection and the Upstash REST API, selected by configuration.
"""

from riddle_gate.adapters.counter_store.base import AbstractCounterStore
from riddle_gate.adapters.counter_store.factory import create_counter_store
from riddle_gate.adapters.counter_store.in_memory import InMemoryCounterStore
from riddle_gate.adapters.counter_store.redis_store import RedisCounterStore
from riddle_gate.adapters.counter_store.upstash import UpstashCounterStore

__all__ = [
    "AbstractCounterStore",
    "InMemoryCounterStore",
    "RedisCounterStore",
    "UpstashCounterStore",
    "create_counter_store",
]
