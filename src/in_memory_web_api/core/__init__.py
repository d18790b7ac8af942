"""
Core building blocks of the in-memory backend: the collection store, id
resolution and simulated latency.
"""

from .store import Collection, CollectionStore, Record, SeedFactory
from .ids import RecordId, generate_id, parse_id, same_id
from .latency import LatencySimulator

__all__ = [
    "Collection",
    "CollectionStore",
    "Record",
    "SeedFactory",
    "RecordId",
    "generate_id",
    "parse_id",
    "same_id",
    "LatencySimulator",
]
