"""
=============================================================================
IN-MEMORY COLLECTION STORE
=============================================================================

Holds the backend's database: collection name → ordered list of records.

=============================================================================
DATABASE LAYOUT
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │  CollectionStore                                                    │
    │                                                                      │
    │   "heroes" ──► Collection ──► [ {"id": 1, "name": "Windstorm"},     │
    │                                 {"id": 2, "name": "Bombasto"},      │
    │                                 ... ]                               │
    │                                                                      │
    │   "villains" ► Collection ──► [ ... ]                               │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

The store is created from a zero-argument seed factory and can be reset
to the factory's output at any time. The factory result is deep-copied,
so mutations never leak back into data the factory shares.

Lookups scan linearly and the first record whose id passes same_id() wins; record
order is the insertion order.

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional
import copy
import logging

from .ids import same_id


logger = logging.getLogger(__name__)


Record = Dict[str, Any]
SeedFactory = Callable[[], Mapping[str, List[Record]]]


@dataclass
class Collection:
    """A named, ordered list of records."""

    name: str
    records: List[Record] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def __str__(self) -> str:
        return self.name

    # =========================================================================
    # MUTATION
    # =========================================================================
    # The CRUD handler changes records only through these three methods.

    def append(self, record: Record) -> None:
        self.records.append(record)

    def replace_at(self, index: int, record: Record) -> None:
        self.records[index] = record

    def remove_at(self, index: int) -> Record:
        return self.records.pop(index)


class CollectionStore:
    """
    The database of one backend service.

    Usage:
        store = CollectionStore(lambda: {"heroes": [{"id": 1, "name": "Windstorm"}]})
        heroes = store.lookup("heroes")
        store.find_by_id(heroes, 1)   # {"id": 1, "name": "Windstorm"}
        store.reset()                 # back to the seed data
    """

    def __init__(self, seed_data: SeedFactory):
        if not callable(seed_data):
            raise TypeError(
                f"seed_data must be a zero-argument callable, got {type(seed_data).__name__}"
            )
        self._seed_data = seed_data
        self._collections: Dict[str, Collection] = {}
        self.reset()

    def reset(self) -> None:
        """Replace the whole database with a fresh copy of the seed data."""
        seed = copy.deepcopy(self._seed_data())
        self._collections = {
            name: Collection(name, list(records or []))
            for name, records in seed.items()
        }
        logger.debug(f"Database reset: {len(self._collections)} collection(s)")

    def lookup(self, name: Optional[str]) -> Optional[Collection]:
        """The collection called `name`, or None when there is none."""
        if name is None:
            return None
        return self._collections.get(name)

    def collection_names(self) -> List[str]:
        return list(self._collections)

    def snapshot(self) -> Dict[str, List[Record]]:
        """A deep copy of the current database, in seed-data shape."""
        return {
            name: copy.deepcopy(collection.records)
            for name, collection in self._collections.items()
        }

    def __contains__(self, name: str) -> bool:
        return name in self._collections

    def __len__(self) -> int:
        return len(self._collections)

    # =========================================================================
    # RECORD LOOKUP
    # =========================================================================

    @staticmethod
    def index_of(collection: Collection, record_id: Any) -> int:
        """Position of the first record whose id equals `record_id`, or -1."""
        for index, record in enumerate(collection.records):
            if isinstance(record, dict) and "id" in record and same_id(record["id"], record_id):
                return index
        return -1

    @staticmethod
    def find_by_id(collection: Collection, record_id: Any) -> Optional[Record]:
        """
        First record whose id equals `record_id`.

        Records without an id, and entries that are not mappings at all,
        are skipped rather than treated as errors.
        """
        index = CollectionStore.index_of(collection, record_id)
        return collection.records[index] if index > -1 else None
