"""
pytest configuration and fixtures.
"""

import asyncio
from typing import Any, Dict, List

import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from in_memory_web_api import BackendConfig, InMemoryBackendService
from in_memory_web_api.core.store import CollectionStore


def heroes_seed() -> Dict[str, List[Dict[str, Any]]]:
    """Two heroes and an (initially empty) villains collection."""
    return {
        "heroes": [
            {"id": 1, "name": "Windstorm"},
            {"id": 2, "name": "Bombasto"},
        ],
        "villains": [],
    }


def run(coro):
    """Drive one coroutine of the async client API to completion."""
    return asyncio.run(coro)


@pytest.fixture
def seed():
    """The seed factory itself."""
    return heroes_seed


@pytest.fixture
def config() -> BackendConfig:
    """Default test configuration."""
    return BackendConfig()


@pytest.fixture
def store() -> CollectionStore:
    """A store seeded with heroes."""
    return CollectionStore(heroes_seed)


@pytest.fixture
def service(config: BackendConfig) -> InMemoryBackendService:
    """A backend service seeded with heroes."""
    return InMemoryBackendService(heroes_seed, config)
