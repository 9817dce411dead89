from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from archaeolog.config import settings
from archaeolog.core.models.artifact import Artifact
from archaeolog.core.repositories.implementations.memory.key_value_store import InMemoryKeyValueStore
from archaeolog.core.services.vocabulary_service import VocabularyManager
from archaeolog.dependencies import get_key_value_store, get_vocabulary_manager


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def manager(store):
    return VocabularyManager(store)


@pytest.fixture
def make_artifact():
    """Build an Artifact with sensible defaults; keyword overrides use field names."""
    counter = {"n": 0}

    def _make(**overrides) -> Artifact:
        counter["n"] += 1
        data = {
            "id": f"a{counter['n']}",
            "site_name": "二里头遗址",
            "name": f"陶罐{counter['n']}",
            "created_at": 1_700_000_000_000 + counter["n"],
        }
        data.update(overrides)
        return Artifact.model_validate(data)

    return _make


@pytest.fixture
def data_root(tmp_path, monkeypatch):
    """Point every storage path at a temporary directory."""
    monkeypatch.setattr(settings, "data_root", tmp_path)
    get_key_value_store.cache_clear()
    get_vocabulary_manager.cache_clear()
    yield tmp_path
    get_key_value_store.cache_clear()
    get_vocabulary_manager.cache_clear()


@pytest.fixture
def client(data_root):
    from archaeolog.main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client
