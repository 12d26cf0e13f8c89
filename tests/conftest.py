# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-12
# Description: conftest.py
# -----------------------------------------------------------------------------

import sys
from pathlib import Path

import pytest

# add project root (and tests/ for the shared fakes) to sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))
sys.path.insert(0, str(Path(__file__).resolve().parent))

from kb_fakes import FakeChat, FakeEmbedder  # noqa: E402
from services.KBSearchService import KBSearchService  # noqa: E402
from services.KBSourceService import KBSourceService  # noqa: E402
from store.InMemoryKBSourceStore import InMemoryKBSourceStore  # noqa: E402


@pytest.fixture
def embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture
def store() -> InMemoryKBSourceStore:
    return InMemoryKBSourceStore()


@pytest.fixture
def search_service(embedder, store) -> KBSearchService:
    return KBSearchService(embedder=embedder, store=store)


@pytest.fixture
def source_service(embedder, store) -> KBSourceService:
    return KBSourceService(store=store, embedder=embedder)


@pytest.fixture
def chat() -> FakeChat:
    return FakeChat(response="Grounded answer.")
