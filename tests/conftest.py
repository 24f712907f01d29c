"""Shared pytest configuration and fixtures.

External services are replaced by in-memory fakes so the whole suite runs
without Ollama, Chroma, poppler, or tesseract.
"""

from __future__ import annotations

import math
import threading
from collections.abc import Callable, Iterator
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from doc_agent.agent.llm import OllamaGenerator
from doc_agent.errors import VectorIndexError
from doc_agent.ingestion.embedder import OllamaEmbedder
from doc_agent.retrieval.base import VectorStoreBase
from doc_agent.retrieval.models import StoredDocument


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


# ── Fakes ──────────────────────────────────────────────────────────────


class FakeVectorStore(VectorStoreBase):
    """In-memory index ordering results by L2 distance, ties by insertion order.

    ``fail_on_inserts`` lists 0-based insert attempts that raise ``VectorIndexError``.
    """

    def __init__(self, fail_on_inserts: set[int] | None = None) -> None:
        super().__init__("test-collection")
        self.rows: list[tuple[StoredDocument, list[float]]] = []
        self.queries: list[tuple[list[float], int]] = []
        self._fail_on_inserts = fail_on_inserts or set()
        self._insert_attempts = 0
        self._lock = threading.Lock()

    def insert(self, filename: str, source: str, content: str, embedding: list[float]) -> str:
        with self._lock:
            attempt = self._insert_attempts
            self._insert_attempts += 1
            if attempt in self._fail_on_inserts:
                raise VectorIndexError("disk full")
            doc = StoredDocument(id=uuid4().hex, filename=filename, source=source, content=content)
            self.rows.append((doc, list(embedding)))
            return doc.id

    def query_similar(self, embedding: list[float], k: int) -> list[StoredDocument]:
        self.queries.append((list(embedding), k))
        scored = [
            doc.model_copy(update={"distance": math.dist(embedding, vec)})
            for doc, vec in self.rows
        ]
        scored.sort(key=lambda d: d.distance)
        return scored[:k]

    def health_check(self) -> bool:
        return True


class FakeEmbedder(OllamaEmbedder):
    """Embedder whose vectors come from a Python function instead of HTTP."""

    def __init__(self, fn: Callable[[str], list[float]] | None = None, dimension: int = 3) -> None:
        super().__init__("fake-embed", dimension=dimension, session=MagicMock())
        self._fn = fn or (lambda text: [float(len(text)), 0.0, 0.0])
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def _embed_one(self, text: str) -> list[float]:
        with self._lock:
            self.calls.append(text)
        return self._fn(text)


class FakeGenerator(OllamaGenerator):
    """Generator replaying canned fragments and recording prompts."""

    def __init__(self, fragments: list[str] | None = None) -> None:
        super().__init__("fake-llm", session=MagicMock())
        self.fragments = fragments if fragments is not None else ["A grounded ", "answer."]
        self.prompts: list[str] = []

    def stream(self, prompt: str, *, cancel: threading.Event | None = None) -> Iterator[str]:
        self.prompts.append(prompt)
        yield from self.fragments


# ── Fixtures ───────────────────────────────────────────────────────────


@pytest.fixture()
def fake_store() -> FakeVectorStore:
    return FakeVectorStore()


@pytest.fixture()
def fake_embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture()
def fake_generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture()
def make_response() -> Callable[..., MagicMock]:
    """Factory for mock ``requests.Response`` objects."""

    def _make(
        status_code: int = 200,
        json_data: object = None,
        text: str = "",
        lines: list[bytes] | None = None,
    ) -> MagicMock:
        resp = MagicMock()
        resp.status_code = status_code
        resp.text = text
        resp.json.return_value = json_data
        resp.iter_lines.return_value = iter(lines or [])
        return resp

    return _make
