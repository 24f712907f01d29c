"""Embedding client for Ollama's ``/api/embeddings`` endpoint.

Every text is embedded with its own round trip; a batch fails as a whole
on the first bad item.  Vectors are checked against the configured
dimension and never padded or truncated.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import requests
from pydantic import BaseModel, StrictFloat, StrictInt, ValidationError

from doc_agent.config import settings
from doc_agent.errors import EmbeddingDimensionError, EmbeddingError

logger = logging.getLogger(__name__)


class _EmbeddingResponse(BaseModel):
    """Body of ``/api/embeddings``; strings and booleans are not numbers."""

    embedding: list[StrictInt | StrictFloat]


class OllamaEmbedder:
    """Map text to fixed-dimension vectors.

    Parameters
    ----------
    model:
        Embedding model identifier sent with every request.
    base_url:
        Ollama server root, e.g. ``http://localhost:11434``.
    dimension:
        Exact length every returned vector must have.
    timeout:
        Per-request timeout in seconds.
    session:
        Optional pre-configured :class:`requests.Session` (tests inject a mock).
    """

    def __init__(
        self,
        model: str = settings.embedding_model,
        *,
        base_url: str = settings.ollama_base_url,
        dimension: int = settings.embedding_dim,
        timeout: float = settings.request_timeout,
        session: requests.Session | None = None,
    ) -> None:
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.dimension = dimension
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/api/embeddings"

    def embed(self, texts: Sequence[str]) -> list[list[float]]:
        """Embed *texts* in order, one vector per input.

        Raises
        ------
        EmbeddingError
            On the first failing item; ``index`` holds its 0-based position
            and the original error is chained as ``__cause__``.
        """
        vectors: list[list[float]] = []
        for i, text in enumerate(texts):
            try:
                vectors.append(self._embed_one(text))
            except EmbeddingDimensionError as exc:
                raise EmbeddingDimensionError(exc.expected, exc.actual, index=i) from exc
            except EmbeddingError as exc:
                raise EmbeddingError(f"failed embedding chunk {i}: {exc}", index=i) from exc
        logger.debug("Embedded %d text(s) with %s", len(vectors), self.model)
        return vectors

    def embed_query(self, query: str) -> list[float]:
        """Embed a single query string; an empty query is rejected."""
        if not query:
            raise EmbeddingError("empty query")
        return self._embed_one(query)

    def _embed_one(self, text: str) -> list[float]:
        try:
            response = self.session.post(
                self.endpoint,
                json={"model": self.model, "prompt": text},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise EmbeddingError(f"request failed: {exc}") from exc

        if response.status_code != 200:
            raise EmbeddingError(f"ollama error ({response.status_code}): {response.text}")

        try:
            embedding = _EmbeddingResponse.model_validate(response.json()).embedding
        except (ValidationError, ValueError) as exc:
            raise EmbeddingError(f"failed to decode embedding response: {exc}") from exc

        if len(embedding) != self.dimension:
            raise EmbeddingDimensionError(self.dimension, len(embedding))
        return [float(x) for x in embedding]
