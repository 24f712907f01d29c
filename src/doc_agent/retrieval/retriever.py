"""Query-time retriever — embed the question, fetch the nearest chunks.

Usage::

    from doc_agent.retrieval.retriever import Retriever

    retriever = Retriever()
    for text in retriever.retrieve("What did the Q3 report say about churn?"):
        print(text[:80])
"""

from __future__ import annotations

import logging

from doc_agent.config import settings
from doc_agent.ingestion.embedder import OllamaEmbedder
from doc_agent.retrieval.base import VectorStoreBase
from doc_agent.retrieval.models import StoredDocument

logger = logging.getLogger(__name__)


class Retriever:
    """Wrap an embedder and any :class:`VectorStoreBase` behind one search call.

    Parameters
    ----------
    store:
        A concrete vector-index backend.  When *None*, a default
        :class:`~doc_agent.retrieval.chroma_store.ChromaVectorStore`
        is created from the global settings.
    embedder:
        Query embedder.  Defaults to an :class:`OllamaEmbedder` built
        from settings.
    default_k:
        Default number of results.
    """

    def __init__(
        self,
        store: VectorStoreBase | None = None,
        embedder: OllamaEmbedder | None = None,
        *,
        default_k: int = settings.top_k,
    ) -> None:
        if store is None:
            from doc_agent.retrieval.chroma_store import ChromaVectorStore

            store = ChromaVectorStore()
        self._store = store
        self._embedder = embedder or OllamaEmbedder()
        self.default_k = default_k

    def search(self, query: str, *, k: int | None = None) -> list[StoredDocument]:
        """Return the *k* stored chunks closest to *query*, nearest first.

        Embedding and index errors propagate unchanged.
        """
        k = k or self.default_k
        embedding = self._embedder.embed_query(query)
        hits = self._store.query_similar(embedding, k)
        logger.info("Retrieved %d document(s) for %r", len(hits), query)
        return hits

    def retrieve(self, query: str, *, k: int | None = None) -> list[str]:
        """Same as :meth:`search` but rendered as ``"File: …\\n<content>"`` strings."""
        return [hit.as_context() for hit in self.search(query, k=k)]
