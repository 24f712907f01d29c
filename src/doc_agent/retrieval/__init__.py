"""
Retrieval — vector index contract, Chroma backend, and query-time retriever.

Public surface
--------------
- :class:`Retriever` — embeds a query and fetches the nearest chunks.
- :class:`VectorStoreBase` — abstract vector index (subclass for pgvector, etc.).
- :class:`ChromaVectorStore` — default Chroma backend.
- :class:`StoredDocument` — a persisted chunk as returned by a query.
"""

from doc_agent.retrieval.base import VectorStoreBase
from doc_agent.retrieval.models import StoredDocument
from doc_agent.retrieval.retriever import Retriever

__all__ = [
    "ChromaVectorStore",
    "Retriever",
    "StoredDocument",
    "VectorStoreBase",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import ChromaVectorStore to avoid pulling in chromadb at import time."""
    if name == "ChromaVectorStore":
        from doc_agent.retrieval.chroma_store import ChromaVectorStore

        return ChromaVectorStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
