"""Abstract base class for vector-index backends.

Adding a new backend (pgvector, Qdrant …) only requires subclassing
:class:`VectorStoreBase` and implementing the three abstract methods.
Backends are treated as opaque remote calls: no caching, no retry.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from doc_agent.retrieval.models import StoredDocument


class VectorStoreBase(ABC):
    """Backend-agnostic vector-index interface.

    Parameters
    ----------
    collection_name:
        Logical name of the collection / table / namespace.
    """

    def __init__(self, collection_name: str) -> None:
        self.collection_name = collection_name

    @abstractmethod
    def insert(self, filename: str, source: str, content: str, embedding: list[float]) -> str:
        """Persist one chunk and return its backend-assigned identifier.

        Raises
        ------
        VectorIndexError
            The backend rejected the write.
        """
        ...

    @abstractmethod
    def query_similar(self, embedding: list[float], k: int) -> list[StoredDocument]:
        """Return at most *k* stored chunks ordered by ascending distance to *embedding*.

        Fewer than *k* results are returned when the index holds fewer
        documents.

        Raises
        ------
        VectorIndexError
            The backend query failed.
        """
        ...

    @abstractmethod
    def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable and ready."""
        ...
