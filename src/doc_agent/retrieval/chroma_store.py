"""Chroma implementation of the vector-index abstraction."""

from __future__ import annotations

import logging
from typing import Any
from uuid import uuid4

import chromadb

from doc_agent.config import settings
from doc_agent.errors import VectorIndexError
from doc_agent.retrieval.base import VectorStoreBase
from doc_agent.retrieval.models import StoredDocument

logger = logging.getLogger(__name__)


class ChromaVectorStore(VectorStoreBase):
    """Chroma-backed vector index using L2 distance.

    Parameters
    ----------
    collection_name:
        Name of the Chroma collection.
    host:
        Chroma server hostname.
    port:
        Chroma server port.
    client:
        Optional pre-built Chroma client (e.g. ``chromadb.EphemeralClient()``);
        when given, *host* and *port* are ignored.
    """

    def __init__(
        self,
        collection_name: str = settings.chroma_collection,
        *,
        host: str = settings.chroma_host,
        port: int = settings.chroma_port,
        client: Any | None = None,
    ) -> None:
        super().__init__(collection_name)
        self._client = client if client is not None else chromadb.HttpClient(host=host, port=port)
        self._collection = self._client.get_or_create_collection(
            collection_name,
            metadata={"hnsw:space": "l2"},
        )

    # -- VectorStoreBase overrides --------------------------------------------

    def insert(self, filename: str, source: str, content: str, embedding: list[float]) -> str:
        doc_id = uuid4().hex
        try:
            self._collection.add(
                ids=[doc_id],
                embeddings=[embedding],
                documents=[content],
                metadatas=[{"filename": filename, "source": source}],
            )
        except Exception as exc:
            raise VectorIndexError(f"insert into {self.collection_name!r} failed: {exc}") from exc
        return doc_id

    def query_similar(self, embedding: list[float], k: int) -> list[StoredDocument]:
        try:
            results = self._collection.query(
                query_embeddings=[embedding],
                n_results=k,
                include=["documents", "metadatas", "distances"],
            )
        except Exception as exc:
            raise VectorIndexError(f"query on {self.collection_name!r} failed: {exc}") from exc

        ids = (results.get("ids") or [[]])[0]
        docs = (results.get("documents") or [[]])[0]
        metas = (results.get("metadatas") or [[]])[0]
        distances = (results.get("distances") or [[]])[0]

        hits: list[StoredDocument] = []
        for doc_id, content, meta, dist in zip(ids, docs, metas, distances):
            meta = meta or {}
            hits.append(
                StoredDocument(
                    id=doc_id,
                    filename=meta.get("filename", "unknown"),
                    source=meta.get("source", "unknown"),
                    content=content or "",
                    distance=dist,
                )
            )
        return hits

    def health_check(self) -> bool:
        try:
            self._client.heartbeat()
            return True
        except Exception:
            logger.warning("Chroma health-check failed", exc_info=True)
            return False
