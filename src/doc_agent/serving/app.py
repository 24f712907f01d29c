"""FastAPI application exposing the document agent as a REST API."""

from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field

from doc_agent.agent.llm import OllamaGenerator
from doc_agent.agent.workflow import create_initial_state, run_workflow
from doc_agent.errors import DocAgentError
from doc_agent.ingestion.embedder import OllamaEmbedder
from doc_agent.ingestion.models import IngestionReport
from doc_agent.ingestion.pipeline import ingest_files
from doc_agent.retrieval.base import VectorStoreBase
from doc_agent.retrieval.retriever import Retriever

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Unified Doc Agent API",
    version="0.1.0",
    description="Index local documents and answer questions grounded in them.",
)


# ── Request / Response schemas ────────────────────────────────────────
class QueryRequest(BaseModel):
    """Incoming question from the user."""

    query: str


class QueryResponse(BaseModel):
    """Answer returned by the workflow."""

    answer: str
    documents: list[str] = []


class IngestRequest(BaseModel):
    """Files to index."""

    paths: list[str] = Field(min_length=1)


# ── Dependencies ──────────────────────────────────────────────────────
@lru_cache
def get_store() -> VectorStoreBase:
    from doc_agent.retrieval.chroma_store import ChromaVectorStore

    return ChromaVectorStore()


@lru_cache
def get_embedder() -> OllamaEmbedder:
    return OllamaEmbedder()


@lru_cache
def get_generator() -> OllamaGenerator:
    return OllamaGenerator()


# ── Routes ────────────────────────────────────────────────────────────
@app.get("/health")
def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}


@app.post("/query", response_model=QueryResponse)
def query(
    request: QueryRequest,
    store: VectorStoreBase = Depends(get_store),
    embedder: OllamaEmbedder = Depends(get_embedder),
    generator: OllamaGenerator = Depends(get_generator),
) -> QueryResponse:
    """Run the answer workflow and return the final text."""
    if not request.query.strip():
        raise HTTPException(status_code=400, detail="empty query")

    state = create_initial_state(
        request.query,
        retriever=Retriever(store, embedder),
        generator=generator,
    )
    try:
        run_workflow(state)
    except DocAgentError as exc:
        logger.exception("Workflow failed")
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    return QueryResponse(answer=state.answer, documents=state.docs or [])


@app.post("/ingest", response_model=IngestionReport)
def ingest(
    request: IngestRequest,
    store: VectorStoreBase = Depends(get_store),
    embedder: OllamaEmbedder = Depends(get_embedder),
) -> IngestionReport:
    """Index the given files; failures are reported per file, not raised."""
    return ingest_files(request.paths, embedder=embedder, store=store)
