"""Ingestion pipeline — extract → chunk → embed → insert, one file at a time.

Each file's steps run strictly in order.  Files are independent: a
failure is recorded as a skipped :class:`FileResult` and the batch goes
on.  A rejected insert is logged and the file's remaining chunks are still
stored; such a file is reported as ``partial``.  With ``workers > 1`` files are processed on a thread pool; the index
does not depend on insertion order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from doc_agent.config import settings
from doc_agent.errors import DocAgentError
from doc_agent.ingestion.chunker import chunk_text
from doc_agent.ingestion.embedder import OllamaEmbedder
from doc_agent.ingestion.loader import extract_text, iter_supported_files
from doc_agent.ingestion.models import FileResult, IngestionReport
from doc_agent.retrieval.base import VectorStoreBase

logger = logging.getLogger(__name__)


def ingest_file(
    path: str | Path,
    *,
    embedder: OllamaEmbedder,
    store: VectorStoreBase,
    source: str = settings.source_tag,
    chunk_size: int = settings.chunk_size,
    chunk_overlap: int = settings.chunk_overlap,
) -> FileResult:
    """Index one file and report what happened.

    Only :class:`~doc_agent.errors.DocAgentError` is contained; any other
    exception is a bug and propagates.
    """
    filename = str(path)
    logger.info("Indexing: %s", filename)

    try:
        text = extract_text(path)
        chunks = chunk_text(text, chunk_size=chunk_size, chunk_overlap=chunk_overlap)
        if not chunks:
            return _skip(filename, "no chunks produced")
        vectors = embedder.embed(chunks)
    except DocAgentError as exc:
        return _skip(filename, str(exc))

    stored = 0
    failures: list[str] = []
    for i, (chunk, vector) in enumerate(zip(chunks, vectors)):
        try:
            store.insert(filename, source, chunk, vector)
        except DocAgentError as exc:
            logger.warning("Insert of chunk %d from %s failed: %s", i, filename, exc)
            failures.append(f"chunk {i}: {exc}")
            continue
        stored += 1

    if failures:
        reason = f"{len(failures)} insert(s) failed; first: {failures[0]}"
        if not stored:
            return _skip(filename, reason, len(failures))
        logger.warning("Partially indexed %s (%d stored, %d failed)", filename, stored, len(failures))
        return FileResult.partial(filename, stored, len(failures), reason)

    logger.info("Indexed %s (%d chunk(s))", filename, stored)
    return FileResult.indexed(filename, stored)


def ingest_files(
    paths: Iterable[str | Path],
    *,
    embedder: OllamaEmbedder,
    store: VectorStoreBase,
    source: str = settings.source_tag,
    chunk_size: int = settings.chunk_size,
    chunk_overlap: int = settings.chunk_overlap,
    workers: int = settings.ingest_workers,
) -> IngestionReport:
    """Index every path and collect the per-file results in input order."""
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")

    def _one(path: str | Path) -> FileResult:
        return ingest_file(
            path,
            embedder=embedder,
            store=store,
            source=source,
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
        )

    paths = list(paths)
    if workers == 1:
        results = [_one(p) for p in paths]
    else:
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="ingest") as pool:
            results = list(pool.map(_one, paths))

    report = IngestionReport(results=results)
    logger.info(report.summary())
    return report


def ingest_folder(
    root: str | Path,
    *,
    embedder: OllamaEmbedder | None = None,
    store: VectorStoreBase | None = None,
    workers: int = settings.ingest_workers,
) -> IngestionReport:
    """Index every supported file under *root* with default components."""
    if store is None:
        from doc_agent.retrieval.chroma_store import ChromaVectorStore

        store = ChromaVectorStore()
    logger.info("Starting indexing: %s", root)
    return ingest_files(
        iter_supported_files(root),
        embedder=embedder or OllamaEmbedder(),
        store=store,
        workers=workers,
    )


def _skip(filename: str, reason: str, failed: int = 0) -> FileResult:
    logger.warning("Skipping %s: %s", filename, reason)
    return FileResult.skipped(filename, reason, failed)
