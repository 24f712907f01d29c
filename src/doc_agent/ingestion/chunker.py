"""Text chunking — paragraph split, then overlapping fixed-size windows."""

from __future__ import annotations

import re

from doc_agent.config import settings

_PARAGRAPH_BREAK = re.compile(r"\n{2,}")


def chunk_text(
    text: str,
    chunk_size: int = settings.chunk_size,
    chunk_overlap: int = settings.chunk_overlap,
) -> list[str]:
    """Split *text* into ordered chunks for embedding.

    The text is first split on runs of two or more newlines.  Each
    trimmed, non-empty paragraph becomes one chunk if it fits in
    *chunk_size*; longer paragraphs go through :func:`split_long`.

    Parameters
    ----------
    text:
        Extracted document text.
    chunk_size:
        Maximum number of characters per chunk.
    chunk_overlap:
        Number of characters shared by consecutive windows of a long
        paragraph.  Must be smaller than *chunk_size*.

    Returns
    -------
    list[str]
        Chunks in source order; never contains empty or whitespace-only
        entries.  An empty document yields ``[]``.
    """
    _validate(chunk_size, chunk_overlap)
    chunks: list[str] = []
    for paragraph in _PARAGRAPH_BREAK.split(text):
        paragraph = paragraph.strip()
        if not paragraph:
            continue
        chunks.extend(split_long(paragraph, chunk_size, chunk_overlap))
    return chunks


def split_long(text: str, chunk_size: int, chunk_overlap: int) -> list[str]:
    """Cut *text* into windows of *chunk_size* starting every ``size - overlap`` chars.

    Text at or under *chunk_size* is returned untouched as a single chunk.
    """
    _validate(chunk_size, chunk_overlap)
    if len(text) <= chunk_size:
        return [text]

    step = chunk_size - chunk_overlap
    windows: list[str] = []
    for start in range(0, len(text), step):
        end = min(start + chunk_size, len(text))
        window = text[start:end].strip()
        if window:
            windows.append(window)
        if end == len(text):
            break
    return windows


def _validate(chunk_size: int, chunk_overlap: int) -> None:
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    if not 0 <= chunk_overlap < chunk_size:
        raise ValueError(
            f"chunk_overlap must be in [0, chunk_size), got {chunk_overlap} for chunk_size {chunk_size}"
        )
