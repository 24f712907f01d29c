"""Exception hierarchy shared by every layer.

Callers that want to contain failures (the per-file ingestion loop, the
HTTP surface) catch :class:`DocAgentError`; everything else propagates.
"""

from __future__ import annotations


class DocAgentError(Exception):
    """Base class for all domain errors."""


class ExtractionError(DocAgentError):
    """A file could not be turned into text."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class UnsupportedFileTypeError(ExtractionError):
    """The file extension has no extraction strategy."""


class EmbeddingError(DocAgentError):
    """The embedding backend failed or returned an unusable vector.

    ``index`` is the 0-based position of the failing item when the error
    was raised while embedding a batch.
    """

    def __init__(self, message: str, *, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index


class EmbeddingDimensionError(EmbeddingError):
    """A vector's length differs from the configured embedding dimension."""

    def __init__(self, expected: int, actual: int, *, index: int | None = None) -> None:
        super().__init__(f"expected embedding dim {expected}, got {actual}", index=index)
        self.expected = expected
        self.actual = actual


class VectorIndexError(DocAgentError):
    """Insert or similarity query against the vector index failed."""


class GenerationError(DocAgentError):
    """The generation backend failed or its stream could not be decoded."""


class GenerationCancelledError(GenerationError):
    """The caller cancelled a streaming generation before completion."""
