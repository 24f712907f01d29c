"""Result records produced by the ingestion pipeline."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class FileStatus(str, Enum):
    INDEXED = "indexed"
    PARTIAL = "partial"
    SKIPPED = "skipped"


class FileResult(BaseModel):
    """Outcome of ingesting one file.

    Attributes
    ----------
    path:
        The file that was processed.
    status:
        ``indexed`` when every chunk was stored, ``partial`` when some
        inserts failed but at least one chunk was stored, ``skipped`` when
        nothing was stored.
    chunks_stored:
        Number of chunks persisted.
    chunks_failed:
        Number of chunks whose insert was rejected by the index.
    reason:
        Why the file was skipped or only partially stored (empty otherwise).
    """

    path: str
    status: FileStatus
    chunks_stored: int = 0
    chunks_failed: int = 0
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.status is FileStatus.INDEXED

    @classmethod
    def indexed(cls, path: str, chunks_stored: int) -> FileResult:
        return cls(path=path, status=FileStatus.INDEXED, chunks_stored=chunks_stored)

    @classmethod
    def partial(cls, path: str, chunks_stored: int, chunks_failed: int, reason: str) -> FileResult:
        return cls(
            path=path,
            status=FileStatus.PARTIAL,
            chunks_stored=chunks_stored,
            chunks_failed=chunks_failed,
            reason=reason,
        )

    @classmethod
    def skipped(cls, path: str, reason: str, chunks_failed: int = 0) -> FileResult:
        return cls(path=path, status=FileStatus.SKIPPED, chunks_failed=chunks_failed, reason=reason)


class IngestionReport(BaseModel):
    """Per-file results of one ingestion pass, in input order."""

    results: list[FileResult] = Field(default_factory=list)

    @property
    def indexed(self) -> list[FileResult]:
        return [r for r in self.results if r.status is FileStatus.INDEXED]

    @property
    def partial(self) -> list[FileResult]:
        return [r for r in self.results if r.status is FileStatus.PARTIAL]

    @property
    def skipped(self) -> list[FileResult]:
        return [r for r in self.results if r.status is FileStatus.SKIPPED]

    @property
    def total_chunks(self) -> int:
        return sum(r.chunks_stored for r in self.results)

    def summary(self) -> str:
        """One-line human summary, e.g. ``"Indexed 3/4 file(s), 12 chunk(s); skipped 1"``.

        Partially stored files are appended as ``"; partial N"`` when present.
        """
        line = (
            f"Indexed {len(self.indexed)}/{len(self.results)} file(s), "
            f"{self.total_chunks} chunk(s); skipped {len(self.skipped)}"
        )
        if self.partial:
            line += f"; partial {len(self.partial)}"
        return line
