"""Domain model for chunks persisted in the vector index."""

from __future__ import annotations

from pydantic import BaseModel


class StoredDocument(BaseModel):
    """A persisted chunk as returned by a similarity query.

    The embedding itself is not carried back; only provenance and text.

    Attributes
    ----------
    id:
        Backend-assigned identifier.
    filename:
        Path of the file the chunk was extracted from.  Not unique: two
        files sharing a name cannot be told apart downstream.
    source:
        Source tag declared at ingestion time (e.g. ``"local"``).
    content:
        The chunk text.
    distance:
        Distance to the query vector, when the backend reports it.
    """

    id: str
    filename: str
    source: str
    content: str
    distance: float | None = None

    def as_context(self) -> str:
        """Render the chunk the way it is fed to the summarizer."""
        return f"File: {self.filename}\n{self.content}"
