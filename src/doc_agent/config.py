"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file."""

    # Ollama backends
    ollama_base_url: str = Field(
        default="http://localhost:11434",
        description="Base URL of the Ollama server serving embeddings and generation.",
    )
    embedding_model: str = "nomic-embed-text"
    embedding_dim: int = Field(default=768, gt=0, description="Exact length of every embedding vector")
    llm_model_name: str = "llama3"
    request_timeout: float = Field(default=60.0, gt=0, description="Seconds per embedding round trip")
    generation_timeout: float = Field(
        default=300.0,
        gt=0,
        description="Read timeout (seconds) while waiting for the next streamed fragment",
    )

    # Chunking
    chunk_size: int = Field(default=1000, gt=0)
    chunk_overlap: int = Field(default=200, ge=0)

    # Retrieval / ingestion
    top_k: int = Field(default=5, gt=0)
    source_tag: str = "local"
    ingest_workers: int = Field(default=1, ge=1)

    # Vector store
    chroma_host: str = "localhost"
    chroma_port: int = 8000
    chroma_collection: str = "documents"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @model_validator(mode="after")
    def _check_chunk_overlap(self) -> Settings:
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be smaller than chunk_size ({self.chunk_size})"
            )
        return self


# Singleton — import `settings` wherever needed.
settings = Settings()
