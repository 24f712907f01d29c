"""
Ingestion — text extraction, chunking, and embedding into the vector store.

This module is responsible for the ETL-like pipeline that converts raw
files (plain text, Markdown, PDF, images) into embedded chunks stored in
a vector index.  One bad file never aborts a batch: every file ends up as
a :class:`~doc_agent.ingestion.models.FileResult` in the batch report.
"""
