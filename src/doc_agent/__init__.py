"""
Unified document agent — ingest local files, answer questions over them.

Sub-packages
------------
- :mod:`doc_agent.ingestion` — extraction, chunking, embedding, indexing.
- :mod:`doc_agent.retrieval` — vector index contract and retriever.
- :mod:`doc_agent.agent` — the retrieve → summarize → critique → finalize workflow.
- :mod:`doc_agent.serving` — FastAPI surface.
"""

__version__ = "0.1.0"
