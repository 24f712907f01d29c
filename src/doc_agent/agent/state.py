"""Workflow state — the single record threaded through every stage.

The state is owned by whichever stage is running; stages run one after
another and mutate it in place.  It lives for one query and is never
persisted.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass

from doc_agent.agent.llm import OllamaGenerator
from doc_agent.retrieval.retriever import Retriever


@dataclass
class WorkflowState:
    """Mutable per-query context.

    Attributes
    ----------
    query:
        The user's natural-language question.
    retriever:
        Search capability used by the retrieve stage.
    generator:
        Streaming generation client used by the summarize stage.
    docs:
        Retrieved document texts; ``None`` until the retrieve stage ran.
    answer:
        Answer text; empty until summarize/critique ran.
    cancel:
        Optional event that aborts the streaming summarize stage when set.
    """

    query: str
    retriever: Retriever
    generator: OllamaGenerator
    docs: list[str] | None = None
    answer: str = ""
    cancel: threading.Event | None = None
