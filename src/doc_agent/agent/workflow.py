"""The answer workflow — a fixed list of stages applied in order.

::

    retrieve ──► summarize ──► critique ──► finalize

No branching, no retry.  The first stage that raises aborts the rest and
its exception reaches the caller as-is.  An empty retrieval is not a
failure: summarize short-circuits to a fixed message.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from doc_agent.agent.llm import OllamaGenerator
from doc_agent.agent.nodes import critique, finalize, retrieve, summarize
from doc_agent.agent.state import WorkflowState
from doc_agent.retrieval.retriever import Retriever

logger = logging.getLogger(__name__)

Stage = Callable[[WorkflowState], None]

STAGES: tuple[Stage, ...] = (retrieve, summarize, critique, finalize)


def run_workflow(state: WorkflowState, stages: tuple[Stage, ...] = STAGES) -> WorkflowState:
    """Apply every stage to *state* in order and return it."""
    for stage in stages:
        logger.debug("Running stage %s", stage.__name__)
        stage(state)
    return state


def create_initial_state(
    query: str,
    *,
    retriever: Retriever | None = None,
    generator: OllamaGenerator | None = None,
    cancel: threading.Event | None = None,
) -> WorkflowState:
    """Build a fresh state, creating default components from settings when omitted.

    Usage::

        state = create_initial_state("What changed in the 2024 lease?")
        run_workflow(state)
        print(state.answer)
    """
    return WorkflowState(
        query=query,
        retriever=retriever or Retriever(),
        generator=generator or OllamaGenerator(),
        cancel=cancel,
    )


def answer_query(
    query: str,
    *,
    retriever: Retriever | None = None,
    generator: OllamaGenerator | None = None,
    cancel: threading.Event | None = None,
) -> str:
    """Run the full workflow for *query* and return the final answer text."""
    state = create_initial_state(query, retriever=retriever, generator=generator, cancel=cancel)
    return run_workflow(state).answer
