"""Workflow stages — each function is one step of the answer workflow.

Stage contract
--------------
* Accepts the :class:`WorkflowState` and mutates it in place.
* Returns ``None`` on success; raises on failure.  The runner stops at
  the first exception and lets it reach the caller unchanged.
"""

from __future__ import annotations

import logging

from doc_agent.agent.prompts import NO_DOCUMENTS_MESSAGE, SHORT_ANSWER_NOTE, build_summary_prompt
from doc_agent.agent.state import WorkflowState
from doc_agent.config import settings

logger = logging.getLogger(__name__)

MIN_ANSWER_LENGTH = 50


# ── 1. RETRIEVE ───────────────────────────────────────────────────────


def retrieve(state: WorkflowState) -> None:
    """Embed the query and store the top-k document texts in ``state.docs``."""
    state.docs = state.retriever.retrieve(state.query, k=settings.top_k)


# ── 2. SUMMARIZE ──────────────────────────────────────────────────────


def summarize(state: WorkflowState) -> None:
    """Stream a grounded answer from the generation backend.

    With no retrieved documents the answer is the fixed
    :data:`NO_DOCUMENTS_MESSAGE` and the backend is never called.
    """
    if not state.docs:
        logger.info("No documents retrieved for %r", state.query)
        state.answer = NO_DOCUMENTS_MESSAGE
        return

    prompt = build_summary_prompt(state.query, state.docs)
    state.answer = state.generator.generate(prompt, cancel=state.cancel)
    logger.info("Summarized %d document(s) into %d char(s)", len(state.docs), len(state.answer))


# ── 3. CRITIQUE ───────────────────────────────────────────────────────


def critique(state: WorkflowState) -> None:
    """Append :data:`SHORT_ANSWER_NOTE` to answers under 50 characters.

    A plain length check, not a quality gate.
    """
    if len(state.answer) < MIN_ANSWER_LENGTH:
        state.answer += SHORT_ANSWER_NOTE


# ── 4. FINALIZE ───────────────────────────────────────────────────────


def finalize(state: WorkflowState) -> None:
    """Hand the answer over; presentation is up to the caller."""
    logger.info("Answer ready (%d chars)", len(state.answer))
