"""
Agent — the fixed retrieve → summarize → critique → finalize workflow.

Public API
----------
- :func:`run_workflow` — apply every stage to a :class:`WorkflowState`.
- :func:`answer_query` — build default components and return the answer.
- :class:`WorkflowState` — the record each stage mutates in turn.
"""

from doc_agent.agent.state import WorkflowState
from doc_agent.agent.workflow import STAGES, answer_query, create_initial_state, run_workflow

__all__ = [
    "STAGES",
    "WorkflowState",
    "answer_query",
    "create_initial_state",
    "run_workflow",
]
