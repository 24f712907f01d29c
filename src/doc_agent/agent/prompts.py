"""Prompt template and fixed messages for the answer workflow.

Keeping prompts in one place makes them easy to audit and version.
"""

from __future__ import annotations

import json

NO_DOCUMENTS_MESSAGE = "No documents found matching the query."

SHORT_ANSWER_NOTE = (
    "\n\n(Note: result short; consider rephrasing your query or indexing more documents.)"
)

SUMMARY_TEMPLATE = """\
The user asked: {query}.

Summarize the following documents in the context of this query:

{documents}"""


def build_summary_prompt(query: str, documents: list[str]) -> str:
    """Assemble the grounding prompt for the summarize stage.

    Parameters
    ----------
    query:
        The user question, embedded verbatim (quoted).
    documents:
        Retrieved document texts, each placed under a ``Document N:`` heading.
    """
    return SUMMARY_TEMPLATE.format(
        query=json_quote(query),
        documents=format_documents(documents),
    )


def format_documents(documents: list[str]) -> str:
    """Numbered listing: ``Document 1:\\n<text>\\n\\n`` for each entry."""
    return "".join(f"Document {i}:\n{doc}\n\n" for i, doc in enumerate(documents, 1))


def json_quote(text: str) -> str:
    """Double-quote *text*, escaping quotes and control characters."""
    return json.dumps(text, ensure_ascii=False)
