"""Streaming generation client for Ollama's ``/api/generate`` endpoint.

The backend answers with line-delimited JSON objects
``{"response": "<fragment>", "done": false}``; the last one carries
``"done": true``.  :meth:`OllamaGenerator.stream` turns that into a
generator of fragments that stops at the completion flag even if more
bytes follow.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator

import requests
from pydantic import BaseModel, StrictBool, StrictStr, ValidationError

from doc_agent.config import settings
from doc_agent.errors import GenerationCancelledError, GenerationError

logger = logging.getLogger(__name__)


class _StreamChunk(BaseModel):
    """One line of the generate stream; other keys (model, timings, …) are ignored."""

    response: StrictStr = ""
    done: StrictBool = False
    error: StrictStr | None = None


class OllamaGenerator:
    """Streaming text generation.

    Parameters
    ----------
    model:
        Generation model identifier (e.g. ``"llama3"``).
    base_url:
        Ollama server root.
    timeout:
        Read timeout in seconds while waiting for the next fragment.
    session:
        Optional pre-configured :class:`requests.Session`.
    """

    def __init__(
        self,
        model: str = settings.llm_model_name,
        *,
        base_url: str = settings.ollama_base_url,
        timeout: float = settings.generation_timeout,
        session: requests.Session | None = None,
    ) -> None:
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/api/generate"

    def stream(self, prompt: str, *, cancel: threading.Event | None = None) -> Iterator[str]:
        """Yield response fragments in arrival order.

        Consumption ends at the first object with ``done == true`` or at
        end of stream.  Setting *cancel* aborts with
        :class:`GenerationCancelledError` before the next fragment is
        read.  The HTTP response is closed however the loop ends.

        Raises
        ------
        GenerationError
            Transport failure, non-200 status, an in-stream ``error`` object,
            or a line that is not ``{"response": str, "done": bool}``.
        """
        try:
            response = self.session.post(
                self.endpoint,
                json={"model": self.model, "prompt": prompt},
                stream=True,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise GenerationError(f"calling ollama: {exc}") from exc

        try:
            if response.status_code != 200:
                raise GenerationError(f"ollama error ({response.status_code}): {response.text}")

            for line in response.iter_lines():
                if cancel is not None and cancel.is_set():
                    raise GenerationCancelledError("generation cancelled by caller")
                if not line:
                    continue
                try:
                    chunk = _StreamChunk.model_validate_json(line)
                except ValidationError as exc:
                    raise GenerationError(f"decoding ollama response: {exc}") from exc
                if chunk.error is not None:
                    raise GenerationError(f"ollama error: {chunk.error}")

                if chunk.response:
                    yield chunk.response
                if chunk.done:
                    return
        except requests.RequestException as exc:
            raise GenerationError(f"reading ollama stream: {exc}") from exc
        finally:
            response.close()

    def generate(self, prompt: str, *, cancel: threading.Event | None = None) -> str:
        """Consume :meth:`stream` and return the concatenated text."""
        parts: list[str] = []
        for fragment in self.stream(prompt, cancel=cancel):
            parts.append(fragment)
        text = "".join(parts)
        logger.debug("Generated %d char(s) in %d fragment(s)", len(text), len(parts))
        return text
