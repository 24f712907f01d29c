"""Unit tests for the streaming generation client."""

from __future__ import annotations

import json
import threading
from collections.abc import Callable
from unittest.mock import MagicMock

import pytest
import requests

from doc_agent.agent.llm import OllamaGenerator
from doc_agent.errors import GenerationCancelledError, GenerationError


def _line(response: str, done: bool = False) -> bytes:
    return json.dumps({"response": response, "done": done}).encode()


def _generator(session: MagicMock) -> OllamaGenerator:
    return OllamaGenerator("llama3", base_url="http://ollama:11434", timeout=7, session=session)


def test_fragments_are_concatenated_in_order(make_response: Callable[..., MagicMock]) -> None:
    session = MagicMock()
    resp = make_response(lines=[_line("Hel"), _line("lo, "), _line("world", done=True)])
    session.post.return_value = resp

    assert _generator(session).generate("prompt") == "Hello, world"
    session.post.assert_called_once_with(
        "http://ollama:11434/api/generate",
        json={"model": "llama3", "prompt": "prompt"},
        stream=True,
        timeout=7,
    )
    resp.close.assert_called_once()


def test_stops_at_done_even_if_more_lines_follow(make_response: Callable[..., MagicMock]) -> None:
    session = MagicMock()
    session.post.return_value = make_response(
        lines=[_line("final", done=True), _line(" ignored"), b"not json"]
    )
    assert list(_generator(session).stream("p")) == ["final"]


def test_end_of_stream_without_done(make_response: Callable[..., MagicMock]) -> None:
    session = MagicMock()
    session.post.return_value = make_response(lines=[_line("a"), b"", _line("b")])
    assert _generator(session).generate("p") == "ab"


def test_undecodable_line_is_an_error(make_response: Callable[..., MagicMock]) -> None:
    session = MagicMock()
    resp = make_response(lines=[_line("partial"), b"{broken"])
    session.post.return_value = resp
    with pytest.raises(GenerationError, match="decoding"):
        _generator(session).generate("p")
    resp.close.assert_called_once()


def test_non_200_is_an_error(make_response: Callable[..., MagicMock]) -> None:
    session = MagicMock()
    session.post.return_value = make_response(status_code=500, text="model crashed")
    with pytest.raises(GenerationError, match="model crashed"):
        _generator(session).generate("p")


def test_transport_error_is_wrapped() -> None:
    session = MagicMock()
    session.post.side_effect = requests.Timeout("read timed out")
    with pytest.raises(GenerationError, match="calling ollama"):
        _generator(session).generate("p")


def test_cancellation_stops_consumption(make_response: Callable[..., MagicMock]) -> None:
    session = MagicMock()
    resp = make_response(lines=[_line("one "), _line("two "), _line("three", done=True)])
    session.post.return_value = resp
    cancel = threading.Event()

    received: list[str] = []
    with pytest.raises(GenerationCancelledError):
        for fragment in _generator(session).stream("p", cancel=cancel):
            received.append(fragment)
            cancel.set()

    assert received == ["one "]
    resp.close.assert_called_once()


@pytest.mark.parametrize(
    "bad_line",
    [
        b'{"response": 5, "done": false}',
        b'{"response": null, "done": false}',
        b'{"response": "a", "done": "false"}',
        b'{"response": "a", "done": 1}',
        b'["response", "a"]',
    ],
)
def test_mistyped_line_is_a_decode_error(bad_line: bytes, make_response: Callable[..., MagicMock]) -> None:
    session = MagicMock()
    resp = make_response(lines=[_line("ok "), bad_line, _line("never", done=True)])
    session.post.return_value = resp

    with pytest.raises(GenerationError, match="decoding ollama response"):
        _generator(session).generate("p")
    resp.close.assert_called_once()


def test_string_done_flag_never_truncates_answer(make_response: Callable[..., MagicMock]) -> None:
    session = MagicMock()
    session.post.return_value = make_response(
        lines=[b'{"response": "a", "done": "false"}', _line("b", done=True)]
    )
    received: list[str] = []
    with pytest.raises(GenerationError):
        for fragment in _generator(session).stream("p"):
            received.append(fragment)
    assert received == []


def test_in_stream_error_object_is_raised(make_response: Callable[..., MagicMock]) -> None:
    session = MagicMock()
    session.post.return_value = make_response(
        lines=[_line("partial "), b'{"error": "model runner has unexpectedly stopped"}']
    )
    with pytest.raises(GenerationError, match="unexpectedly stopped"):
        _generator(session).generate("p")


def test_extra_keys_are_ignored(make_response: Callable[..., MagicMock]) -> None:
    session = MagicMock()
    session.post.return_value = make_response(
        lines=[
            b'{"model": "llama3", "created_at": "2024-01-01T00:00:00Z", "response": "Hi", "done": false}',
            b'{"model": "llama3", "response": "", "done": true, "done_reason": "stop", "context": [1, 2]}',
        ]
    )
    assert _generator(session).generate("p") == "Hi"
