"""Streaming transcoder behavior: chunk mapping, terminal handling, sentinel."""

from __future__ import annotations

import json
from typing import Iterable, List

from chatbridge.base.streaming import SSE_SENTINEL, StreamTranscoder
from chatbridge.config import CompletionPolicy

BASIC = (
    b'data: {"type":"token","token":"Hel"}\n'
    b'data: {"type":"token","token":"lo"}\n'
    b'data: {"type":"done"}\n'
)


def _transcoder(policy: CompletionPolicy = CompletionPolicy.REPLACE) -> StreamTranscoder:
    return StreamTranscoder(response_id="chatcmpl-test", model="m1", policy=policy, created=1700000000)


def _frames(transcoder: StreamTranscoder, chunks: Iterable[bytes]) -> List[str]:
    body = b"".join(transcoder.iter_sse(chunks)).decode("utf-8")
    assert body.endswith("\n\n")  # nosec B101
    return [frame[len("data: "):] for frame in body.split("\n\n") if frame]


def _choices(frames: List[str]) -> List[dict]:
    return [json.loads(f)["choices"][0] for f in frames if f != "[DONE]"]


def test_tokens_then_done_map_to_content_chunks_stop_and_sentinel():
    frames = _frames(_transcoder(), [BASIC])
    assert frames[-1] == "[DONE]"  # nosec B101
    choices = _choices(frames)
    assert choices == [  # nosec B101
        {"index": 0, "delta": {"content": "Hel"}, "finish_reason": None},
        {"index": 0, "delta": {"content": "lo"}, "finish_reason": None},
        {"index": 0, "delta": {}, "finish_reason": "stop"},
    ]


def test_chunks_share_identity_fields():
    frames = _frames(_transcoder(), [BASIC])
    for frame in frames[:-1]:
        chunk = json.loads(frame)
        assert chunk["id"] == "chatcmpl-test"  # nosec B101
        assert chunk["object"] == "chat.completion.chunk"  # nosec B101
        assert chunk["created"] == 1700000000  # nosec B101
        assert chunk["model"] == "m1"  # nosec B101


def test_output_independent_of_chunk_boundaries():
    expected = _frames(_transcoder(), [BASIC])
    byte_wise = _frames(_transcoder(), [BASIC[i:i + 1] for i in range(len(BASIC))])
    assert byte_wise == expected  # nosec B101
    for i in range(len(BASIC) + 1):
        assert _frames(_transcoder(), [BASIC[:i], BASIC[i:]]) == expected  # nosec B101


def test_process_emits_chunk_as_soon_as_line_completes():
    transcoder = _transcoder()
    assert transcoder.process(b'data: {"type":"token","tok') == []  # nosec B101
    chunks = transcoder.process(b'en":"Hi"}\n')
    assert [c.content for c in chunks] == ["Hi"]  # nosec B101
    assert transcoder.answer == "Hi"  # nosec B101


def test_noise_lines_produce_nothing():
    body = b": ping\nevent: token\ndata: [DONE]\ndata: oops\n\n" + BASIC
    choices = _choices(_frames(_transcoder(), [body]))
    assert len(choices) == 3  # nosec B101


def test_nothing_emitted_after_first_terminal_event():
    body = BASIC + b'data: {"type":"token","token":"late"}\n' + b'data: {"type":"done"}\n'
    transcoder = _transcoder()
    frames = _frames(transcoder, [body])
    choices = _choices(frames)
    assert [c["finish_reason"] for c in choices].count("stop") == 1  # nosec B101
    assert all(c["delta"].get("content") != "late" for c in choices)  # nosec B101
    assert frames.count("[DONE]") == 1  # nosec B101


def test_sentinel_emitted_without_terminal_event():
    transcoder = _transcoder()
    frames = _frames(transcoder, [b'data: {"type":"token","token":"A"}\n'])
    assert frames == [frames[0], "[DONE]"]  # nosec B101
    assert not transcoder.terminated  # nosec B101


def test_empty_upstream_yields_only_sentinel():
    assert _frames(_transcoder(), []) == ["[DONE]"]  # nosec B101


def test_partial_trailing_line_is_discarded():
    frames = _frames(_transcoder(), [b'data: {"type":"token","token":"cut"}'])
    assert frames == ["[DONE]"]  # nosec B101


def test_close_is_idempotent_and_blocks_further_input():
    transcoder = _transcoder()
    assert transcoder.close() == [SSE_SENTINEL]  # nosec B101
    assert transcoder.close() == []  # nosec B101
    assert transcoder.closed  # nosec B101
    try:
        transcoder.process(BASIC)
    except RuntimeError:
        pass
    else:  # pragma: no cover - failure path
        raise AssertionError("process after close should raise")


def test_complete_under_replace_sends_only_unsent_suffix():
    body = (
        b'data: {"type":"token","token":"Hel"}\n'
        b'data: {"type":"complete","text":"Hello world"}\n'
    )
    transcoder = _transcoder(CompletionPolicy.REPLACE)
    choices = _choices(_frames(transcoder, [body]))
    assert choices[-1] == {  # nosec B101
        "index": 0,
        "delta": {"content": "lo world"},
        "finish_reason": "stop",
    }
    assert transcoder.answer == "Hello world"  # nosec B101


def test_complete_without_tokens_sends_full_text():
    body = b'data: {"type":"complete","content":"All at once"}\n'
    choices = _choices(_frames(_transcoder(), [body]))
    assert choices == [  # nosec B101
        {"index": 0, "delta": {"content": "All at once"}, "finish_reason": "stop"}
    ]


def test_complete_equal_to_sent_text_only_stops():
    body = (
        b'data: {"type":"token","token":"Same"}\n'
        b'data: {"type":"complete","text":"Same"}\n'
    )
    choices = _choices(_frames(_transcoder(), [body]))
    assert choices[-1] == {"index": 0, "delta": {}, "finish_reason": "stop"}  # nosec B101


def test_diverging_complete_stops_and_logs_warning(log_records, logged_events):
    body = (
        b'data: {"type":"token","token":"abc"}\n'
        b'data: {"type":"complete","text":"xyz"}\n'
    )
    transcoder = _transcoder(CompletionPolicy.REPLACE)
    choices = _choices(_frames(transcoder, [body]))
    assert choices[-1] == {"index": 0, "delta": {}, "finish_reason": "stop"}  # nosec B101
    assert transcoder.answer == "xyz"  # nosec B101
    diverged = [e for e in logged_events(log_records) if e.get("event") == "stream.complete_diverged"]
    assert len(diverged) == 1  # nosec B101
    assert diverged[0]["request_id"] == "chatcmpl-test"  # nosec B101


def test_complete_under_append_adds_text_after_tokens():
    body = (
        b'data: {"type":"token","token":"A"}\n'
        b'data: {"type":"complete","text":"B"}\n'
    )
    transcoder = _transcoder(CompletionPolicy.APPEND)
    choices = _choices(_frames(transcoder, [body]))
    assert choices == [  # nosec B101
        {"index": 0, "delta": {"content": "A"}, "finish_reason": None},
        {"index": 0, "delta": {"content": "B"}, "finish_reason": "stop"},
    ]
    assert transcoder.answer == "AB"  # nosec B101


def test_stream_complete_event_logged_on_close(log_records, logged_events):
    transcoder = _transcoder()
    _frames(transcoder, [BASIC])
    done = [e for e in logged_events(log_records) if e.get("event") == "stream.complete"]
    assert done and done[-1]["chunks"] == 3  # nosec B101
    assert done[-1]["terminal_seen"] is True  # nosec B101
