"""
Tests for the incremental server-push stream parser
"""

import json

import pytest

from services.sse_parser import SSEEvent, SSEStreamParser, parse_event_block


def frame(name, data):
    return f"event: {name}\ndata: {json.dumps(data, ensure_ascii=False)}\n\n".encode("utf-8")


class TestEventBlocks:

    def test_event_and_data_fields(self):
        event = parse_event_block('id: 1\nevent: recipes/abc\ndata: {"action": "update"}')
        assert event == SSEEvent(name="recipes/abc", data={"action": "update"})

    def test_last_data_line_wins(self):
        event = parse_event_block('event: x\ndata: {"n": 1}\ndata: {"n": 2}')
        assert event.data == {"n": 2}

    @pytest.mark.parametrize("block", [
        "event: ping",
        "event: ping\ndata:",
        "event: ping\ndata: not json",
        "event: ping\ndata: [1, 2]",
        'event: ping\ndata: "text"',
    ])
    def test_unusable_payload_skipped(self, block):
        assert parse_event_block(block) is None

    def test_missing_event_name(self):
        assert parse_event_block('data: {"a": 1}') == SSEEvent(name="", data={"a": 1})


class TestStreamParser:

    @pytest.fixture
    def parser(self):
        return SSEStreamParser()

    def test_single_complete_frame(self, parser):
        events = parser.feed(frame("PB_CONNECT", {"clientId": "abc"}))
        assert events == [SSEEvent(name="PB_CONNECT", data={"clientId": "abc"})]
        assert parser.pending == b""

    def test_frame_split_across_feeds(self, parser):
        raw = frame("recipes/r1", {"action": "create", "record": {"id": "r1"}})
        assert parser.feed(raw[:17]) == []
        assert parser.feed(raw[17:-1]) == []
        events = parser.feed(raw[-1:])
        assert len(events) == 1
        assert events[0].name == "recipes/r1"
        assert parser.feed(b"") == []

    def test_several_frames_and_partial_tail(self, parser):
        chunk = frame("a", {"n": 1}) + frame("b", {"n": 2}) + b'event: c\ndata: {"n"'
        events = parser.feed(chunk)
        assert [e.name for e in events] == ["a", "b"]
        assert parser.pending == b'event: c\ndata: {"n"'

        events = parser.feed(b': 3}\n\n')
        assert events == [SSEEvent(name="c", data={"n": 3})]

    def test_bad_frame_does_not_corrupt_following(self, parser):
        chunk = b"event: broken\ndata: {oops\n\n" + frame("ok", {"fine": True})
        assert parser.feed(chunk) == [SSEEvent(name="ok", data={"fine": True})]
        assert parser.pending == b""

    def test_multibyte_character_split(self, parser):
        raw = frame("recipes", {"title": "crème brûlée"})
        cut = raw.index("è".encode("utf-8")) + 1
        assert parser.feed(raw[:cut]) == []
        assert parser.pending == raw[:cut]
        events = parser.feed(raw[cut:])
        assert events[0].data == {"title": "crème brûlée"}

    def test_invalid_utf8_does_not_stall(self, parser):
        events = parser.feed(b"event: junk\ndata: \xff\xfe\n\n" + frame("ok", {"n": 1}))
        assert events == [SSEEvent(name="ok", data={"n": 1})]

    def test_invalid_byte_is_isolated_to_its_block(self, parser):
        events = parser.feed(b'event: a\ndata: {"x": "\xff"}\n\n' + b'event: b\ndata: {"n": "caf\xc3')
        # The block with the bad byte is skipped, the split character survives
        assert events == []
        assert parser.pending == b'event: b\ndata: {"n": "caf\xc3'

        events = parser.feed(b'\xa9"}\n\n')
        assert events == [SSEEvent(name="b", data={"n": "café"})]
        assert parser.pending == b""

    def test_reset_drops_partial_frame(self, parser):
        parser.feed(b"event: half")
        parser.reset()
        assert parser.pending == b""
        assert parser.feed(frame("x", {"n": 1}))[0].name == "x"
