"""
Incremental parser for the realtime server-push stream.

Events are UTF-8 blocks separated by a blank line ("\\n\\n"), each made of
"field: value" lines. Only the `event:` and `data:` fields matter; `data`
must be a JSON object or the block is skipped, as is a block that is not valid
UTF-8. Chunks can end anywhere, so the unfinished tail is buffered as raw bytes
until the rest arrives.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import logfire

EVENT_SEPARATOR = b"\n\n"


@dataclass
class SSEEvent:
    """One complete event block"""
    name: str
    data: Dict[str, Any] = field(default_factory=dict)


def parse_event_block(block: str) -> Optional[SSEEvent]:
    """
    Decode one event block; None when it has no usable JSON object payload.
    The last `data:` line wins.
    """
    name = ""
    payload = ""
    for line in block.split("\n"):
        if line.startswith("event:"):
            name = line[len("event:"):].strip()
        elif line.startswith("data:"):
            payload = line[len("data:"):].strip()

    if not payload:
        return None

    try:
        data = json.loads(payload)
    except ValueError:
        logfire.debug("sse_block_skipped", event=name, reason="invalid_json")
        return None
    if not isinstance(data, dict):
        logfire.debug("sse_block_skipped", event=name, reason="not_an_object")
        return None

    return SSEEvent(name=name, data=data)


class SSEStreamParser:
    """Stateful decoder; feed chunks strictly in arrival order"""

    def __init__(self):
        self._buffer = b""

    @property
    def pending(self) -> bytes:
        """Bytes of the event still waiting for its terminator"""
        return self._buffer

    def reset(self) -> None:
        self._buffer = b""

    def feed(self, chunk: bytes) -> List[SSEEvent]:
        """
        Add a chunk and return every event completed by it.

        Args:
            chunk: Raw bytes as delivered by the transport

        Returns:
            Decoded events in stream order (possibly empty)
        """
        # "\n\n" never occurs inside a UTF-8 multi-byte sequence, so framing
        # works on raw bytes and the unfinished tail stays undecoded
        blocks = (self._buffer + chunk).split(EVENT_SEPARATOR)
        self._buffer = blocks.pop()

        events = []
        for raw in blocks:
            if not raw:
                continue
            block = _decode_block(raw)
            if block is None:
                continue
            event = parse_event_block(block)
            if event is not None:
                events.append(event)
        return events


def _decode_block(raw: bytes) -> Optional[str]:
    """Strict UTF-8 decode of one complete block; None (skip) when invalid"""
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        logfire.warn("sse_block_skipped_invalid_utf8", position=e.start, size=len(raw))
        return None
