"""
Incremental JSON object framer

Splits a byte/character stream into top-level JSON objects by counting braces
outside string literals. Each call scans only the characters it has not seen
yet; an incomplete object stays buffered until more input arrives.
"""
import codecs
import json
import logging
from enum import Enum
from typing import Optional, List, Any, NamedTuple, Union

logger = logging.getLogger(__name__)


class ScanMode(Enum):
    """Where the scanner is relative to the current object"""
    OUTSIDE = "outside"  # between objects, depth 0
    OBJECT = "object"
    STRING = "string"  # inside a string literal within an object


class FramedMessage(NamedTuple):
    raw: str
    payload: Optional[Any]
    error: Optional[str]

    @property
    def ok(self) -> bool:
        return self.error is None


class MessageFramer:
    """Stateful framer for one stream; never share an instance between streams"""

    def __init__(self):
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._reset()

    def _reset(self):
        self._buffer = ""
        self._pos = 0
        self._start = 0
        self._depth = 0
        self._mode = ScanMode.OUTSIDE
        self._escaped = False

    @property
    def pending(self) -> str:
        """Buffered input that does not form a complete object yet"""
        return self._buffer

    def feed(self, chunk: Union[str, bytes]) -> List[str]:
        """
        Append a chunk and return every object it completes

        Args:
            chunk: Next piece of the stream, str or UTF-8 bytes

        Returns:
            Complete top-level JSON object substrings in stream order
        """
        if isinstance(chunk, bytes):
            chunk = self._decoder.decode(chunk)
        if not chunk:
            return []

        buf = self._buffer + chunk
        frames: List[str] = []
        consumed = 0
        noise = 0
        i = self._pos

        while i < len(buf):
            ch = buf[i]
            if self._mode is ScanMode.OUTSIDE:
                if ch == "{":
                    self._mode = ScanMode.OBJECT
                    self._depth = 1
                    self._start = i
                else:
                    if not ch.isspace():
                        noise += 1
                    consumed = i + 1
            elif self._escaped:
                self._escaped = False
            elif ch == "\\":
                self._escaped = True
            elif self._mode is ScanMode.STRING:
                if ch == '"':
                    self._mode = ScanMode.OBJECT
            elif ch == '"':
                self._mode = ScanMode.STRING
            elif ch == "{":
                self._depth += 1
            elif ch == "}":
                self._depth -= 1
                if self._depth == 0:
                    frames.append(buf[self._start:i + 1])
                    self._mode = ScanMode.OUTSIDE
                    consumed = i + 1
            i += 1

        if noise:
            logger.warning(f"[MessageFramer] Discarded {noise} non-whitespace characters between messages")

        self._buffer = buf[consumed:]
        self._pos = i - consumed
        self._start = max(0, self._start - consumed)
        return frames

    def decode(self, chunk: Union[str, bytes]) -> List[FramedMessage]:
        """
        Feed a chunk and JSON-decode the completed objects

        A balanced object that is not valid JSON is reported as an error for
        that message only; scanning continues past it.
        """
        return [self._decode_frame(raw) for raw in self.feed(chunk)]

    def close(self) -> List[FramedMessage]:
        """
        End of stream: report a buffered incomplete object and reset

        Returns:
            One error message for leftover data, otherwise an empty list
        """
        tail = self._decoder.decode(b"", final=True)
        messages = self.decode(tail) if tail else []

        remainder = self._buffer.strip()
        incomplete = self._mode is not ScanMode.OUTSIDE
        self._reset()
        self._decoder.reset()

        if remainder and incomplete:
            logger.warning(f"[MessageFramer] Stream ended inside an object ({len(remainder)} chars buffered)")
            messages.append(FramedMessage(remainder, None, "Unbalanced braces at end of stream"))
        return messages

    @staticmethod
    def _decode_frame(raw: str) -> FramedMessage:
        try:
            return FramedMessage(raw, json.loads(raw), None)
        except json.JSONDecodeError as e:
            logger.warning(f"[MessageFramer] Invalid JSON message: {e}")
            return FramedMessage(raw, None, f"Parse error: {e.msg} at position {e.pos}")
