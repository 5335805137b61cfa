"""
stdio transport: JSON-RPC over stdin/stdout
"""
import sys
import json
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Dict, Any, BinaryIO, TextIO
from config import Config
from .dispatcher import RequestDispatcher
from .errors import PARSE_ERROR, INTERNAL_ERROR
from .framer import MessageFramer, FramedMessage
from .models import error_response

logger = logging.getLogger(__name__)

READ_SIZE = 65536


class StdioServer:
    """Reads requests from a byte stream and writes one JSON line per response"""

    def __init__(
        self,
        dispatcher: Optional[RequestDispatcher] = None,
        stdin: Optional[BinaryIO] = None,
        stdout: Optional[TextIO] = None,
        max_workers: Optional[int] = None
    ):
        """
        Args:
            dispatcher: Request dispatcher
            stdin: Binary input stream supporting read1, defaults to sys.stdin.buffer
            stdout: Text output stream, defaults to sys.stdout
            max_workers: Requests handled concurrently
        """
        self.dispatcher = dispatcher or RequestDispatcher()
        self.stdin = stdin or sys.stdin.buffer
        self.stdout = stdout or sys.stdout
        self.max_workers = max_workers or Config.MAX_WORKERS
        self.framer = MessageFramer()
        self._write_lock = threading.Lock()

    def serve(self):
        """Serve until stdin reaches EOF, then wait for in-flight requests"""
        logger.info(f"[StdioServer] Listening on stdin with {self.max_workers} workers")
        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="mcp-request") as pool:
            while True:
                chunk = self._read_chunk()
                if not chunk:
                    break
                for message in self.framer.decode(chunk):
                    self._submit(pool, message)

            for message in self.framer.close():
                self._submit(pool, message)
        logger.info("[StdioServer] stdin closed, all requests answered")

    def _read_chunk(self) -> bytes:
        # read1 returns whatever is available instead of waiting for a full buffer
        if hasattr(self.stdin, "read1"):
            return self.stdin.read1(READ_SIZE)
        return self.stdin.read(READ_SIZE)

    def _submit(self, pool: ThreadPoolExecutor, message: FramedMessage):
        if not message.ok:
            self._write(error_response(None, PARSE_ERROR, message.error))
            return
        pool.submit(self._handle, message.payload)

    def _handle(self, payload: Any):
        try:
            response = self.dispatcher.dispatch(payload)
        except Exception:
            logger.exception("[StdioServer] Dispatcher raised")
            request_id = payload.get("id") if isinstance(payload, dict) else None
            response = error_response(request_id, INTERNAL_ERROR, "Internal error")
        if response is None:
            return
        try:
            self._write(response)
        except Exception:
            # Pool thread: the future is never read, so log here
            logger.exception(f"[StdioServer] Could not write response for id {response.get('id')}")

    def _write(self, response: Dict[str, Any]):
        # ASCII escapes keep the line writable whatever the stream encoding is
        line = json.dumps(response) + "\n"
        with self._write_lock:
            self.stdout.write(line)
            self.stdout.flush()
