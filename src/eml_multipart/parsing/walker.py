"""
Multipart walker: pulls body parts off a stream one at a time.

The walker never runs ahead of the caller. Each part's body is exposed as a
single-pass stream that ends at the next boundary delimiter; moving on to the
next part drains whatever the caller left unread.

Framing follows RFC 2046: the preamble before the first delimiter is skipped,
transport padding after a delimiter is tolerated, and the line ending (CRLF or
bare LF) is taken from the first delimiter line.
"""

import io
from typing import BinaryIO, Iterator, Optional

from ..config import settings
from ..errors import (
    MalformedMultipartError,
    StreamReadError,
    TruncatedMultipartError,
)
from ..logging_config import get_logger
from ..models.part import RawPart
from .headers import HeaderBlockError, read_header_block

logger = get_logger(__name__)

_PADDING = b" \t"


class PartBody(io.RawIOBase):
    """Lazy body of one part; reads stop at the next delimiter."""

    def __init__(self, reader: "MultipartReader"):
        super().__init__()
        self._reader = reader

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        return self._reader._readinto_body(self, buffer)

    def skip(self) -> None:
        """Drain and discard the rest of the body."""
        while self.read(self._reader.chunk_size):
            pass


class MultipartReader:
    """
    Pull-based reader over a multipart body.

    Args:
        stream: Binary stream positioned at the start of the multipart body
        boundary: Boundary parameter from the enclosing Content-Type
        chunk_size: Bytes pulled from the stream per read
    """

    def __init__(self, stream: BinaryIO, boundary: str, chunk_size: Optional[int] = None):
        self.boundary = boundary
        self.chunk_size = chunk_size or settings.read_chunk_size
        self._stream = stream
        self._buf = bytearray()
        self._eof = False

        encoded = boundary.encode("utf-8", "surrogateescape")
        self._nl = b"\r\n"
        self._dash_boundary = b"--" + encoded
        self._nl_dash_boundary = self._nl + self._dash_boundary

        self._current: Optional[PartBody] = None
        self._current_done = True
        self._body_bytes_read = 0
        self._parts_read = 0
        self._finished = False

    def __iter__(self) -> Iterator[RawPart]:
        while True:
            part = self.next_part()
            if part is None:
                return
            yield part

    @property
    def parts_read(self) -> int:
        return self._parts_read

    def next_part(self) -> Optional[RawPart]:
        """
        Advance to the next part.

        Any unread body of the previous part is drained first.

        Returns:
            The next RawPart, or None after the terminal delimiter

        Raises:
            TruncatedMultipartError: Stream ended before the terminal delimiter
            MalformedMultipartError: Unexpected line between parts or bad part headers
            StreamReadError: Underlying read failed
        """
        if self._current is not None:
            self._current.skip()
            self._current = None

        if self._finished:
            return None

        expect_new_part = False
        while True:
            line = self._read_line()
            if not line:
                raise TruncatedMultipartError(
                    f"stream ended before terminal boundary --{self.boundary}--"
                )

            if self._is_delimiter_line(line):
                return self._open_part()

            if self._is_final_delimiter_line(line):
                self._finished = True
                logger.debug("multipart_finished", parts=self._parts_read)
                return None

            if not line.endswith(b"\n"):
                raise TruncatedMultipartError(
                    f"stream ended mid-line before terminal boundary --{self.boundary}--"
                )

            if expect_new_part:
                raise MalformedMultipartError(f"expecting a new part; got line {line!r}")

            if self._parts_read == 0:
                # Preamble
                continue

            if line == self._nl:
                expect_new_part = True
                continue

            raise MalformedMultipartError(f"unexpected line between parts: {line!r}")

    def _open_part(self) -> RawPart:
        try:
            headers, hit_eof = read_header_block(self._read_line, settings.max_header_bytes)
        except HeaderBlockError as e:
            raise MalformedMultipartError(
                f"part {self._parts_read}: {e}"
            ) from e
        if hit_eof:
            raise TruncatedMultipartError(
                f"stream ended inside the headers of part {self._parts_read}"
            )

        body = PartBody(self)
        part = RawPart(headers=headers, body=body, index=self._parts_read)
        self._parts_read += 1
        self._current = body
        self._current_done = False
        self._body_bytes_read = 0

        logger.debug(
            "part_read",
            index=part.index,
            content_type=headers.get("Content-Type"),
        )
        return part

    # ------------------------------------------------------------------
    # Delimiter matching
    # ------------------------------------------------------------------

    def _is_delimiter_line(self, line: bytes) -> bool:
        if not line.startswith(self._dash_boundary):
            return False
        rest = line[len(self._dash_boundary) :].lstrip(_PADDING)
        if self._parts_read == 0 and rest == b"\n":
            # LF-only message
            self._nl = b"\n"
            self._nl_dash_boundary = self._nl + self._dash_boundary
        return rest == self._nl

    def _is_final_delimiter_line(self, line: bytes) -> bool:
        final = self._dash_boundary + b"--"
        if not line.startswith(final):
            return False
        rest = line[len(final) :].lstrip(_PADDING)
        return rest in (b"", b"\r\n", b"\n")

    def _match_after_prefix(self, pos: int) -> Optional[bool]:
        """
        Decide whether a boundary prefix ending at ``pos`` is a real delimiter.

        Returns True for a delimiter, False for content that merely starts
        like one, and None when more bytes are needed to tell.
        """
        if pos >= len(self._buf):
            return True if self._eof else None
        char = self._buf[pos : pos + 1]
        if char in (b" ", b"\t", b"\r", b"\n"):
            return True
        if char == b"-":
            if pos + 1 >= len(self._buf):
                return True if self._eof else None
            return self._buf[pos + 1 : pos + 2] == b"-"
        return False

    def _scan_body(self):
        """
        Find how many buffered bytes belong to the current body.

        Returns:
            Tuple of (count, at_delimiter); count bytes at the head of the
            buffer are body content, at_delimiter is True when the body ends
            right after them
        """
        if self._body_bytes_read == 0 and self._buf.startswith(self._dash_boundary):
            # Empty body directly followed by a delimiter
            verdict = self._match_after_prefix(len(self._dash_boundary))
            if verdict is None:
                return 0, False
            if verdict:
                return 0, True

        start = 0
        while True:
            idx = self._buf.find(self._nl_dash_boundary, start)
            if idx < 0:
                if self._eof:
                    return len(self._buf), False
                keep = len(self._nl_dash_boundary) - 1
                return max(0, len(self._buf) - keep), False

            verdict = self._match_after_prefix(idx + len(self._nl_dash_boundary))
            if verdict is None:
                return idx, False
            if verdict:
                return idx, True
            start = idx + 1

    # ------------------------------------------------------------------
    # Buffered I/O
    # ------------------------------------------------------------------

    def _readinto_body(self, body: PartBody, buffer) -> int:
        if body is not self._current or self._current_done:
            return 0

        while True:
            count, at_delimiter = self._scan_body()
            if count > 0:
                n = min(count, len(buffer))
                buffer[:n] = self._buf[:n]
                del self._buf[:n]
                self._body_bytes_read += n
                return n
            if at_delimiter:
                self._current_done = True
                return 0
            if self._eof:
                self._current_done = True
                raise TruncatedMultipartError(
                    f"stream ended inside the body of part {self._parts_read - 1}"
                )
            self._fill()

    def _read_line(self) -> bytes:
        limit = settings.max_header_bytes
        start = 0
        while True:
            idx = self._buf.find(b"\n", start)
            if idx >= 0 or self._eof:
                end = idx + 1 if idx >= 0 else len(self._buf)
                if end > limit:
                    raise MalformedMultipartError(f"line exceeds {limit} bytes")
                line = bytes(self._buf[:end])
                del self._buf[:end]
                return line
            if len(self._buf) > limit:
                raise MalformedMultipartError(f"line exceeds {limit} bytes")
            start = len(self._buf)
            self._fill()

    def _fill(self) -> None:
        if getattr(self._stream, "closed", False):
            raise StreamReadError("underlying stream is closed")
        try:
            chunk = self._stream.read(self.chunk_size)
        except OSError as e:
            raise StreamReadError(f"read failed: {e}") from e
        if not chunk:
            self._eof = True
            return
        self._buf += chunk
