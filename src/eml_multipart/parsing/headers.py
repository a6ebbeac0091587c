"""
Header block reading shared by the envelope reader and the part walker.
"""

import re
from email.message import Message
from email.parser import HeaderParser
from email.policy import compat32
from typing import Callable, Tuple

from ..errors import MultipartError

_FOLD = re.compile(r"\r?\n(?=[ \t])")


class HeaderBlockError(MultipartError):
    """A header line is malformed or the block exceeds the size limit."""


def _is_blank(line: bytes) -> bool:
    return line in (b"\r\n", b"\n")


def unfold(value: str) -> str:
    """Remove the line breaks of a folded header value (RFC 5322 2.2.3)."""
    return _FOLD.sub("", value)


def read_header_block(
    readline: Callable[[], bytes], max_bytes: int
) -> Tuple[Message, bool]:
    """
    Read header lines up to and including the terminating blank line.

    Continuation lines (leading space or tab) are unfolded into the previous
    header. Lines without a colon are rejected. Header text is decoded as
    UTF-8; undecodable bytes become U+FFFD.

    Args:
        readline: Returns the next line including its line ending, b"" at EOF
        max_bytes: Upper bound on the header block size

    Returns:
        Tuple of (headers, hit_eof); hit_eof is True when the stream ended
        before the blank line

    Raises:
        HeaderBlockError: On a malformed line or an oversized block
    """
    lines = []
    total = 0

    while True:
        line = readline()
        if not line:
            return _to_message(lines), True
        if _is_blank(line):
            return _to_message(lines), False

        total += len(line)
        if total > max_bytes:
            raise HeaderBlockError(f"header block exceeds {max_bytes} bytes")

        if line[:1] in (b" ", b"\t"):
            if not lines:
                raise HeaderBlockError(f"malformed initial header line {line!r}")
            lines[-1] = lines[-1].rstrip(b"\r\n") + line
            continue

        name, colon, _ = line.partition(b":")
        if not colon or not name.strip() or name != name.rstrip():
            raise HeaderBlockError(f"malformed header line {line!r}")
        lines.append(line)


def _to_message(lines) -> Message:
    # Header-only parse; the caller keeps the body on the stream.
    text = b"".join(lines).decode("utf-8", errors="replace")
    return HeaderParser(policy=compat32).parsestr(text + "\n")
