"""
Media type parsing for Content-Type and Content-Disposition header values.

Follows RFC 2045 token/quoted-string syntax and RFC 2231 extended and
continued parameters. A value without a slash (``attachment``) is accepted so
the same parser serves dispositions.
"""

from typing import Dict, Optional, Tuple
from urllib.parse import unquote

from ..errors import ParseError
from ..models.media_type import MediaType

_TSPECIALS = frozenset('()<>@,;:\\"/[]?=')


def _is_token_char(char: str) -> bool:
    return 0x20 < ord(char) < 0x7F and char not in _TSPECIALS


def _consume_token(value: str) -> Tuple[str, str]:
    end = 0
    while end < len(value) and _is_token_char(value[end]):
        end += 1
    return value[:end], value[end:]


def _consume_value(value: str) -> Tuple[str, str]:
    """Consume a token or quoted-string, returning ("", value) on failure."""
    if not value:
        return "", value
    if value[0] != '"':
        return _consume_token(value)

    chars = []
    i = 1
    while i < len(value):
        char = value[i]
        if char == '"':
            return "".join(chars), value[i + 1 :]
        if char == "\\" and i + 1 < len(value) and value[i + 1] in _TSPECIALS:
            chars.append(value[i + 1])
            i += 2
            continue
        if char in "\r\n":
            return "", value
        chars.append(char)
        i += 1

    # Unterminated quoted-string
    return "", value


def _consume_param(value: str) -> Tuple[str, str, str]:
    """Consume one ``; name=value`` pair, returning ("", "", value) on failure."""
    rest = value.lstrip(" \t")
    if not rest.startswith(";"):
        return "", "", value
    rest = rest[1:].lstrip()

    name, rest = _consume_token(rest)
    name = name.lower()
    if not name:
        return "", "", value

    rest = rest.lstrip()
    if not rest.startswith("="):
        return "", "", value
    rest = rest[1:].lstrip()

    param_value, remainder = _consume_value(rest)
    if param_value == "" and remainder == rest:
        return "", "", value
    return name, param_value, remainder


def _check_media_type(media_type: str) -> None:
    main, rest = _consume_token(media_type)
    if not main:
        raise ParseError("no media type")
    if not rest:
        return
    if not rest.startswith("/"):
        raise ParseError(f"expected slash after first token in {media_type!r}")
    sub, rest = _consume_token(rest[1:])
    if not sub:
        raise ParseError(f"expected token after slash in {media_type!r}")
    if rest:
        raise ParseError(f"unexpected content after media subtype in {media_type!r}")


def _decode_extended(value: str) -> Optional[str]:
    """Decode an RFC 2231 ``charset'language'percent-encoded`` value."""
    pieces = value.split("'", 2)
    if len(pieces) != 3:
        return None
    charset = pieces[0].lower() or "us-ascii"
    try:
        return unquote(pieces[2], encoding=charset, errors="strict")
    except (LookupError, UnicodeDecodeError):
        return None


def _join_continuations(name: str, pieces: Dict[str, str]) -> Optional[str]:
    single = pieces.get(f"{name}*")
    if single is not None:
        return _decode_extended(single)

    chunks = []
    charset = "utf-8"
    index = 0
    while True:
        simple_key = f"{name}*{index}"
        if simple_key in pieces:
            chunks.append(pieces[simple_key])
        elif simple_key + "*" in pieces:
            encoded = pieces[simple_key + "*"]
            if index == 0:
                prefix = encoded.split("'", 2)
                if len(prefix) == 3 and prefix[0]:
                    charset = prefix[0].lower()
                decoded = _decode_extended(encoded)
                if decoded is not None:
                    chunks.append(decoded)
            else:
                try:
                    chunks.append(unquote(encoded, encoding=charset, errors="replace"))
                except LookupError:
                    chunks.append(unquote(encoded))
        else:
            break
        index += 1

    if index == 0:
        return None
    return "".join(chunks)


def parse_media_type(header_value: str) -> MediaType:
    """
    Parse a Content-Type or Content-Disposition header value.

    Args:
        header_value: Raw header value, e.g. ``text/plain; charset="utf-8"``

    Returns:
        MediaType with lower-cased value and parameter names

    Raises:
        ParseError: If the value is empty or syntactically invalid
    """
    if header_value is None:
        raise ParseError("no media type")
    header_value = str(header_value)

    base = header_value.split(";", 1)[0]
    media_type = base.strip().lower()
    _check_media_type(media_type)

    params: Dict[str, str] = {}
    continuations: Dict[str, Dict[str, str]] = {}

    rest = header_value[len(base) :]
    while rest:
        rest = rest.lstrip()
        if not rest:
            break
        name, value, remainder = _consume_param(rest)
        if not name:
            if rest.strip() == ";":
                # Trailing semicolon
                break
            raise ParseError(f"invalid media parameter in {header_value!r}")

        target = params
        if "*" in name:
            target = continuations.setdefault(name.split("*", 1)[0], {})
        if name in target:
            raise ParseError(f"duplicate parameter name {name!r}")
        target[name] = value
        rest = remainder

    for name, pieces in continuations.items():
        joined = _join_continuations(name, pieces)
        if joined is not None:
            params[name] = joined

    return MediaType(value=media_type, params=params)


def is_multipart(media_type: str) -> bool:
    """True for multipart/* media types."""
    return media_type.startswith("multipart/")
