"""
Unit tests for media type parsing (parsing/media_type.py).

Tests cover:
- Type and parameter normalization
- Quoted-string and token parameter values
- Malformed values raising ParseError
- RFC 2231 extended and continued parameters
- Disposition values without a subtype
"""

import pytest

from eml_multipart.errors import MultipartError, ParseError
from eml_multipart.parsing.media_type import is_multipart, parse_media_type


class TestParseMediaType:
    """Tests for parse_media_type() function."""

    @pytest.mark.unit
    def test_simple_type(self):
        """Test a bare type/subtype."""
        media_type = parse_media_type("text/plain")
        assert media_type.value == "text/plain"
        assert media_type.params == {}
        assert media_type.main_type == "text"
        assert media_type.sub_type == "plain"

    @pytest.mark.unit
    def test_type_lower_cased_params_keep_value_case(self):
        """Test that type and names are lower-cased but values are not."""
        media_type = parse_media_type('Multipart/MIXED; Boundary="AbC-123"; CHARSET=UTF-8')
        assert media_type.value == "multipart/mixed"
        assert media_type.params == {"boundary": "AbC-123", "charset": "UTF-8"}
        assert media_type.get("BOUNDARY") == "AbC-123"

    @pytest.mark.unit
    def test_quoted_value_with_specials(self):
        """Test quoted-strings containing separators and escaped quotes."""
        media_type = parse_media_type(r'application/pdf; name="a; b \"c\".pdf"')
        assert media_type.get("name") == 'a; b "c".pdf'

    @pytest.mark.unit
    def test_surrounding_whitespace_and_folding(self):
        """Test whitespace and folded continuation lines around parameters."""
        media_type = parse_media_type('  multipart/mixed;\n\tboundary="folded"  ')
        assert media_type.value == "multipart/mixed"
        assert media_type.get("boundary") == "folded"

    @pytest.mark.unit
    def test_trailing_semicolon_ignored(self):
        """Test that a trailing semicolon is accepted."""
        media_type = parse_media_type("text/html; charset=utf-8;")
        assert media_type.value == "text/html"
        assert media_type.get("charset") == "utf-8"

    @pytest.mark.unit
    def test_disposition_without_slash(self):
        """Test that disposition tokens parse like media types."""
        disposition = parse_media_type('attachment; filename="report.pdf"')
        assert disposition.value == "attachment"
        assert disposition.get("filename") == "report.pdf"

    @pytest.mark.unit
    def test_missing_parameter_lookup_default(self):
        """Test get() default for absent parameters."""
        media_type = parse_media_type("multipart/mixed")
        assert media_type.get("boundary") == ""
        assert media_type.get("boundary", "fallback") == "fallback"

    @pytest.mark.unit
    def test_media_type_is_immutable(self):
        """Test that parsed media types cannot be modified."""
        media_type = parse_media_type("text/plain")
        with pytest.raises(Exception):
            media_type.value = "text/html"


class TestParseMediaTypeErrors:
    """Tests for malformed header values."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value",
        [
            "",
            "   ",
            "/plain",
            "text/",
            "text/plain/extra",
            "text plain",
            "text/plain; charset",
            "text/plain; charset=",
            "text/plain; =utf-8",
            'text/plain; name="unterminated',
            "text/plain; charset=utf-8; charset=latin1",
            "text/plain; charset=utf-8; charset=utf-8",
            "text/plain; Charset=a; CHARSET=a",
        ],
    )
    def test_invalid_values_raise(self, value):
        """Test that malformed values raise ParseError."""
        with pytest.raises(ParseError):
            parse_media_type(value)

    @pytest.mark.unit
    def test_none_raises(self):
        """Test that an absent header value raises ParseError."""
        with pytest.raises(ParseError):
            parse_media_type(None)

    @pytest.mark.unit
    def test_parse_error_hierarchy(self):
        """Test ParseError is both a MultipartError and a ValueError."""
        with pytest.raises(MultipartError):
            parse_media_type("")
        with pytest.raises(ValueError):
            parse_media_type("")


class TestRfc2231Parameters:
    """Tests for RFC 2231 extended parameter values."""

    @pytest.mark.unit
    def test_extended_value_decoded(self):
        """Test charset'lang'percent-encoded values."""
        disposition = parse_media_type("attachment; filename*=utf-8''r%C3%A9sum%C3%A9.pdf")
        assert disposition.get("filename") == "résumé.pdf"

    @pytest.mark.unit
    def test_extended_value_with_language(self):
        """Test that the language tag is skipped."""
        disposition = parse_media_type("attachment; filename*=us-ascii'en-us'This%20is%20it.txt")
        assert disposition.get("filename") == "This is it.txt"

    @pytest.mark.unit
    def test_continuations_joined(self):
        """Test plain continued parameters."""
        media_type = parse_media_type('application/x-stuff; title*0="This is even more "; title*1="***fun*** "; title*2="isn\'t it!"')
        assert media_type.get("title") == "This is even more ***fun*** isn't it!"

    @pytest.mark.unit
    def test_encoded_continuations_joined(self):
        """Test continued parameters mixing encoded and plain pieces."""
        media_type = parse_media_type(
            "application/x-stuff; "
            "title*0*=us-ascii'en'This%20is%20even%20more%20; "
            "title*1*=%2A%2A%2Afun%2A%2A%2A%20; "
            'title*2="isn\'t it!"'
        )
        assert media_type.get("title") == "This is even more ***fun*** isn't it!"

    @pytest.mark.unit
    def test_unknown_charset_dropped(self):
        """Test that an undecodable extended value is left out."""
        disposition = parse_media_type("attachment; filename*=no-such-charset''abc%20def")
        assert disposition.value == "attachment"
        assert "filename" not in disposition.params


class TestIsMultipart:
    """Tests for is_multipart() function."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "media_type,expected",
        [
            ("multipart/mixed", True),
            ("multipart/alternative", True),
            ("text/plain", False),
            ("message/rfc822", False),
            ("", False),
        ],
    )
    def test_is_multipart(self, media_type, expected):
        assert is_multipart(media_type) is expected
