"""
Unit tests for media type helpers (media_type.py).

Tests cover:
- Parsing type/subtype and parameters
- Quoted and RFC 2231 parameters
- Rejection of missing or malformed values
- Extension lookup from the built-in type table
"""

import pytest

from eml_exploder.errors import HeaderError, ParseError
from eml_exploder.parsing.media_type import extension_for, is_multipart, parse_media_type


class TestParseMediaType:
    """Tests for parse_media_type() function."""

    @pytest.mark.unit
    def test_type_is_lowercased(self):
        media_type, params = parse_media_type("Multipart/Mixed; boundary=abc")
        assert media_type == "multipart/mixed"
        assert params == {"boundary": "abc"}

    @pytest.mark.unit
    def test_quoted_boundary(self):
        _, params = parse_media_type('multipart/alternative; boundary="----=_Part_0_1.2"')
        assert params["boundary"] == "----=_Part_0_1.2"

    @pytest.mark.unit
    def test_parameter_names_lowercased(self):
        _, params = parse_media_type('text/plain; CharSet="utf-8"; Format=flowed')
        assert params == {"charset": "utf-8", "format": "flowed"}

    @pytest.mark.unit
    def test_rfc2231_parameter(self):
        _, params = parse_media_type("application/pdf; name*=utf-8''r%C3%A9sum%C3%A9.pdf")
        assert params["name"] == "résumé.pdf"

    @pytest.mark.unit
    def test_no_parameters(self):
        assert parse_media_type("text/html") == ("text/html", {})

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [None, "", "   ", "garbage", "text/", "/plain", "text/plain/extra"])
    def test_invalid_values_raise(self, value):
        with pytest.raises(HeaderError):
            parse_media_type(value)

    @pytest.mark.unit
    def test_header_error_is_parse_error(self):
        assert issubclass(HeaderError, ParseError)


class TestIsMultipart:
    """Tests for is_multipart() function."""

    @pytest.mark.unit
    def test_multipart_prefix(self):
        assert is_multipart("multipart/mixed")
        assert is_multipart("multipart/related")
        assert not is_multipart("text/plain")
        assert not is_multipart("message/rfc822")


class TestExtensionFor:
    """Tests for extension_for() function."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "media_type,expected",
        [
            ("text/plain", ".txt"),
            ("text/html", ".html"),
            ("application/octet-stream", ".bin"),
            ("application/pdf", ".pdf"),
            ("image/png", ".png"),
        ],
    )
    def test_known_types(self, media_type, expected):
        assert extension_for(media_type) == expected

    @pytest.mark.unit
    def test_unknown_type_has_no_extension(self):
        assert extension_for("application/x-made-up-type") == ""

    @pytest.mark.unit
    def test_missing_type_has_no_extension(self):
        assert extension_for(None) == ""
