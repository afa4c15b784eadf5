"""
Unit tests for filename assignment (naming.py).

Tests cover:
- Declared filenames (Content-Disposition, RFC 2231); Content-Type name= is not one
- Synthesized "<radix>-<index><ext>" names
- Literal vs unique index policies
"""

import io

import pytest

from eml_exploder.decoding.naming import FilenamePolicy, LevelNamer, synthesize_name
from eml_exploder.parsing.boundary_reader import BoundaryReader, Part


def make_part(header_block: bytes, boundary: str = "radix") -> Part:
    body = b"--" + boundary.encode() + b"\n" + header_block + b"\nbody\n--" + boundary.encode() + b"--\n"
    return BoundaryReader(io.BytesIO(body), boundary).next_part()


class TestSynthesizeName:
    """Tests for synthesize_name() function."""

    @pytest.mark.unit
    def test_with_extension(self):
        assert synthesize_name("frontier", 1, "application/octet-stream") == "frontier-1.bin"

    @pytest.mark.unit
    def test_unknown_type_omits_extension(self):
        assert synthesize_name("frontier", 3, "application/x-unknown-thing") == "frontier-3"

    @pytest.mark.unit
    def test_missing_type_omits_extension(self):
        assert synthesize_name("frontier", 1, None) == "frontier-1"


class TestDeclaredFilename:
    """Tests for names taken from the part headers."""

    @pytest.mark.unit
    def test_content_disposition_filename(self):
        part = make_part(b'Content-Type: application/pdf\nContent-Disposition: attachment; filename="report.pdf"\n')
        assert LevelNamer("radix").name_for(part, "application/pdf") == "report.pdf"

    @pytest.mark.unit
    def test_rfc2231_filename(self):
        part = make_part(b"Content-Disposition: attachment; filename*=utf-8''na%C3%AFve.txt\n")
        assert LevelNamer("radix").name_for(part, None) == "naïve.txt"

    @pytest.mark.unit
    def test_content_type_name_not_a_filename(self):
        """Test that only Content-Disposition declares a filename."""
        part = make_part(b'Content-Type: application/pdf; name="doc.pdf"\n')

        assert part.get_filename() is None
        assert LevelNamer("radix").name_for(part, "application/pdf") == "radix-1.pdf"

    @pytest.mark.unit
    def test_declared_name_used_verbatim(self):
        part = make_part(b'Content-Disposition: attachment; filename="Weird Name (1).TXT"\n')
        assert LevelNamer("radix").name_for(part, "text/plain") == "Weird Name (1).TXT"

    @pytest.mark.unit
    def test_declared_names_do_not_advance_counter(self):
        namer = LevelNamer("radix", FilenamePolicy.UNIQUE)
        named = make_part(b'Content-Disposition: attachment; filename="a.txt"\n')
        unnamed = make_part(b"Content-Type: text/plain\n")

        assert namer.name_for(named, "text/plain") == "a.txt"
        assert namer.name_for(unnamed, "text/plain") == "radix-1.txt"


class TestPolicies:
    """Tests for literal and unique index policies."""

    @pytest.mark.unit
    def test_literal_policy_collides(self):
        """Unnamed siblings of the same type get the same name under the literal policy."""
        namer = LevelNamer("radix", FilenamePolicy.LITERAL)
        first = namer.name_for(make_part(b"Content-Type: text/plain\n"), "text/plain")
        second = namer.name_for(make_part(b"Content-Type: text/plain\n"), "text/plain")

        assert first == second == "radix-1.txt"

    @pytest.mark.unit
    def test_unique_policy_counts(self):
        namer = LevelNamer("radix", FilenamePolicy.UNIQUE)
        names = [namer.name_for(make_part(b"Content-Type: text/plain\n"), "text/plain") for _ in range(3)]

        assert names == ["radix-1.txt", "radix-2.txt", "radix-3.txt"]
        assert len(set(names)) == 3

    @pytest.mark.unit
    def test_custom_start_index(self):
        namer = LevelNamer("radix", "literal", start_index=0)
        assert namer.name_for(make_part(b"Content-Type: text/html\n"), "text/html") == "radix-0.html"

    @pytest.mark.unit
    def test_policy_from_string(self):
        assert LevelNamer("radix", "unique").policy is FilenamePolicy.UNIQUE

    @pytest.mark.unit
    def test_unknown_policy_rejected(self):
        with pytest.raises(ValueError):
            LevelNamer("radix", "random")
