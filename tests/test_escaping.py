"""
Tests for percent escaping of GVFS entry names and URIs.
"""

import pytest

from sharemount.errors import EscapeError
from sharemount.escaping import SHARE_PATH_SAFE_CHARS, escape, unescape


class TestEscape:

    def test_plain_value_is_unchanged(self):
        assert escape("Server1") == "Server1"
        assert escape("share-name_1.backup") == "share-name_1.backup"

    def test_separators_are_escaped(self):
        assert escape("a%b") == "a%25b"
        assert escape("a,b") == "a%2Cb"
        assert escape("a=b") == "a%3Db"

    def test_uri_delimiters_are_escaped(self):
        assert escape("dom;user@host:1") == "dom%3Buser%40host%3A1"
        assert escape("my share") == "my%20share"

    def test_slash_is_escaped_unless_allowed(self):
        assert escape("svc/backup") == "svc%2Fbackup"
        assert escape("share1/sub", safe=SHARE_PATH_SAFE_CHARS) == "share1/sub"

    def test_non_ascii_is_rejected(self):
        with pytest.raises(EscapeError):
            escape("Straße")


class TestUnescape:

    def test_decodes_hex_pairs(self):
        assert unescape("my%20share") == "my share"
        assert unescape("a%2cb") == "a,b"
        assert unescape("a%2Cb") == "a,b"

    def test_value_without_escapes(self):
        assert unescape("") == ""
        assert unescape("Share1") == "Share1"

    @pytest.mark.parametrize("value", ["abc%", "abc%4", "%zz", "%4g-", "x%%41"])
    def test_invalid_escape_sequence(self, value):
        with pytest.raises(EscapeError):
            unescape(value)

    def test_non_ascii_byte_is_rejected(self):
        with pytest.raises(EscapeError):
            unescape("caf%C3%A9")

    def test_highest_ascii_value_is_accepted(self):
        assert unescape("%7F") == "\x7f"

    @pytest.mark.parametrize("value", ["Share1", "100%", "a,b=c", "dom;user@srv", "with space", "~tilde/sub"])
    def test_round_trip(self, value):
        assert unescape(escape(value)) == value
