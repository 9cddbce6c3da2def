"""Tests for code and URL validation."""

import pytest
from tinylink.common.validators import is_valid_code, is_valid_url


class TestCodeValidation:
    """Test short code validation."""

    @pytest.mark.parametrize("code", ["abc123", "ABCDEFGH", "a1B2c3D", "000000"])
    def test_valid_codes(self, code):
        assert is_valid_code(code)

    @pytest.mark.parametrize(
        "code",
        ["ab", "abc12", "ABCDEFGHI", "abc-123", "abc_123", "abc 12", "abc123\n", "", "ünïcode"],
    )
    def test_invalid_codes(self, code):
        assert not is_valid_code(code)

    def test_non_string_code(self):
        assert not is_valid_code(None)
        assert not is_valid_code(123456)


class TestUrlValidation:
    """Test target URL validation."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com",
            "http://x",
            "http://example.com/path",
            "https://sub.example.com:8080/path?query=value#frag",
            "HTTPS://EXAMPLE.COM",
        ],
    )
    def test_valid_urls(self, url):
        assert is_valid_url(url)

    @pytest.mark.parametrize(
        "url",
        [
            "ftp://x",
            "not a url",
            "example.com",
            "http://",
            "javascript:alert(1)",
            "mailto:someone@example.com",
            "http://[::1",
            "http://example.com:notaport/",
            "http://exa mple.com",
            "",
        ],
    )
    def test_invalid_urls(self, url):
        assert not is_valid_url(url)

    def test_non_string_url(self):
        assert not is_valid_url(None)
        assert not is_valid_url(42)
