import pytest

from shortlink_app.constants import MAX_URL_LENGTH
from shortlink_app.exceptions import InvalidShortCodeError, InvalidURLError
from shortlink_app.validators import validate_short_code, validate_url


class TestValidateUrl:

    @pytest.mark.parametrize("url", [
        "https://example.com/path",
        "http://example.com",
        "https://sub.example.co.uk:8443/a/b?q=1#frag",
    ])
    def test_accepts_http_and_https(self, url):
        assert validate_url(url) == url

    def test_trims_whitespace(self):
        assert validate_url("  https://example.com/path \n") == "https://example.com/path"

    def test_keeps_url_as_submitted(self):
        """No normalisation: no trailing slash is added"""
        assert validate_url("https://example.com") == "https://example.com"

    @pytest.mark.parametrize("url", [
        "ftp://example.com",
        "mailto:someone@example.com",
        "not-a-valid-url",
        "example.com/path",
        "http://",
        "/relative/path",
    ])
    def test_rejects_non_http_or_relative(self, url):
        with pytest.raises(InvalidURLError):
            validate_url(url)

    @pytest.mark.parametrize("value", [None, "", "   ", 42, ["https://example.com"]])
    def test_rejects_empty_or_non_string(self, value):
        with pytest.raises(InvalidURLError):
            validate_url(value)

    def test_length_limit(self):
        prefix = "https://example.com/"
        at_limit = prefix + "a" * (MAX_URL_LENGTH - len(prefix))

        assert validate_url(at_limit) == at_limit
        with pytest.raises(InvalidURLError):
            validate_url(at_limit + "a")


class TestValidateShortCode:

    def test_accepts_valid_code(self):
        assert validate_short_code("abcXYZ", 6) == "abcXYZ"

    @pytest.mark.parametrize("value", [None, ""])
    def test_rejects_missing(self, value):
        with pytest.raises(InvalidShortCodeError):
            validate_short_code(value, 6)

    def test_rejects_non_string(self):
        with pytest.raises(InvalidShortCodeError):
            validate_short_code(123456, 6)

    @pytest.mark.parametrize("value", ["abcde", "abcdefg"])
    def test_enforces_exact_length(self, value):
        with pytest.raises(InvalidShortCodeError):
            validate_short_code(value, 6)

    def test_length_is_floored(self):
        with pytest.raises(InvalidShortCodeError):
            validate_short_code("abcd", 4)
        assert validate_short_code("abcdef", 4) == "abcdef"

    @pytest.mark.parametrize("value", ["abc0ef", "abcOef", "abc1ef", "abclef", "abcIef", "abc-ef"])
    def test_enforces_alphabet(self, value):
        with pytest.raises(InvalidShortCodeError):
            validate_short_code(value, 6)
