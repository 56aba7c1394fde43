"""
Tests for URL validation and short code sanitization.
"""

import pytest

from shortener.core.exceptions import (
    BlockedDomainError,
    InvalidURLError,
    SchemeNotAllowedError,
    SelfReferentialURLError,
    ValidationError,
)
from shortener.core.url_normalizer import normalize_url
from shortener.core.validators import (
    URLValidator,
    sanitize_short_code,
    validate_url_length,
)


class TestURLValidator:
    """Test URLValidator.validate."""

    def test_valid_url(self, validator):
        result = validator.validate("https://github.com/golang/go")
        assert result.normalized_url == "https://github.com/golang/go"
        assert result.domain == "github.com"
        assert result.original_url == "https://github.com/golang/go"

    def test_returns_normalized_url(self, validator):
        result = validator.validate("  HTTPS://GitHub.com/golang/go/  ")
        assert result.normalized_url == "https://github.com/golang/go"
        assert result.domain == "github.com"

    def test_domain_keeps_subdomain(self, validator):
        assert validator.validate("https://docs.python.org/3/").domain == "docs.python.org"

    def test_upgrades_http_when_enforced(self, validator):
        result = validator.validate("http://github.com/golang/go")
        assert result.normalized_url == "https://github.com/golang/go"

    def test_keeps_http_when_not_enforced(self):
        validator = URLValidator(enforce_https=False)
        result = validator.validate("http://github.com/golang/go")
        assert result.normalized_url == "http://github.com/golang/go"

    def test_default_http_port_does_not_survive_upgrade(self, validator):
        result = validator.validate("http://github.com:80/golang/go")
        assert result.normalized_url == "https://github.com/golang/go"

    @pytest.mark.parametrize("raw_url, expected", [
        ("http://github.com:443/golang/go", "https://github.com/golang/go"),
        ("http://github.com:8080/golang/go", "https://github.com:8080/golang/go"),
    ])
    def test_upgraded_url_is_fully_normalized(self, validator, raw_url, expected):
        result = validator.validate(raw_url)
        assert result.normalized_url == expected
        assert normalize_url(result.normalized_url) == result.normalized_url

    @pytest.mark.parametrize("raw_url", [
        "ftp://files.python.org/pub",
        "javascript:alert(1)",
        "file:///etc/passwd",
        "data:text/html,hello",
    ])
    def test_rejects_other_schemes(self, validator, raw_url):
        with pytest.raises(SchemeNotAllowedError):
            validator.validate(raw_url)

    @pytest.mark.parametrize("raw_url", [
        "https://example.com/x",
        "https://api.example.com/x",
        "http://malicious.com",
    ])
    def test_rejects_blocked_domains(self, validator, raw_url):
        with pytest.raises(BlockedDomainError):
            validator.validate(raw_url)

    def test_block_list_does_not_match_lookalike_domains(self, validator):
        assert validator.validate("https://notexample.com/x").domain == "notexample.com"

    @pytest.mark.parametrize("raw_url", [
        "https://localhost/x",
        "http://127.0.0.1:8000/abc123",
        "https://sho.rt/abc123",
        "https://www.sho.rt/abc123",
    ])
    def test_rejects_self_referential_urls(self, validator, raw_url):
        with pytest.raises(SelfReferentialURLError):
            validator.validate(raw_url)

    @pytest.mark.parametrize("raw_url", [
        "",
        "   ",
        "not-a-url",
        "github.com/golang/go",
        "http://",
        "https://exa mple.org/x",
        "https://python.org:99999/",
    ])
    def test_rejects_malformed_urls(self, validator, raw_url):
        with pytest.raises(InvalidURLError):
            validator.validate(raw_url)

    def test_rejects_non_string_input(self, validator):
        with pytest.raises(InvalidURLError):
            validator.validate(None)

    def test_rejects_overlong_urls(self):
        validator = URLValidator(max_length=50)
        with pytest.raises(InvalidURLError):
            validator.validate("https://github.com/" + "a" * 100)

    def test_error_kinds_are_distinct(self, validator):
        """Each rejection reason surfaces its own stable kind."""
        kinds = set()
        for raw_url in ["not-a-url", "ftp://python.org", "https://example.com", "https://localhost"]:
            with pytest.raises(ValidationError) as exc_info:
                validator.validate(raw_url)
            kinds.add(exc_info.value.kind)
        assert kinds == {"invalid_url", "scheme_not_allowed", "blocked_domain", "self_referential"}


class TestSanitizeShortCode:
    """Test short code sanitization."""

    def test_valid_codes(self):
        assert sanitize_short_code("aB3dEf") == "aB3dEf"
        assert sanitize_short_code("  aB3dEf ") == "aB3dEf"

    @pytest.mark.parametrize("code", ["", None, "abc-12", "../etc", "a" * 21, "abc def"])
    def test_invalid_codes(self, code):
        assert sanitize_short_code(code) is None


def test_validate_url_length():
    assert validate_url_length("https://python.org")
    assert not validate_url_length("")
    assert not validate_url_length("https://python.org/" + "a" * 30, max_length=20)
