"""Tests for utility functions."""

import httpx

from http_transport.core import utils
from http_transport.core.utils import (
    default_user_agent,
    package_version,
    sanitize_headers,
    sanitize_url,
)


class TestUserAgent:
    """Default User-Agent."""

    def test_default_user_agent_format(self):
        assert default_user_agent() == f"http-transport/{package_version()}"

    def test_version_fallback_when_not_installed(self, monkeypatch):
        def missing(name):
            raise utils.PackageNotFoundError(name)

        monkeypatch.setattr(utils, "version", missing)

        assert package_version() == "0.0.0-dev"
        assert default_user_agent() == "http-transport/0.0.0-dev"


class TestSanitizeUrl:
    """Tests for sanitize_url function."""

    def test_sanitize_api_key(self):
        """Test sanitization of api_key parameter."""
        result = sanitize_url("https://api.example.com/data?api_key=secret123")

        assert "secret123" not in result
        assert "api_key=REDACTED" in result
        assert "https://api.example.com/data" in result

    def test_sanitize_password(self):
        url = "https://api.example.com/login?user=john&password=secret&remember=true"
        result = sanitize_url(url)

        assert "secret" not in result
        assert "password=REDACTED" in result
        assert "user=john" in result
        assert "remember=true" in result

    def test_sanitize_case_insensitive(self):
        result = sanitize_url("https://api.example.com/data?API_KEY=secret&Token=abc")

        assert "secret" not in result
        assert "abc" not in result

    def test_sanitize_with_extra_params(self):
        """Test sanitization with custom sensitive parameters."""
        url = "https://api.example.com/data?custom_token=secret123&normal=value"
        result = sanitize_url(url, extra_params={'custom_token'})

        assert "custom_token=REDACTED" in result
        assert "normal=value" in result

    def test_url_without_sensitive_params_unchanged(self):
        url = "http://www.example.com/?a=1&a=2&b=x"
        assert sanitize_url(url) == url

    def test_url_without_query_unchanged(self):
        assert sanitize_url("http://www.example.com/") == "http://www.example.com/"

    def test_empty_url(self):
        assert sanitize_url("") == ""

    def test_multiple_values_same_param(self):
        result = sanitize_url("https://api.example.com/data?token=val1&token=val2")

        assert "val1" not in result
        assert "val2" not in result
        assert result.count("REDACTED") == 2

    def test_custom_mask(self):
        result = sanitize_url("https://api.example.com/data?api_key=secret", mask="***")
        assert "api_key=%2A%2A%2A" in result or "api_key=***" in result


class TestSanitizeHeaders:
    """Tests for sanitize_headers function."""

    def test_sanitize_mixed_headers(self):
        headers = {
            'Authorization': 'Bearer secret',
            'Content-Type': 'application/json',
            'X-API-Key': 'key123',
            'Cookie': 'session=abc',
        }
        result = sanitize_headers(headers)

        assert result['Authorization'] == 'REDACTED'
        assert result['X-API-Key'] == 'REDACTED'
        assert result['Cookie'] == 'REDACTED'
        assert result['Content-Type'] == 'application/json'

    def test_sanitize_httpx_headers(self):
        result = sanitize_headers(httpx.Headers({"Authorization": "Bearer x", "foo": "bar"}))

        assert result["authorization"] == "REDACTED"
        assert result["foo"] == "bar"

    def test_sanitize_empty_headers(self):
        assert sanitize_headers({}) == {}
