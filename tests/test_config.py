"""Tests for config TypedDicts and library defaults."""

import pytest

from ifetch import DEFAULT_HEADERS, DEFAULT_OPTIONS, BaseConfig, RequestConfig


class TestRequestConfig:
    """Tests for RequestConfig TypedDict."""

    def test_default_values(self) -> None:
        """Test that empty RequestConfig dict works."""
        # Defaults are applied while the request is prepared
        config: RequestConfig = {}

        assert config.get("method") is None
        assert config.get("headers") is None

    def test_custom_values(self) -> None:
        """Test setting custom values in RequestConfig dict."""
        config: RequestConfig = {
            "method": "post",
            "headers": {"Authorization": "Bearer token"},
            "qs": {"page": 2},
            "json": {"name": "Alice"},
            "no_parse_json": True,
            "redirect": "manual",
            "timeout": 5.0,
        }

        assert config["method"] == "post"
        assert config["qs"] == {"page": 2}
        assert config["json"] == {"name": "Alice"}
        assert config["no_parse_json"] is True
        assert config["redirect"] == "manual"


class TestBaseConfig:
    """Tests for BaseConfig TypedDict."""

    def test_custom_values(self) -> None:
        """Test BaseConfig accepts url, options and request keys."""
        config = BaseConfig(
            url="https://api.example.com/",
            options=lambda: {"headers": {"X-Token": "t"}},
            headers={"X-Client": "tests"},
        )

        assert config["url"] == "https://api.example.com/"
        assert callable(config["options"])
        assert config["headers"] == {"X-Client": "tests"}


class TestDefaults:
    """Tests for the library default options."""

    def test_default_options(self) -> None:
        """Test the browser-like default option values."""
        assert DEFAULT_OPTIONS["method"] == "get"
        assert DEFAULT_OPTIONS["body"] is None
        assert DEFAULT_OPTIONS["credentials"] == "include"
        assert DEFAULT_OPTIONS["cache"] == "no-cache"
        assert DEFAULT_OPTIONS["redirect"] == "follow"
        assert DEFAULT_OPTIONS["headers"] is DEFAULT_HEADERS

    def test_default_headers(self) -> None:
        """Test the browser-mimicking default headers."""
        assert DEFAULT_HEADERS["Pragma"] == "no-cache"
        assert DEFAULT_HEADERS["Cache-Control"] == "no-cache"
        assert DEFAULT_HEADERS["Upgrade-Insecure-Requests"] == "1"
        assert DEFAULT_HEADERS["Accept"].startswith("text/html")
        assert "Mozilla/5.0" in DEFAULT_HEADERS["User-Agent"]

    def test_defaults_are_read_only(self) -> None:
        """Test the default tables cannot be modified in place."""
        with pytest.raises(TypeError):
            DEFAULT_OPTIONS["method"] = "post"  # type: ignore[index]

        with pytest.raises(TypeError):
            DEFAULT_HEADERS["Accept"] = "*/*"  # type: ignore[index]
