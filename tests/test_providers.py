"""Tests for DefaultsProvider implementations."""

import pytest

from ifetch import CallableDefaults, DefaultsProvider, StaticDefaults
from ifetch.providers import as_provider


class TokenStore:
    """Minimal token store whose value changes between calls."""

    def __init__(self) -> None:
        self.calls = 0

    def snapshot(self) -> dict:
        self.calls += 1
        return {"headers": {"Authorization": f"Bearer token-{self.calls}"}}


class TestStaticDefaults:
    """Tests for StaticDefaults."""

    def test_snapshot_is_fresh_copy(self) -> None:
        """Test every snapshot is an independent deep copy."""
        source = {"headers": {"X-Client": "tests"}}
        provider = StaticDefaults(source)

        first = provider.snapshot()
        first["headers"]["X-Client"] = "changed"

        assert provider.snapshot() == {"headers": {"X-Client": "tests"}}
        assert source == {"headers": {"X-Client": "tests"}}

    def test_is_provider(self) -> None:
        """Test StaticDefaults satisfies the DefaultsProvider protocol."""
        assert isinstance(StaticDefaults({}), DefaultsProvider)


class TestCallableDefaults:
    """Tests for CallableDefaults."""

    def test_factory_called_per_snapshot(self) -> None:
        """Test the factory is invoked on every snapshot."""
        counter = iter(range(10))
        provider = CallableDefaults(lambda: {"qs": {"n": next(counter)}})

        assert provider.snapshot() == {"qs": {"n": 0}}
        assert provider.snapshot() == {"qs": {"n": 1}}

    def test_none_result(self) -> None:
        """Test a factory returning None yields empty defaults."""
        assert CallableDefaults(lambda: None).snapshot() == {}


class TestAsProvider:
    """Tests for as_provider()."""

    def test_mapping(self) -> None:
        """Test mappings become StaticDefaults."""
        assert isinstance(as_provider({"method": "post"}), StaticDefaults)

    def test_callable(self) -> None:
        """Test callables become CallableDefaults."""
        assert isinstance(as_provider(lambda: {}), CallableDefaults)

    def test_provider_used_as_is(self) -> None:
        """Test objects with snapshot() are returned unchanged."""
        store = TokenStore()

        assert as_provider(store) is store

    def test_invalid(self) -> None:
        """Test unsupported values raise TypeError."""
        with pytest.raises(TypeError, match="options must be"):
            as_provider(42)  # type: ignore[arg-type]
