"""Tests for waymark.config — RouterConfig frozen dataclass."""

import pytest

from waymark.config import RouterConfig


class TestRouterConfig:
    def test_defaults(self) -> None:
        cfg = RouterConfig()

        assert cfg.ignore_trailing_slash is False
        assert cfg.unquote_params is False
        assert cfg.parse_query is True
        assert cfg.keep_blank_query_values is True

    def test_override(self) -> None:
        cfg = RouterConfig(ignore_trailing_slash=True, unquote_params=True)

        assert cfg.ignore_trailing_slash is True
        assert cfg.unquote_params is True

    def test_frozen(self) -> None:
        cfg = RouterConfig()

        with pytest.raises(AttributeError):
            cfg.parse_query = False  # type: ignore[misc]

    def test_equality(self) -> None:
        assert RouterConfig(parse_query=False) == RouterConfig(parse_query=False)
        assert RouterConfig() != RouterConfig(parse_query=False)
