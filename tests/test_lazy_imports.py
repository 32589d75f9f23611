"""Tests for waymark.__init__ — lazy import registry covers all public names."""

import pytest

import waymark


@pytest.mark.parametrize("name", waymark.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(waymark, name)
    assert obj is not None, f"waymark.{name} resolved to None"


def test_all_names_in_lazy_registry() -> None:
    missing = set(waymark.__all__) - set(waymark._LAZY_IMPORTS)
    assert not missing, f"Names in __all__ but not in _LAZY_IMPORTS: {sorted(missing)}."


def test_top_level_matches_submodules() -> None:
    from waymark.routing.router import Router

    assert waymark.Router is Router


def test_unknown_name_raises_attribute_error() -> None:
    with pytest.raises(AttributeError, match="no attribute"):
        waymark.__getattr__("ThisDoesNotExist")
