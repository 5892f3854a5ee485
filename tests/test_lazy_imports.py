"""Tests for switchyard.__init__ — lazy import registry covers all public names."""

import pytest

import switchyard


@pytest.mark.parametrize("name", switchyard.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(switchyard, name)
    assert obj is not None, f"switchyard.{name} resolved to None"


def test_resolved_names_are_canonical() -> None:
    from switchyard.app import App
    from switchyard.errors import HTTPError

    assert switchyard.App is App
    assert switchyard.HTTPError is HTTPError


def test_unknown_name_raises_attribute_error() -> None:
    """Accessing an unregistered name raises AttributeError."""
    with pytest.raises(AttributeError, match="no attribute"):
        switchyard.__getattr__("ThisDoesNotExist")
