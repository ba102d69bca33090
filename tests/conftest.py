"""Root-level pytest fixtures for the rider test suite.

Provides shared descriptor and configuration fixtures. Tests build requests
through these factories instead of repeating raw field dicts.
"""

import logging

import pytest

from rider.schemas import ParamConfig, TransformDescriptor, resolve_config
from rider.pipeline import resolve_descriptor


# =============================================================================
# Descriptor Fixtures
# =============================================================================

@pytest.fixture
def make_request():
    """Factory fixture for unresolved transform descriptors.

    Examples
    --------
    >>> def test_real_forward(make_request):
    ...     request = make_request([8, 4], "real_forward", placement="notinplace")
    """
    def _make(lengths, transform_kind, placement="inplace", **fields):
        return TransformDescriptor(
            lengths=lengths,
            transform_kind=transform_kind,
            placement=placement,
            **fields,
        )

    return _make


@pytest.fixture
def resolve(make_request):
    """Factory fixture that builds a request and resolves it in one call."""
    def _resolve(lengths, transform_kind, placement="inplace", **fields):
        return resolve_descriptor(make_request(lengths, transform_kind, placement, **fields))

    return _resolve


# =============================================================================
# Configuration Fixtures (Pydantic-based)
# =============================================================================

@pytest.fixture
def param_config():
    """Expert configuration with all defaults."""
    return ParamConfig()


@pytest.fixture
def make_config(param_config):
    """Factory fixture for InternalConfig with user overrides.

    Examples
    --------
    >>> def test_custom_lengths(make_config):
    ...     config = make_config(LENGTH=[16, 16])
    ...     assert config.transform.lengths == (16, 16)
    """
    def _make(**user_overrides):
        return resolve_config(param_config, user_overrides or None, None)

    return _make


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler changes made by setup_logging()."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
