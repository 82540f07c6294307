#!/usr/bin/env python
"""Root conftest.py that provides fixtures for the test suite.

The logger hierarchy, the mode switch and the stack-trace threshold are
process-wide, so every test starts from (and leaves behind) the same state:
global mode, no stack-trace capture, root at the default level, no overrides
and no listeners anywhere in the registry.
"""

import pytest

from hierlog import DEFAULT_LEVEL, OFF, attached_loggers, get_root_logger, settings


def _restore_hierarchy():
    settings.hierarchical_logging_enabled = True
    for attached in attached_loggers():
        attached.clear_listeners()
        if not attached.is_root:
            attached.level = None
    get_root_logger().level = DEFAULT_LEVEL
    settings.update(hierarchical_logging_enabled=False, record_stack_trace_at_level=OFF)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "serial: mark test to run serially (non-parallel)")


@pytest.fixture(autouse=True)
def clean_hierarchy():
    """Reset process-wide logging state around each test."""
    _restore_hierarchy()
    yield
    _restore_hierarchy()


@pytest.fixture
def root():
    return get_root_logger()


@pytest.fixture
def hierarchical():
    """Run the test in hierarchical mode."""
    settings.hierarchical_logging_enabled = True
    return settings


@pytest.fixture
def collect():
    """Build a handler that appends ``"LEVEL: message"`` strings to a list."""

    def _collect(target):
        return lambda record: target.append(f"{record.level}: {record.message}")

    return _collect
