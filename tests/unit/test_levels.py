#!/usr/bin/env python
"""Tests for effective-level resolution and level mutation rules."""

import pytest

from hierlog import (
    ALL,
    DEBUG,
    ERROR,
    INFO,
    OFF,
    VERBOSE,
    WARN,
    Logger,
    UnsupportedOperationError,
    get_logger,
    settings,
)


@pytest.fixture
def chain():
    """The loggers a, a.b, a.b.c, a.b.c.d and a.b.c.d.e."""
    return [get_logger(name) for name in ("a", "a.b", "a.b.c", "a.b.c.d", "a.b.c.d.e")]


class TestLevelMutationRules:
    """Which loggers accept which level assignments."""

    def test_cannot_set_level_if_hierarchy_is_disabled(self, chain):
        a = chain[0]
        with pytest.raises(UnsupportedOperationError):
            a.level = DEBUG
        assert a.level_override is None

    def test_cannot_set_the_level_to_none_on_the_root_logger(self, root):
        with pytest.raises(UnsupportedOperationError):
            root.level = None
        assert root.level == INFO

    def test_cannot_set_the_level_to_none_on_a_detached_logger(self):
        with pytest.raises(UnsupportedOperationError):
            Logger.detached("l").level = None

    def test_cannot_set_none_on_root_in_hierarchical_mode(self, root, hierarchical):
        with pytest.raises(UnsupportedOperationError):
            root.level = None

    def test_unsupported_operation_is_a_type_error(self, chain):
        with pytest.raises(TypeError):
            chain[0].level = DEBUG

    def test_level_accepts_names(self, root):
        root.level = "warn"
        assert root.level is WARN


class TestEffectiveLevel:
    """Global versus hierarchical resolution."""

    def test_loggers_effective_level_no_hierarchy(self, root, chain):
        a, b = chain[0], chain[1]
        assert root.level == INFO
        assert a.level == INFO
        assert b.level == INFO

        root.level = ERROR

        assert root.level == ERROR
        assert a.level == ERROR
        assert b.level == ERROR

    def test_loggers_effective_level_with_hierarchy(self, root, chain, hierarchical):
        a, b, c = chain[:3]
        assert root.level == INFO
        assert a.level == INFO
        assert b.level == INFO
        assert c.level == INFO

        root.level = ERROR
        b.level = DEBUG

        assert root.level == ERROR
        assert a.level == ERROR
        assert b.level == DEBUG
        assert c.level == DEBUG

    def test_unset_override_inherits_again(self, root, chain, hierarchical):
        b, c = chain[1], chain[2]
        b.level = DEBUG
        c.level = WARN
        assert c.level == WARN

        c.level = None
        assert c.level_override is None
        assert c.level == DEBUG

    def test_loggers_effective_level_with_changing_hierarchy(self, root, chain):
        d, e = chain[3], chain[4]
        settings.hierarchical_logging_enabled = True
        d.level = ERROR
        settings.hierarchical_logging_enabled = False

        assert root.level == INFO
        assert d.level == root.level
        assert e.level == root.level
        # The override survives the mode switch
        assert d.level_override == ERROR

        settings.hierarchical_logging_enabled = True
        assert d.level == ERROR
        assert e.level == ERROR

    def test_is_loggable_is_appropriate(self, root, chain, hierarchical):
        c, e = chain[2], chain[4]
        root.level = ERROR
        c.level = ALL
        e.level = OFF

        assert root.is_loggable(ERROR)
        assert not root.is_loggable(WARN)
        assert c.is_loggable(VERBOSE)
        assert c.is_loggable(DEBUG)
        assert not e.is_loggable(ERROR)

    def test_is_loggable_global_mode(self, root, chain):
        root.level = ERROR
        assert chain[4].is_loggable(ERROR)
        assert not chain[4].is_loggable(WARN)

    def test_is_loggable_accepts_names_and_ranks(self, root):
        root.level = WARN
        assert root.is_loggable("error")
        assert root.is_loggable("warn")
        assert not root.is_loggable("info")
        assert root.is_loggable(900)
        assert not root.is_loggable(800)

    def test_is_loggable_rejects_unknown_names(self, root):
        with pytest.raises(ValueError):
            root.is_loggable("loudest")
