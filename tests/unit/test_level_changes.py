#!/usr/bin/env python
"""Tests for level-change notifications."""

import pytest

from hierlog import ALL, DEBUG, ERROR, INFO, WARN, Level, Logger, ReentrantEmissionError, get_logger


class TestLevelChangeStream:
    """Level changes fire once per actual change."""

    def test_listen_for_level_changed(self, root):
        levels = []
        root.level = ALL
        root.subscribe_level_changes(levels.append)
        root.level = ERROR
        root.level = WARN
        assert levels == [ERROR, WARN]

    def test_not_emitted_when_setting_the_same_value(self, root):
        levels = []
        root.level = ALL
        root.on_level_changed(levels.append)
        root.level = ALL
        assert levels == []

    def test_equal_rank_counts_as_same_value(self, root):
        levels = []
        root.subscribe_level_changes(levels.append)
        root.level = Level("ALSO_INFO", INFO.rank)
        assert levels == []

    def test_cancelled_level_subscription(self, root):
        levels = []
        sub = root.subscribe_level_changes(levels.append)
        root.level = WARN
        sub.cancel()
        root.level = ERROR
        assert levels == [WARN]

    def test_clear_listeners_drops_level_subscriptions(self, root):
        levels = []
        root.subscribe_level_changes(levels.append)
        root.clear_listeners()
        root.level = ERROR
        assert levels == []

    def test_detached_logger_has_its_own_stream(self, root):
        detached = Logger.detached("d")
        levels, root_levels = [], []
        detached.subscribe_level_changes(levels.append)
        root.subscribe_level_changes(root_levels.append)
        detached.level = DEBUG
        assert levels == [DEBUG]
        assert root_levels == []


class TestNonRootLevelChanges:
    """Attached loggers fire when their own setter changes their effective level."""

    def test_fires_for_own_override(self, hierarchical):
        b = get_logger("a.b")
        levels = []
        b.subscribe_level_changes(levels.append)
        b.level = DEBUG
        b.level = DEBUG
        b.level = None
        assert levels == [DEBUG, INFO]

    def test_setting_inherited_value_does_not_fire(self, hierarchical):
        b = get_logger("a.b")
        levels = []
        b.subscribe_level_changes(levels.append)
        b.level = INFO
        assert levels == []
        assert b.level_override == INFO

    def test_ancestor_change_does_not_fire_descendant(self, root, hierarchical):
        b = get_logger("a.b")
        levels = []
        b.subscribe_level_changes(levels.append)
        root.level = ERROR
        assert b.level == ERROR
        assert levels == []


class TestReentrancy:
    """Changing a level from inside its own level-change handler fails fast."""

    def test_setting_level_in_a_loop_raises(self, root):
        root.level = ALL
        errors = []

        def handler(level):
            with pytest.raises(ReentrantEmissionError) as exc_info:
                root.level = ERROR
            errors.append(exc_info.value)

        root.subscribe_level_changes(handler)
        root.level = WARN
        assert len(errors) == 1
        assert isinstance(errors[0], RuntimeError)
        # The rejected assignment left the level alone
        assert root.level == WARN

    def test_reentrant_error_propagates_to_caller(self, root):
        def handler(level):
            root.level = DEBUG

        root.subscribe_level_changes(handler)
        with pytest.raises(ReentrantEmissionError):
            root.level = WARN
        assert root.level == WARN

    def test_other_logger_may_change_level_from_handler(self, root, hierarchical):
        b = get_logger("a.b")

        def handler(level):
            b.level = level

        root.subscribe_level_changes(handler)
        root.level = DEBUG
        assert b.level_override == DEBUG

    def test_stream_is_usable_after_handler_returns(self, root):
        levels = []
        root.subscribe_level_changes(levels.append)
        root.level = WARN
        root.level = ERROR
        assert levels == [WARN, ERROR]
