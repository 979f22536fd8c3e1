"""
Tests for configuration models (config.py) and the logging policy (debug.py).
"""

import logging

import pytest

from statesearch.config import RunnerConfig, SearchConfig, SearchStrategy, TreeConfig
from statesearch.debug import DebugConfig, LogDomain, LogLevel, get_search_logger


# ========== config.py ==========

@pytest.mark.parametrize("text, expected", [
    ("BFS", SearchStrategy.BREADTH_FIRST),
    ("bfs", SearchStrategy.BREADTH_FIRST),
    (" breadth-first ", SearchStrategy.BREADTH_FIRST),
    ("DFS", SearchStrategy.DEPTH_FIRST),
    ("depth_first", SearchStrategy.DEPTH_FIRST),
    (SearchStrategy.DEPTH_FIRST, SearchStrategy.DEPTH_FIRST),
])
def test_K1_strategy_parse(text, expected):
    """K1: Strategy names and enum members accepted"""
    assert SearchStrategy.parse(text) is expected


def test_K2_invalid_configuration():
    """K2: Unknown strategy and negative depth rejected at construction"""
    with pytest.raises(ValueError, match="Unknown search strategy"):
        SearchConfig(strategy="A*")
    with pytest.raises(ValueError):
        SearchConfig(max_depth=-1)
    with pytest.raises(ValueError):
        TreeConfig(strategy="greedy")


def test_K3_defaults():
    """K3: Documented defaults"""
    search = SearchConfig()
    assert search.strategy is SearchStrategy.BREADTH_FIRST
    assert search.max_depth == 1000
    assert search.check_duplicates

    tree = TreeConfig()
    assert tree.max_depth == 3
    assert not tree.continue_after_goal

    runner = RunnerConfig()
    assert runner.speed_delays_ms == (0, 20, 100, 300, 600, 1000)
    assert runner.manual_level == 6
    assert runner.default_delay_ms == 100


def test_K4_delay_table():
    """K4: In-table levels map to their delay, others to the default"""
    runner = RunnerConfig()
    assert [runner.delay_for_level(level) for level in range(6)] == [0, 20, 100, 300, 600, 1000]
    assert runner.delay_for_level(-3) == 100
    assert runner.is_manual_level(6)
    assert runner.is_manual_level(7)
    assert not runner.is_manual_level(5)

    slow = RunnerConfig(speed_delays_ms=(50,), manual_level=1, default_delay_ms=7)
    assert slow.delay_for_level(0) == 50
    assert slow.is_manual_level(1)


# ========== debug.py ==========

def test_L1_should_log_matrix():
    """L1: debug_all > debug_critical > enabled domains"""
    quiet = DebugConfig()
    assert not quiet.should_log(LogDomain.ENGINE, LogLevel.DEBUG)
    assert quiet.should_log(LogDomain.ENGINE, LogLevel.WARN)
    assert quiet.should_log(LogDomain.TREE, LogLevel.CRITICAL)

    silent = DebugConfig(debug_critical=False)
    assert not silent.should_log(LogDomain.RUNNER, LogLevel.ERROR)

    engine_only = DebugConfig(domains=frozenset({LogDomain.ENGINE}))
    assert engine_only.should_log(LogDomain.ENGINE, LogLevel.DEBUG)
    assert not engine_only.should_log(LogDomain.TREE, LogLevel.DEBUG)

    everything = DebugConfig(debug_all=True, debug_critical=False)
    assert everything.should_log(LogDomain.PERFORMANCE, LogLevel.DEBUG)
    assert everything.should_log(LogDomain.RUNNER, LogLevel.ERROR)


def test_L2_log_writes_payload(caplog):
    """L2: Records go to statesearch.<domain> with key=value payload"""
    cfg = DebugConfig(domains=frozenset({LogDomain.TREE}))

    with caplog.at_level(logging.DEBUG, logger="statesearch.tree"):
        assert cfg.log(LogDomain.TREE, LogLevel.DEBUG, "Expanded", node_id=3, depth=1)
        assert not cfg.log(LogDomain.ENGINE, LogLevel.DEBUG, "hidden")

    records = [r for r in caplog.records if r.name == "statesearch.tree"]
    assert len(records) == 1
    assert records[0].levelno == logging.DEBUG
    assert records[0].getMessage() == "Expanded node_id=3 depth=1"
    assert "hidden" not in caplog.text


def test_L3_level_mapping():
    """L3: LogLevel maps onto stdlib logging levels"""
    assert LogLevel.WARN.logging_level == logging.WARNING
    assert LogLevel.CRITICAL.logging_level == logging.CRITICAL
    assert LogLevel.DEBUG < LogLevel.WARN < LogLevel.ERROR


def test_L4_get_search_logger_no_duplicate_handlers(tmp_path):
    """L4: Repeated configuration replaces handlers, optional log file"""
    logger = get_search_logger("unit")
    logger = get_search_logger("unit")
    assert logger.name == "statesearch.unit"
    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO

    log_file = tmp_path / "logs" / "search.log"
    logger = get_search_logger("unit", log_file=str(log_file), level=logging.DEBUG)
    try:
        assert len(logger.handlers) == 2
        logger.debug("written")
        for handler in logger.handlers:
            handler.flush()
        assert "written" in log_file.read_text()
    finally:
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()


def test_L5_payload_may_reuse_parameter_names(caplog):
    """L5: Payload keys named like log()'s own parameters are plain fields"""
    cfg = DebugConfig(debug_all=True)

    with caplog.at_level(logging.DEBUG, logger="statesearch.runner"):
        assert cfg.log(LogDomain.RUNNER, LogLevel.DEBUG, "Speed", level=4, message="x", domain="y")

    assert "Speed level=4 message='x' domain='y'" in caplog.text
