"""
Diagnostic logging policy for the search core.

The logging policy is an explicit configuration object passed into each
traversal component. There is no process-wide flag table.

Key Concepts:
- LogDomain: which component is speaking (engine, tree, runner, performance)
- LogLevel: enumerated severity (no string comparisons)
- DebugConfig: decides per (domain, level) whether a record is written

Hierarchy (highest wins):
    1. debug_all       -> everything is written
    2. debug_critical  -> WARN / ERROR / CRITICAL are written
    3. domains         -> DEBUG records only for enabled domains
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Optional, Any
import logging
import os


class LogLevel(IntEnum):
    """Severity of a diagnostic record (ordered)."""
    DEBUG = 10
    WARN = 30
    ERROR = 40
    CRITICAL = 50

    @property
    def logging_level(self) -> int:
        """Matching stdlib logging level."""
        return {
            LogLevel.DEBUG: logging.DEBUG,
            LogLevel.WARN: logging.WARNING,
            LogLevel.ERROR: logging.ERROR,
            LogLevel.CRITICAL: logging.CRITICAL,
        }[self]


class LogDomain(Enum):
    """Component that emits a diagnostic record."""
    ENGINE = "engine"
    TREE = "tree"
    RUNNER = "runner"
    PERFORMANCE = "performance"


def get_search_logger(
    name: str, log_file: Optional[str] = None, level: int = logging.INFO
) -> logging.Logger:
    """
    Get a configured logger for search components.

    Args:
        name: Logger name suffix (e.g. a LogDomain value)
        log_file: Optional file path to save logs to. If None, only console output.
        level: Logging level (default: INFO)

    Returns:
        Configured logger instance named ``statesearch.<name>``
    """
    logger = logging.getLogger(f"statesearch.{name}")

    # Clear existing handlers to avoid duplicates
    logger.handlers.clear()

    formatter = logging.Formatter(
        "[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.setLevel(level)
    return logger


@dataclass(frozen=True)
class DebugConfig:
    """
    Logging policy injected into engine, tree builder and runner.

    Attributes:
        debug_all: Write every record regardless of domain or level
        debug_critical: Write WARN/ERROR/CRITICAL records of every domain
        domains: Domains whose DEBUG records are written
        enable_performance_logging: Collect and report PerformanceTimer blocks

    Example:
        >>> cfg = DebugConfig(domains=frozenset({LogDomain.ENGINE}))
        >>> cfg.should_log(LogDomain.ENGINE, LogLevel.DEBUG)
        True
        >>> cfg.should_log(LogDomain.TREE, LogLevel.DEBUG)
        False
    """
    debug_all: bool = False
    debug_critical: bool = True
    domains: frozenset[LogDomain] = field(default_factory=frozenset)
    enable_performance_logging: bool = False

    def should_log(self, domain: LogDomain, level: LogLevel = LogLevel.DEBUG) -> bool:
        """Decide whether a record of this domain and level is written."""
        if self.debug_all:
            return True

        if level >= LogLevel.WARN:
            return self.debug_critical

        return domain in self.domains

    def log(self, domain: LogDomain, level: LogLevel, message: str, /, **payload: Any) -> bool:
        """
        Write a record if the policy allows it.

        Args:
            domain: Emitting component
            level: Severity
            message: Human readable message
            **payload: Structured fields, appended as key=value pairs
                       (any name allowed, the leading parameters are positional-only)

        Returns:
            True if the record was handed to the logger
        """
        if not self.should_log(domain, level):
            return False

        if payload:
            fields = " ".join(f"{key}={value!r}" for key, value in payload.items())
            message = f"{message} {fields}"

        logging.getLogger(f"statesearch.{domain.value}").log(level.logging_level, message)
        return True
