"""
Performance timing for the search core.

PerformanceTimer collects named blocks per thread. Nested blocks hang below
the enclosing block, and repeated blocks with the same name under the same
parent are merged (elapsed time summed, calls counted). A search that
expands 10k nodes therefore reports one "expand" line, not 10k.

Nothing is collected unless DebugConfig.enable_performance_logging is set.
The report is written through the PERFORMANCE log domain.
"""

from __future__ import annotations
import time
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from statesearch.debug import DebugConfig, LogDomain, LogLevel


@dataclass
class TimingBlock:
    """
    Aggregated timing of one named block.

    Attributes:
        name: Block name passed to time_block()
        depth: Nesting level (0 = top level)
        elapsed: Total seconds over all calls
        calls: Number of completed calls
        children: Nested blocks by name, in first-seen order
    """
    name: str
    depth: int = 0
    elapsed: float = 0.0
    calls: int = 0
    children: Dict[str, TimingBlock] = field(default_factory=dict)

    def child(self, name: str) -> TimingBlock:
        block = self.children.get(name)
        if block is None:
            block = self.children[name] = TimingBlock(name, self.depth + 1)
        return block


class _ThreadTimings(threading.local):
    def __init__(self):
        self.stack: List[TimingBlock] = []
        self.results: Dict[str, TimingBlock] = {}


class PerformanceTimer:
    """Thread-safe hierarchical block timer with a flat measurement history."""

    def __init__(self, debug: Optional[DebugConfig] = None):
        self.debug = debug or DebugConfig()
        self._timings = _ThreadTimings()
        self.history: List[tuple] = []

    @property
    def enabled(self) -> bool:
        return self.debug.enable_performance_logging

    @contextmanager
    def time_block(self, name: str) -> Iterator[None]:
        """
        Time the enclosed code as block `name`.

        Must not span an await: the block stack is per thread, not per task.

        Example:
            >>> with timer.time_block("expand"):
            ...     children = caps.successors(state)
        """
        if not self.enabled:
            yield
            return

        stack = self._timings.stack
        if stack:
            block = stack[-1].child(name)
        else:
            block = self._timings.results.get(name)
            if block is None:
                block = self._timings.results[name] = TimingBlock(name)

        stack.append(block)
        started = time.perf_counter()
        try:
            yield
        finally:
            block.elapsed += time.perf_counter() - started
            block.calls += 1
            stack.pop()

    def blocks(self) -> List[TimingBlock]:
        """Top-level blocks of the current thread."""
        return list(self._timings.results.values())

    def record(self, label: Any, seconds: float) -> None:
        """Store one measurement (label, seconds)."""
        self.history.append((label, seconds))

    def average(self, label: Any = None) -> float:
        """Mean of recorded measurements (optionally of one label only)."""
        values = [seconds for key, seconds in self.history if label is None or key == label]
        if not values:
            return 0.0
        return sum(values) / len(values)

    def report_lines(self) -> List[str]:
        """
        Format collected blocks as indented lines.

        Each line shows the block's share of its parent (top-level blocks:
        share of the total) and the call count when merged.
        """
        blocks = self.blocks()
        if not blocks:
            return []

        total = sum(block.elapsed for block in blocks)
        lines = []

        def describe(block: TimingBlock, parent_elapsed: float) -> None:
            line = f"{'  ' * block.depth}{block.name}: {block.elapsed:.3f}s"
            if parent_elapsed > 0:
                line += f" ({block.elapsed / parent_elapsed * 100:.1f}%)"
            if block.calls > 1:
                line += f" [{block.calls} calls]"
            lines.append(line)
            for child in block.children.values():
                describe(child, block.elapsed)

        for block in blocks:
            describe(block, total)

        lines.append(f"TOTAL: {total:.3f}s")
        return lines

    def reset(self) -> None:
        self._timings.results = {}

    def log_results(self) -> List[str]:
        """Write the report through the PERFORMANCE log domain and clear it."""
        if not self.enabled:
            return []

        lines = self.report_lines()
        for line in lines:
            self.debug.log(LogDomain.PERFORMANCE, LogLevel.DEBUG, line)

        self.reset()
        return lines
