"""
Stepwise Execution Controller.

Wraps a GraphSearchEngine so that a traversal can be watched and driven:
automatic pacing, manual single-stepping, speed changes and cancellation
while the search is running.

State machine:
    IDLE -> RUNNING -> (PAUSED -> RUNNING)* -> COMPLETED | STOPPED

Per visited node the controller's hook
    1. answers STOP if a stop was requested
    2. awaits the observer (on_update) with the state and step index
    3. waits: fixed delay (automatic) or trigger_step() (manual)
    4. answers STOP if a stop was requested meanwhile

Everything runs on one event loop; the only suspension points are the
observer, the delay and the manual resume future.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Union
import asyncio
import inspect

from statesearch.config import RunnerConfig
from statesearch.debug import LogDomain, LogLevel
from statesearch.engine.engine import GraphSearchEngine
from statesearch.models import RunOutcome, RunReport, VisitSignal


OnUpdate = Callable[[Any, int], Union[Awaitable[None], None]]
OnComplete = Callable[[RunReport], Union[Awaitable[None], None]]


class RunnerStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"  # waiting for trigger_step()
    COMPLETED = "completed"
    STOPPED = "stopped"


@dataclass
class RunnerState:
    """
    Mutable run state, written only by the controller's own methods.

    Attributes:
        is_running: A start() call is in progress
        stop_requested: stop() was called during this run
        is_manual: Single-step mode (top speed level)
        delay_ms: Pause after each step in automatic mode
        pending_resume: Future resolved by trigger_step() (manual mode only)
        step_count: Observer invocations of this run
    """
    is_running: bool = False
    stop_requested: bool = False
    is_manual: bool = False
    delay_ms: int = 0
    pending_resume: Optional[asyncio.Future] = None
    step_count: int = 0


async def _call(callback: Optional[Callable[..., Any]], *args: Any) -> None:
    if callback is None:
        return
    outcome = callback(*args)
    if inspect.isawaitable(outcome):
        await outcome


class StepwiseExecutionController:
    """
    Play / pause / step / stop control over one GraphSearchEngine.

    Args:
        engine: Engine whose solve() is driven
        on_update: Observer (state, step_index), awaited before the next node
        on_complete: Called once per run with a RunReport
        config: RunnerConfig (speed table, initial level, logging policy)

    Example:
        >>> controller = StepwiseExecutionController(engine, on_update=draw)
        >>> controller.set_speed(6)  # manual
        >>> task = asyncio.create_task(controller.start(board))
        >>> controller.trigger_step()
    """

    def __init__(
        self,
        engine: GraphSearchEngine,
        on_update: Optional[OnUpdate] = None,
        on_complete: Optional[OnComplete] = None,
        config: Optional[RunnerConfig] = None,
    ):
        self.engine = engine
        self.on_update = on_update
        self.on_complete = on_complete
        self.config = config or RunnerConfig()
        self.state = RunnerState(delay_ms=self.config.default_delay_ms)
        self.status = RunnerStatus.IDLE

        if self.config.initial_level is not None:
            self.set_speed(self.config.initial_level)

    @property
    def is_paused(self) -> bool:
        return self.status is RunnerStatus.PAUSED

    def _log(self, log_level: LogLevel, message: str, /, **payload: Any) -> None:
        self.config.debug.log(LogDomain.RUNNER, log_level, message, **payload)

    async def start(self, start_state: Any) -> Optional[RunReport]:
        """
        Run the wrapped engine from start_state.

        Returns:
            RunReport (also handed to on_complete), or None if a run was
            already in progress

        Notes:
            - Exceptions from the engine or observer propagate; the
              controller returns to IDLE first
        """
        if self.state.is_running:
            self._log(LogLevel.WARN, "start() ignored, run already in progress")
            return None

        self.state.is_running = True
        self.state.stop_requested = False
        self.state.step_count = 0
        self.state.pending_resume = None
        self.status = RunnerStatus.RUNNING
        self._log(LogLevel.DEBUG, "Run started", manual=self.state.is_manual, delay_ms=self.state.delay_ms)

        try:
            result = await self.engine.solve(start_state, on_visit=self._on_visit)
        except BaseException:
            self.status = RunnerStatus.IDLE
            raise
        finally:
            self.state.is_running = False
            self.state.pending_resume = None

        outcome = RunOutcome.STOPPED if result.stopped else RunOutcome.COMPLETED
        self.status = RunnerStatus.STOPPED if result.stopped else RunnerStatus.COMPLETED
        report = RunReport(outcome=outcome, result=result, steps=self.state.step_count)
        self._log(LogLevel.DEBUG, "Run finished", outcome=outcome.value, steps=report.steps)

        await _call(self.on_complete, report)
        return report

    async def _on_visit(self, state: Any, frontier_size: int) -> Optional[VisitSignal]:
        if self.state.stop_requested:
            return VisitSignal.STOP

        self.state.step_count += 1
        await _call(self.on_update, state, self.state.step_count)

        if self.state.stop_requested:
            return VisitSignal.STOP

        if self.state.is_manual:
            resume = asyncio.get_running_loop().create_future()
            self.state.pending_resume = resume
            self.status = RunnerStatus.PAUSED
            await resume
        else:
            # delay 0 still yields so stop()/set_speed() callers get a turn
            await asyncio.sleep(self.state.delay_ms / 1000.0)

        if self.state.stop_requested:
            return VisitSignal.STOP
        return None

    def stop(self) -> None:
        """Request cancellation; releases a pending manual step. No-op when idle."""
        if not self.state.is_running:
            return
        self.state.stop_requested = True
        self._log(LogLevel.DEBUG, "Stop requested", step=self.state.step_count)
        self.trigger_step()

    def trigger_step(self) -> bool:
        """
        Release exactly one pending manual step.

        Returns:
            True if a paused step was released, False if nothing was pending
            (no steps are queued)
        """
        resume = self.state.pending_resume
        if resume is None or resume.done():
            return False

        self.state.pending_resume = None
        self.status = RunnerStatus.RUNNING
        resume.set_result(None)
        return True

    def set_speed(self, level: Union[int, str]) -> None:
        """
        Select a speed level.

        Args:
            level: 0..manual_level-1 map to config.speed_delays_ms,
                   manual_level (and above) switches to manual stepping

        Raises:
            ValueError: level is not an integer
        """
        level = int(level)

        if self.config.is_manual_level(level):
            self.state.is_manual = True
            self._log(LogLevel.DEBUG, "Manual mode", speed_level=level)
            return

        self.state.is_manual = False
        self.state.delay_ms = self.config.delay_for_level(level)
        self._log(LogLevel.DEBUG, "Automatic mode", speed_level=level, delay_ms=self.state.delay_ms)

        # A step waiting for a trigger would never be released in automatic mode
        self.trigger_step()
