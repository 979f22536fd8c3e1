"""
Stepwise execution of a search.

Public exports:
- StepwiseExecutionController: play / pause / step / stop around GraphSearchEngine
- RunnerState, RunnerStatus: controller state
"""

from statesearch.runner.controller import (
    RunnerState,
    RunnerStatus,
    StepwiseExecutionController,
)

__all__ = [
    'StepwiseExecutionController',
    'RunnerState',
    'RunnerStatus',
]
