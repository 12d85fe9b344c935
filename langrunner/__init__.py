"""langrunner package entry point."""

from .exceptions import (
    DispatchError,
    InvalidCommandTemplateError,
    RunnerConfigError,
    RunnerError,
)
from .languages import RunnerRegistry
from .orchestrator import RunOrchestrator
from .runtime.runner import ExecutionPipeline, RunResult, RunState
from .types import CommandCandidate, RunnerDefinition, TargetFile, TerminalSession

__all__ = [
    "CommandCandidate",
    "DispatchError",
    "ExecutionPipeline",
    "InvalidCommandTemplateError",
    "RunOrchestrator",
    "RunResult",
    "RunState",
    "RunnerConfigError",
    "RunnerDefinition",
    "RunnerError",
    "RunnerRegistry",
    "TargetFile",
    "TerminalSession",
]
