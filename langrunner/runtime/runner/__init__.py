"""Runtime runner exports."""

from .base import (
    AttemptOutcome,
    CandidateAttempt,
    CommandWriter,
    RunResult,
    RunState,
)
from .pipeline import ExecutionPipeline
from .terminal import (
    ProcessHandleWriter,
    SessionWriter,
    TerminalPool,
    select_writer,
)
from .toolchain import PackageInstaller, ToolchainInspector

__all__ = [
    "AttemptOutcome",
    "CandidateAttempt",
    "CommandWriter",
    "ExecutionPipeline",
    "PackageInstaller",
    "ProcessHandleWriter",
    "RunResult",
    "RunState",
    "SessionWriter",
    "TerminalPool",
    "ToolchainInspector",
    "select_writer",
]
