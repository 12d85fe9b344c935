"""Execution pipeline result types and the terminal write capability."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Protocol

from langrunner.types import CommandCandidate


class RunState(str, Enum):
    RESOLVE_RUNNER = "resolve_runner"
    TRY_CANDIDATE = "try_candidate"
    DONE = "done"
    REJECTED = "rejected"
    EXHAUSTED = "exhausted"


class AttemptOutcome(str, Enum):
    DISPATCHED = "dispatched"
    SKIPPED_MANIFEST = "skipped_manifest"
    SKIPPED_MISSING = "skipped_missing"
    DECLINED = "declined"
    FAILED = "failed"


@dataclass
class CandidateAttempt:
    candidate: CommandCandidate
    outcome: AttemptOutcome
    command: Optional[str] = None
    error: Optional[str] = None


@dataclass
class RunResult:
    state: RunState
    runner_id: Optional[str] = None
    command: Optional[str] = None
    attempts: List[CandidateAttempt] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.state is RunState.DONE

    @property
    def dispatched(self) -> List[CandidateAttempt]:
        """Attempts that reached dispatch, successful or not."""
        return [
            attempt
            for attempt in self.attempts
            if attempt.outcome
            in (AttemptOutcome.DISPATCHED, AttemptOutcome.FAILED)
        ]


class CommandWriter(Protocol):
    def write(self, data: str) -> None:
        """Send ``data`` to the terminal's input stream."""
        ...
