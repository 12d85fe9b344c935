"""Execution pipeline: resolve a runner, then try its candidates in order."""

from __future__ import annotations

import logging
import threading

from typing import TYPE_CHECKING, Optional, Sequence

from langrunner.constants import DEFAULT_TEMP_DIR, INSTALL_TITLE
from langrunner.host.base import Confirmer, Notifier
from langrunner.runtime import paths
from langrunner.runtime.materialize import materialize
from langrunner.runtime.templates import substitute
from langrunner.scripting.wrapper import ScriptBuilder
from langrunner.types import CommandCandidate, RunnerDefinition, TargetFile

from .base import AttemptOutcome, CandidateAttempt, RunResult, RunState
from .terminal import TerminalPool
from .toolchain import PackageInstaller, ToolchainInspector

if TYPE_CHECKING:  # pragma: no cover
    from langrunner.languages.registry import RunnerRegistry

LOGGER = logging.getLogger(__name__)


class ExecutionPipeline:
    """Runs a file by handing a wrapped command to a terminal session.

    Candidates are tried strictly one after another; a candidate that was
    skipped or failed is never revisited within the same run. Dispatch means
    hand-off: the pipeline does not wait for the program to finish.
    """

    def __init__(
        self,
        registry: "RunnerRegistry",
        *,
        inspector: ToolchainInspector,
        installer: PackageInstaller,
        terminals: TerminalPool,
        confirmer: Confirmer,
        notifier: Notifier,
        scripts: Optional[ScriptBuilder] = None,
        temp_dir: str = DEFAULT_TEMP_DIR,
        home_prefixes: Sequence[str] = (),
    ) -> None:
        self.registry = registry
        self.inspector = inspector
        self.installer = installer
        self.terminals = terminals
        self.confirmer = confirmer
        self.notifier = notifier
        self.temp_dir = temp_dir
        self.scripts = scripts or ScriptBuilder(temp_dir=temp_dir)
        self.home_prefixes = tuple(home_prefixes)
        self._busy = threading.Lock()

    def run(self, file: Optional[TargetFile]) -> RunResult:
        """Run ``file``; every failure ends as a notice, never an exception."""

        if not self._busy.acquire(blocking=False):
            self.notifier.notify("A run is already in progress")
            return RunResult(RunState.REJECTED, error="run in progress")
        try:
            return self._run(file)
        except Exception as exc:  # pragma: no cover - last-resort guard
            LOGGER.exception("Unexpected error while running file")
            self.notifier.notify(f"Run failed: {exc}")
            return RunResult(RunState.EXHAUSTED, error=str(exc))
        finally:
            self._busy.release()

    def _run(self, file: Optional[TargetFile]) -> RunResult:
        if file is None or not file.runnable:
            self.notifier.notify("Cannot run this file type")
            return RunResult(RunState.REJECTED, error="unsupported file")

        extension = paths.extname(file.filename)
        runner = self.registry.lookup_by_extension(extension)
        if runner is None:
            self.notifier.notify(f"No runner configured for .{extension} files")
            return RunResult(
                RunState.REJECTED, error=f"no runner for .{extension}"
            )

        result = RunResult(RunState.TRY_CANDIDATE, runner_id=runner.id)
        for candidate in runner.commands:
            attempt = self._try_candidate(runner, candidate, file)
            result.attempts.append(attempt)
            if attempt.outcome is AttemptOutcome.DISPATCHED:
                result.state = RunState.DONE
                result.command = attempt.command
                return result

        self.notifier.notify(
            f"No working {runner.description} found. "
            "Please install manually or check terminal for errors."
        )
        result.state = RunState.EXHAUSTED
        result.error = "no working runner found"
        return result

    def _try_candidate(
        self,
        runner: RunnerDefinition,
        candidate: CommandCandidate,
        file: TargetFile,
    ) -> CandidateAttempt:
        try:
            if not self.inspector.has_manifest(candidate, file):
                LOGGER.debug(
                    "Skipping '%s': %s not found",
                    candidate.cmd,
                    candidate.requires_manifest,
                )
                return CandidateAttempt(
                    candidate, AttemptOutcome.SKIPPED_MANIFEST
                )

            if not self.inspector.is_installed(candidate):
                outcome = self._offer_installation(runner, candidate)
                if outcome is not None:
                    return CandidateAttempt(candidate, outcome)

            command = self.dispatch(candidate, file)
            return CandidateAttempt(
                candidate, AttemptOutcome.DISPATCHED, command=command
            )
        except Exception as exc:
            LOGGER.warning("Command failed: %s (%s)", candidate.cmd, exc)
            return CandidateAttempt(
                candidate, AttemptOutcome.FAILED, error=str(exc)
            )

    def _offer_installation(
        self, runner: RunnerDefinition, candidate: CommandCandidate
    ) -> Optional[AttemptOutcome]:
        """Return a skip outcome, or None when the candidate is now eligible."""

        packages = candidate.install_packages
        if not packages:
            self.notifier.notify(
                f"{runner.description} not found. Please install manually."
            )
            return AttemptOutcome.SKIPPED_MISSING

        confirmed = self.confirmer.confirm(
            INSTALL_TITLE,
            f"{runner.description} is not installed. "
            f"Install packages: {', '.join(packages)}?",
        )
        if not confirmed:
            return AttemptOutcome.DECLINED
        self.installer.install(packages, runner.description)
        return None

    def dispatch(self, candidate: CommandCandidate, file: TargetFile) -> str:
        """Materialize, wrap and send one candidate; returns the command run."""

        target = materialize(
            file, temp_dir=self.temp_dir, home_prefixes=self.home_prefixes
        )
        command = substitute(candidate.cmd, target.placeholders)
        content = file.content() if target.needs_temp_copy else ""
        launch = self.scripts.build(
            command, target, filename=file.filename, content=content
        )
        session = self.terminals.acquire(file.filename)
        self.terminals.send(session, launch.text)
        LOGGER.info("Dispatched '%s' to terminal '%s'", command, session.name)
        return command


__all__ = ["ExecutionPipeline"]
