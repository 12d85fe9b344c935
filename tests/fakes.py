"""In-memory stand-ins for the editor, terminal and system collaborators."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple, Union

from langrunner.languages import RunnerRegistry
from langrunner.runtime.runner import (
    ExecutionPipeline,
    PackageInstaller,
    TerminalPool,
    ToolchainInspector,
)
from langrunner.scripting import ScriptBuilder
from langrunner.types import TerminalSession


class FakeExecutor:
    """Answers ``which`` from a set of installed executables."""

    def __init__(
        self,
        installed: Iterable[str] = (),
        *,
        fail_install: bool = False,
        fail_write: bool = False,
    ) -> None:
        self.installed = set(installed)
        self.fail_install = fail_install
        self.fail_write = fail_write
        self.commands: List[str] = []
        self.writes: List[Tuple[int, str]] = []

    def execute(self, command_line: str, silent: bool = True) -> str:
        self.commands.append(command_line)
        if command_line.startswith("which "):
            executable = command_line.split(None, 1)[1]
            if executable in self.installed:
                return f"/usr/bin/{executable}\n"
            return ""
        if command_line.startswith("apk add") and self.fail_install:
            raise RuntimeError("network unreachable")
        return ""

    def write(self, process_handle: int, data: str) -> None:
        if self.fail_write:
            raise BrokenPipeError("terminal closed")
        self.writes.append((process_handle, data))


class FakeTerminals:
    def __init__(
        self,
        sessions: Sequence[TerminalSession] = (),
        *,
        with_pid: bool = True,
        fail_write: bool = False,
    ) -> None:
        self.sessions = list(sessions)
        self.with_pid = with_pid
        self.fail_write = fail_write
        self.created: List[TerminalSession] = []
        self.writes: List[Tuple[str, str]] = []

    def get_all(self) -> List[TerminalSession]:
        return list(self.sessions)

    def create_server(self, *, name: str) -> TerminalSession:
        index = len(self.created) + 1
        session = TerminalSession(
            id=f"term-{index}",
            name=name,
            pid=1000 + index if self.with_pid else None,
        )
        self.created.append(session)
        self.sessions.append(session)
        return session

    def write(self, session_id: str, data: str) -> None:
        if self.fail_write:
            raise BrokenPipeError("terminal closed")
        self.writes.append((session_id, data))


class FakeConfirmer:
    def __init__(self, answers: Union[bool, Sequence[bool]] = True) -> None:
        if isinstance(answers, bool):
            self._answers: Optional[List[bool]] = None
            self._default = answers
        else:
            self._answers = list(answers)
            self._default = False
        self.prompts: List[Tuple[str, str]] = []

    def confirm(self, title: str, message: str) -> bool:
        self.prompts.append((title, message))
        if self._answers is None:
            return self._default
        return self._answers.pop(0) if self._answers else self._default


class FakeNotifier:
    def __init__(self) -> None:
        self.messages: List[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)


class FakeProgressHandle:
    def __init__(self, title: str, message: str) -> None:
        self.title = title
        self.message = message
        self.hidden = False

    def hide(self) -> None:
        self.hidden = True


class FakeProgress:
    def __init__(self) -> None:
        self.handles: List[FakeProgressHandle] = []

    def create(self, title: str, message: str) -> FakeProgressHandle:
        handle = FakeProgressHandle(title, message)
        self.handles.append(handle)
        return handle


class FakeFileSystem:
    def __init__(self, existing: Iterable[str] = ()) -> None:
        self.existing = set(existing)
        self.checked: List[str] = []

    def exists(self, path: str) -> bool:
        self.checked.append(path)
        return path in self.existing


class PipelineHarness:
    """Bundles a pipeline with the fakes it talks to."""

    def __init__(
        self,
        *,
        installed: Iterable[str] = (),
        confirm: Union[bool, Sequence[bool]] = True,
        existing: Iterable[str] = (),
        sessions: Sequence[TerminalSession] = (),
        fail_install: bool = False,
        fail_write: bool = False,
        with_pid: bool = True,
        temp_dir: str = "/tmp",
        home_prefixes: Sequence[str] = (),
        registry: Optional[RunnerRegistry] = None,
    ) -> None:
        self.registry = registry or RunnerRegistry()
        if registry is None:
            self.registry.initialize_defaults()
        self.executor = FakeExecutor(
            installed, fail_install=fail_install, fail_write=fail_write
        )
        self.terminals = FakeTerminals(
            sessions, with_pid=with_pid, fail_write=fail_write
        )
        self.confirmer = FakeConfirmer(confirm)
        self.notifier = FakeNotifier()
        self.progress = FakeProgress()
        self.filesystem = FakeFileSystem(existing)
        self.pipeline = ExecutionPipeline(
            self.registry,
            inspector=ToolchainInspector(
                self.executor, self.filesystem, lookup_command="which"
            ),
            installer=PackageInstaller(
                self.executor, self.progress, self.notifier, timeout_s=5
            ),
            terminals=TerminalPool(
                self.terminals, self.executor, startup_delay_s=0
            ),
            confirmer=self.confirmer,
            notifier=self.notifier,
            scripts=ScriptBuilder(temp_dir=temp_dir, clock=lambda: 1700000000.0),
            temp_dir=temp_dir,
            home_prefixes=home_prefixes,
        )

    @property
    def sent(self) -> List[str]:
        """Everything written to any terminal, in order."""
        return [data for _, data in self.executor.writes] + [
            data for _, data in self.terminals.writes
        ]


