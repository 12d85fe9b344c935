"""Collaborator contracts the runner core calls into."""

from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable

from langrunner.types import TerminalSession


@runtime_checkable
class Confirmer(Protocol):
    def confirm(self, title: str, message: str) -> bool:
        """Ask the user a yes/no question; may block indefinitely."""
        ...


class ProgressHandle(Protocol):
    def hide(self) -> None: ...


class ProgressFactory(Protocol):
    def create(self, title: str, message: str) -> ProgressHandle: ...


class Notifier(Protocol):
    def notify(self, message: str) -> None:
        """Show a short user-visible notice."""
        ...


class CommandExecutor(Protocol):
    def execute(self, command_line: str, silent: bool = True) -> str:
        """Run a command and return its output; raise on failure."""
        ...

    def write(self, process_handle: int, data: str) -> None:
        """Push ``data`` to the stdin of a running process."""
        ...


class TerminalProvider(Protocol):
    def get_all(self) -> Iterable[TerminalSession]: ...

    def create_server(self, *, name: str) -> TerminalSession: ...

    def write(self, session_id: str, data: str) -> None: ...


class FileSystem(Protocol):
    def exists(self, path: str) -> bool: ...


__all__ = [
    "CommandExecutor",
    "Confirmer",
    "FileSystem",
    "Notifier",
    "ProgressFactory",
    "ProgressHandle",
    "TerminalProvider",
]
