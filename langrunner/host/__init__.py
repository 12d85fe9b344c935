"""Collaborator contracts plus local implementations for the CLI."""

from .base import (
    CommandExecutor,
    Confirmer,
    FileSystem,
    Notifier,
    ProgressFactory,
    ProgressHandle,
    TerminalProvider,
)
from .console import ConsoleConfirmer, ConsoleNotifier, ConsoleProgress
from .system import LocalFileSystem, ProcessTable, SubprocessExecutor
from .terminal import LocalTerminalProvider

__all__ = [
    "CommandExecutor",
    "Confirmer",
    "ConsoleConfirmer",
    "ConsoleNotifier",
    "ConsoleProgress",
    "FileSystem",
    "LocalFileSystem",
    "LocalTerminalProvider",
    "Notifier",
    "ProcessTable",
    "ProgressFactory",
    "ProgressHandle",
    "SubprocessExecutor",
    "TerminalProvider",
]
