"""Terminal session reuse and the two ways of writing to a session."""

from __future__ import annotations

import logging
import time

from typing import Callable

from langrunner.constants import RUN_SESSION_PREFIX
from langrunner.exceptions import DispatchError
from langrunner.host.base import CommandExecutor, TerminalProvider
from langrunner.types import TerminalSession

from .base import CommandWriter

LOGGER = logging.getLogger(__name__)


class ProcessHandleWriter(CommandWriter):
    """Writes straight to the shell process through the executor."""

    def __init__(self, executor: CommandExecutor, pid: int) -> None:
        self._executor = executor
        self.pid = pid

    def write(self, data: str) -> None:
        self._executor.write(self.pid, data)


class SessionWriter(CommandWriter):
    """Writes through the terminal provider by session id."""

    def __init__(self, terminals: TerminalProvider, session_id: str) -> None:
        self._terminals = terminals
        self.session_id = session_id

    def write(self, data: str) -> None:
        self._terminals.write(self.session_id, data)


def select_writer(
    session: TerminalSession,
    *,
    executor: CommandExecutor,
    terminals: TerminalProvider,
) -> CommandWriter:
    if session.pid is not None:
        return ProcessHandleWriter(executor, session.pid)
    return SessionWriter(terminals, session.id)


class TerminalPool:
    """Finds an idle terminal session or asks the provider for a new one."""

    def __init__(
        self,
        terminals: TerminalProvider,
        executor: CommandExecutor,
        *,
        startup_delay_s: float = 0.5,
        line_ending: str = "\n",
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.terminals = terminals
        self.executor = executor
        self.startup_delay_s = startup_delay_s
        self.line_ending = line_ending
        self._sleep = sleep

    def acquire(self, filename: str) -> TerminalSession:
        try:
            for session in self.terminals.get_all():
                if not session.is_busy:
                    return session
            session = self.terminals.create_server(
                name=f"{RUN_SESSION_PREFIX}{filename}"
            )
        except Exception as exc:
            raise DispatchError(f"could not open a terminal: {exc}") from exc
        if self.startup_delay_s > 0:
            self._sleep(self.startup_delay_s)
        return session

    def send(self, session: TerminalSession, text: str) -> None:
        writer = select_writer(
            session, executor=self.executor, terminals=self.terminals
        )
        try:
            writer.write(text + self.line_ending)
        except Exception as exc:
            raise DispatchError(
                f"could not write to terminal '{session.name}': {exc}"
            ) from exc


__all__ = [
    "ProcessHandleWriter",
    "SessionWriter",
    "TerminalPool",
    "select_writer",
]
