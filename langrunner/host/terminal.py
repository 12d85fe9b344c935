# Copyright (c) Meta Platforms, Inc. and affiliates.
# Modifications copyright (c) 2025 Logan Martel.
# Adapted from https://github.com/meta-pytorch/KernelAgent (Apache-2.0).

"""Terminal provider backed by interactive shell subprocesses."""

from __future__ import annotations

import logging
import subprocess
import uuid

from typing import Dict, List, Optional

from langrunner.constants import DEFAULT_SHELL
from langrunner.types import TerminalSession

from .system import ProcessTable

LOGGER = logging.getLogger(__name__)


class LocalTerminalProvider:
    """Spawns one shell per session; output goes straight to our stdout."""

    def __init__(
        self,
        processes: Optional[ProcessTable] = None,
        *,
        shell: str = DEFAULT_SHELL,
    ) -> None:
        self.processes = processes or ProcessTable()
        self.shell = shell
        self._sessions: Dict[str, TerminalSession] = {}

    def get_all(self) -> List[TerminalSession]:
        alive: List[TerminalSession] = []
        for session in list(self._sessions.values()):
            proc = self._process(session)
            if proc is not None and proc.poll() is None:
                alive.append(session)
            else:
                self._forget(session)
        return alive

    def create_server(self, *, name: str) -> TerminalSession:
        proc = subprocess.Popen(
            [self.shell],
            stdin=subprocess.PIPE,
            text=True,
        )
        pid = self.processes.add(proc)
        session = TerminalSession(id=uuid.uuid4().hex[:8], name=name, pid=pid)
        self._sessions[session.id] = session
        LOGGER.debug("started %s (pid %s) for '%s'", self.shell, pid, name)
        return session

    def write(self, session_id: str, data: str) -> None:
        session = self._sessions.get(session_id)
        if session is None or session.pid is None:
            raise KeyError(f"unknown terminal session '{session_id}'")
        self.processes.write(session.pid, data)

    def close_all(self, *, timeout_s: Optional[float] = None) -> None:
        """Close every shell's stdin and wait for queued commands to finish."""

        for session in list(self._sessions.values()):
            proc = self._process(session)
            if proc is None:
                continue
            if proc.stdin is not None and not proc.stdin.closed:
                proc.stdin.close()
            try:
                proc.wait(timeout=timeout_s)
            except subprocess.TimeoutExpired:
                LOGGER.warning("terminal '%s' still running; killing", session.name)
                proc.kill()
                proc.wait()
            self._forget(session)

    def _process(self, session: TerminalSession) -> Optional[subprocess.Popen]:
        if session.pid is None:
            return None
        return self.processes.get(session.pid)

    def _forget(self, session: TerminalSession) -> None:
        self._sessions.pop(session.id, None)
        if session.pid is not None:
            self.processes.discard(session.pid)


__all__ = ["LocalTerminalProvider"]
