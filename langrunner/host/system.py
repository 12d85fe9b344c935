# Copyright (c) Meta Platforms, Inc. and affiliates.
# Modifications copyright (c) 2025 Logan Martel.
# Adapted from https://github.com/meta-pytorch/KernelAgent (Apache-2.0).

"""Subprocess-backed command executor and local filesystem checks."""

from __future__ import annotations

import logging
import subprocess
import threading

from pathlib import Path
from typing import Dict, Optional

from langrunner.runtime.paths import is_local_uri, strip_file_scheme

LOGGER = logging.getLogger(__name__)


class ProcessTable:
    """Tracks long-running shells so their stdin can be written by pid."""

    def __init__(self) -> None:
        self._processes: Dict[int, subprocess.Popen] = {}
        self._lock = threading.Lock()

    def add(self, proc: subprocess.Popen) -> int:
        with self._lock:
            self._processes[proc.pid] = proc
        return proc.pid

    def get(self, pid: int) -> Optional[subprocess.Popen]:
        with self._lock:
            return self._processes.get(pid)

    def discard(self, pid: int) -> None:
        with self._lock:
            self._processes.pop(pid, None)

    def write(self, pid: int, data: str) -> None:
        proc = self.get(pid)
        if proc is None or proc.stdin is None:
            raise ProcessLookupError(f"no writable process with pid {pid}")
        if proc.poll() is not None:
            raise ProcessLookupError(f"process {pid} has exited")
        proc.stdin.write(data)
        proc.stdin.flush()


class SubprocessExecutor:
    """Runs shell command lines with ``subprocess``."""

    def __init__(
        self,
        processes: Optional[ProcessTable] = None,
        *,
        shell: Optional[str] = None,
        timeout_s: Optional[float] = None,
    ) -> None:
        self.processes = processes or ProcessTable()
        self.shell = shell
        self.timeout_s = timeout_s

    def execute(self, command_line: str, silent: bool = True) -> str:
        LOGGER.debug("execute: %s", command_line)
        proc = subprocess.run(
            command_line,
            shell=True,
            executable=self.shell,
            stdin=subprocess.DEVNULL,
            capture_output=silent,
            text=True,
            timeout=self.timeout_s,
            check=True,
        )
        return proc.stdout or ""

    def write(self, process_handle: int, data: str) -> None:
        self.processes.write(process_handle, data)


class LocalFileSystem:
    """Existence checks for ``file://`` URIs and plain paths."""

    def exists(self, path: str) -> bool:
        if not is_local_uri(path):
            return False
        return Path(strip_file_scheme(path)).exists()


__all__ = ["LocalFileSystem", "ProcessTable", "SubprocessExecutor"]
