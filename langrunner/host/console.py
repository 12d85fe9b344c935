# Copyright (c) Meta Platforms, Inc. and affiliates.
# Modifications copyright (c) 2025 Logan Martel.
# Adapted from https://github.com/meta-pytorch/KernelAgent (Apache-2.0).

"""Console stand-ins for the editor's confirm dialog, loader and toast."""

from __future__ import annotations

import logging
import sys
import threading

from pathlib import Path
from typing import Optional, TextIO

LOGGER = logging.getLogger(__name__)

_YES = {"y", "yes"}


class ConsoleConfirmer:
    """Asks on the terminal unless an answer was fixed up front."""

    def __init__(
        self,
        assume: Optional[bool] = None,
        *,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ) -> None:
        self.assume = assume
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stderr

    def confirm(self, title: str, message: str) -> bool:
        if self.assume is not None:
            LOGGER.info("%s: %s -> %s", title, message, self.assume)
            return self.assume
        self._stdout.write(f"{title}\n{message} [y/N] ")
        self._stdout.flush()
        answer = self._stdin.readline()
        return answer.strip().lower() in _YES


class _ConsoleProgressHandle:
    def __init__(self, title: str) -> None:
        self.title = title
        self.hidden = False

    def hide(self) -> None:
        if self.hidden:
            return
        self.hidden = True
        LOGGER.debug("progress '%s' hidden", self.title)


class ConsoleProgress:
    """Prints the loader message once; ``hide`` is bookkeeping only."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream or sys.stderr

    def create(self, title: str, message: str) -> _ConsoleProgressHandle:
        self._stream.write(f"[{title}] {message}\n")
        self._stream.flush()
        return _ConsoleProgressHandle(title)


class ConsoleNotifier:
    """Writes notices to stderr and/or a log file."""

    def __init__(
        self,
        log_path: Optional[Path] = None,
        *,
        mode: str = "stderr",
        stream: Optional[TextIO] = None,
    ) -> None:
        self.log_path = log_path
        self.mode = mode
        self._stream = stream or sys.stderr
        self._lock = threading.Lock()

    def notify(self, message: str) -> None:
        if not message:
            return
        if self.log_path is not None:
            with self._lock:
                self.log_path.parent.mkdir(parents=True, exist_ok=True)
                with self.log_path.open("a", encoding="utf-8") as handle:
                    handle.write(message + "\n")
        if self.mode in {"stderr", "both"}:
            print(f"[langrunner] {message}", file=self._stream, flush=True)


__all__ = ["ConsoleConfirmer", "ConsoleNotifier", "ConsoleProgress"]
