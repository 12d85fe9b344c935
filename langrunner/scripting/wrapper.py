"""Builds the wrapper script and the launcher that delivers it."""

from __future__ import annotations

import time

from dataclasses import dataclass
from typing import Callable, Optional

from langrunner.constants import (
    LAUNCHER_TEMPLATE,
    SOURCE_HEREDOC_MARKER,
    WRAPPER_HEREDOC_MARKER,
    WRAPPER_SCRIPT_PREFIX,
    WRAPPER_TEMPLATE,
)
from langrunner.runtime import paths
from langrunner.runtime.materialize import Materialization

from .manager import ScriptManager

RUNNER_TAG = "\\033[1;36m[RUNNER]\\033[0m"
SEPARATOR = "─" * 40


def heredoc_marker(base: str, body: str) -> str:
    """Return ``base`` or a suffixed variant that no line of ``body`` equals."""

    lines = set(body.splitlines())
    marker = base
    suffix = 0
    while marker in lines:
        suffix += 1
        marker = f"{base}_{suffix}"
    return marker


@dataclass(frozen=True)
class LaunchScript:
    """Text to send to the terminal, plus what it will create and remove."""

    text: str
    wrapper_path: str
    wrapper: str
    temp_path: Optional[str] = None


class ScriptBuilder:
    def __init__(
        self,
        manager: Optional[ScriptManager] = None,
        *,
        temp_dir: str = "/tmp",
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.manager = manager or ScriptManager()
        self.temp_dir = temp_dir
        self._clock = clock

    def build_wrapper(
        self,
        command: str,
        target: Materialization,
        *,
        filename: str,
        content: str = "",
    ) -> str:
        source_marker = heredoc_marker(SOURCE_HEREDOC_MARKER, content)
        return self.manager.render(
            WRAPPER_TEMPLATE,
            command=command,
            filename=filename,
            content=content,
            temp_path=target.temp_path,
            source_marker=source_marker,
            change_dir=target.changes_directory,
            working_dir=target.shell_directory,
            tag=RUNNER_TAG,
            separator=SEPARATOR,
        )

    def build_launcher(self, wrapper: str) -> tuple[str, str]:
        wrapper_path = paths.join(
            self.temp_dir,
            f"{WRAPPER_SCRIPT_PREFIX}{int(self._clock() * 1000)}.sh",
        )
        marker = heredoc_marker(WRAPPER_HEREDOC_MARKER, wrapper)
        text = self.manager.render(
            LAUNCHER_TEMPLATE,
            wrapper_path=wrapper_path,
            marker=marker,
            script=wrapper,
        )
        return text, wrapper_path

    def build(
        self,
        command: str,
        target: Materialization,
        *,
        filename: str,
        content: str = "",
    ) -> LaunchScript:
        """Wrap ``command`` and embed the wrapper in a self-deleting launcher."""

        wrapper = self.build_wrapper(
            command,
            target,
            filename=filename,
            content=content if target.needs_temp_copy else "",
        )
        text, wrapper_path = self.build_launcher(wrapper)
        return LaunchScript(
            text=text,
            wrapper_path=wrapper_path,
            wrapper=wrapper,
            temp_path=target.temp_path,
        )


__all__ = ["LaunchScript", "ScriptBuilder", "heredoc_marker"]
