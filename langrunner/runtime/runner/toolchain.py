# Copyright (c) Meta Platforms, Inc. and affiliates.
# Modifications copyright (c) 2025 Logan Martel.
# Adapted from https://github.com/meta-pytorch/KernelAgent (Apache-2.0).

"""Toolchain availability checks and package installation."""

from __future__ import annotations

import logging
import os
import queue
import threading

from typing import Optional, Sequence

from langrunner.constants import PROGRESS_TITLE
from langrunner.host.base import (
    CommandExecutor,
    FileSystem,
    Notifier,
    ProgressFactory,
)
from langrunner.runtime import paths
from langrunner.types import CommandCandidate, TargetFile

LOGGER = logging.getLogger(__name__)


def default_lookup_command() -> str:
    return "where" if os.name == "nt" else "which"


class ToolchainInspector:
    """Answers "is this command installed?" and "is this a project?"."""

    def __init__(
        self,
        executor: CommandExecutor,
        filesystem: FileSystem,
        *,
        lookup_command: Optional[str] = None,
    ) -> None:
        self.executor = executor
        self.filesystem = filesystem
        self.lookup_command = lookup_command or default_lookup_command()

    def is_installed(self, candidate: CommandCandidate) -> bool:
        executable = candidate.executable
        if not executable:
            return False
        try:
            result = self.executor.execute(
                f"{self.lookup_command} {executable}", True
            )
        except Exception as exc:
            LOGGER.debug("%s lookup failed: %s", executable, exc)
            return False
        return bool(result and result.strip())

    def has_manifest(self, candidate: CommandCandidate, file: TargetFile) -> bool:
        if not candidate.requires_manifest:
            return True
        if not file.uri:
            return False
        project_dir = paths.dirname(file.uri)
        manifest = paths.join(project_dir, candidate.requires_manifest)
        try:
            return bool(self.filesystem.exists(manifest))
        except Exception as exc:
            LOGGER.debug("manifest check for %s failed: %s", manifest, exc)
            return False


class PackageInstaller:
    """Refreshes the package index and installs packages in the background."""

    def __init__(
        self,
        executor: CommandExecutor,
        progress: ProgressFactory,
        notifier: Notifier,
        *,
        refresh_command: str = "apk update",
        install_command: str = "apk add",
        timeout_s: Optional[float] = None,
    ) -> None:
        self.executor = executor
        self.progress = progress
        self.notifier = notifier
        self.refresh_command = refresh_command
        self.install_command = install_command
        self.timeout_s = timeout_s

    def install(self, packages: Sequence[str], description: str) -> bool:
        """Install ``packages``; failures are reported, never raised."""

        loader = self.progress.create(
            PROGRESS_TITLE, f"Installing {description}..."
        )
        errors: queue.Queue[Optional[BaseException]] = queue.Queue(maxsize=1)

        def _target() -> None:
            try:
                if self.refresh_command:
                    self.executor.execute(self.refresh_command, True)
                self.executor.execute(
                    f"{self.install_command} {' '.join(packages)}", True
                )
            except Exception as exc:
                errors.put(exc)
            else:
                errors.put(None)

        worker = threading.Thread(target=_target, daemon=True)
        worker.start()
        worker.join(self.timeout_s)
        loader.hide()
        if worker.is_alive():
            LOGGER.error("Installing %s timed out", description)
            self.notifier.notify(
                f"Failed to install {description}. Error: installation timed out"
            )
            return False
        try:
            error = errors.get_nowait()
        except queue.Empty:
            error = RuntimeError("installation aborted")
        if error is not None:
            LOGGER.error(
                "Error installing packages %s", packages, exc_info=error
            )
            self.notifier.notify(
                f"Failed to install {description}. Error: {error}"
            )
            return False
        self.notifier.notify(f"{description} installed successfully!")
        return True


__all__ = ["PackageInstaller", "ToolchainInspector", "default_lookup_command"]
