"""Plugin-level controller that wires the registry to the pipeline."""

from __future__ import annotations

import importlib
import logging
import sys

from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from langrunner.configuration import (
    RunnerSettings,
    build_runner_settings,
    load_config,
)
from langrunner.exceptions import RunnerConfigError, RunnerError
from langrunner.host import (
    CommandExecutor,
    Confirmer,
    ConsoleConfirmer,
    ConsoleNotifier,
    ConsoleProgress,
    FileSystem,
    LocalFileSystem,
    LocalTerminalProvider,
    Notifier,
    ProcessTable,
    ProgressFactory,
    SubprocessExecutor,
    TerminalProvider,
)
from langrunner.languages import RunnerRegistry
from langrunner.runtime.runner import (
    ExecutionPipeline,
    PackageInstaller,
    RunResult,
    RunState,
    TerminalPool,
    ToolchainInspector,
)
from langrunner.scripting import ScriptBuilder, ScriptManager
from langrunner.types import TargetFile

DEFAULT_CONFIG_PATH = Path("configs/default_config.yaml")
PLUGIN_HOOK = "register_runners"
_DOTENV_LOADED = False
LOGGER = logging.getLogger(__name__)


class RunOrchestrator:
    """Owns one registry and one pipeline for the lifetime of the plugin."""

    def __init__(
        self,
        config_path: Optional[Path] = None,
        *,
        config: Optional[Dict[str, Any]] = None,
        registry: Optional[RunnerRegistry] = None,
        confirmer: Optional[Confirmer] = None,
        notifier: Optional[Notifier] = None,
        progress: Optional[ProgressFactory] = None,
        executor: Optional[CommandExecutor] = None,
        terminals: Optional[TerminalProvider] = None,
        filesystem: Optional[FileSystem] = None,
        temp_dir: Optional[str] = None,
    ) -> None:
        self.config_path = config_path
        self._config_root = (
            Path(config_path).resolve().parent
            if config_path is not None
            else Path.cwd()
        )
        self._ensure_dotenv()
        if config is not None:
            self.config = config
        elif config_path is not None:
            self.config = load_config(Path(config_path))
        else:
            self.config = {}
        self.settings: RunnerSettings = build_runner_settings(
            self.config, config_root=self._config_root, temp_dir=temp_dir
        )
        execution = self.settings.execution

        self.registry = registry or RunnerRegistry()
        self.notifier = notifier or ConsoleNotifier()
        self.confirmer = confirmer or ConsoleConfirmer()
        self.progress = progress or ConsoleProgress()
        self.executor = executor or SubprocessExecutor(ProcessTable())
        self.terminal_provider = terminals or LocalTerminalProvider(
            getattr(self.executor, "processes", None), shell=execution.shell
        )
        self.filesystem = filesystem or LocalFileSystem()

        packages = self.settings.packages
        script_manager = ScriptManager(
            extra_dirs=list(self.settings.script_overrides)
        )
        self.pipeline = ExecutionPipeline(
            self.registry,
            inspector=ToolchainInspector(
                self.executor,
                self.filesystem,
                lookup_command=execution.lookup_command,
            ),
            installer=PackageInstaller(
                self.executor,
                self.progress,
                self.notifier,
                refresh_command=packages.refresh_command,
                install_command=packages.install_command,
                timeout_s=packages.timeout_s,
            ),
            terminals=TerminalPool(
                self.terminal_provider,
                self.executor,
                startup_delay_s=execution.session_startup_delay_s,
                line_ending=execution.line_ending,
            ),
            confirmer=self.confirmer,
            notifier=self.notifier,
            scripts=ScriptBuilder(script_manager, temp_dir=execution.temp_dir),
            temp_dir=execution.temp_dir,
            home_prefixes=execution.home_prefixes,
        )
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def init(self) -> None:
        """Seed defaults, then layer plugin modules and configured runners."""

        self.registry.initialize_defaults()
        self._import_plugin_modules()
        for definition in self.settings.runners:
            self.registry.register(definition.id, definition)
        for runner_id in self.settings.disabled_runners:
            self.registry.unregister(runner_id)
        self._initialized = True
        LOGGER.debug("Registered runners: %s", ", ".join(self.registry.list_all()))

    def can_run(self, filename: Optional[str]) -> bool:
        try:
            return self.registry.can_run(filename)
        except Exception:
            LOGGER.exception("can_run failed for %r", filename)
            return False

    def run(self, file: Optional[TargetFile]) -> RunResult:
        if not self._initialized:
            try:
                self.init()
            except RunnerError as exc:
                LOGGER.error("Runner setup failed: %s", exc)
                self.notifier.notify(f"Runner setup failed: {exc}")
                return RunResult(RunState.REJECTED, error=str(exc))
        return self.pipeline.run(file)

    def destroy(self) -> None:
        self.registry.teardown()
        self._initialized = False

    def _import_plugin_modules(self) -> None:
        plugins = self.settings.plugins
        for path in plugins.paths:
            if not path.exists():
                raise RunnerConfigError(f"Plugin path '{path}' does not exist")
            if str(path) not in sys.path:
                sys.path.insert(0, str(path))
        for dotted in plugins.modules:
            try:
                module = importlib.import_module(dotted)
            except Exception as exc:
                raise RunnerConfigError(
                    f"Failed to import plugin module '{dotted}': {exc}"
                ) from exc
            hook = getattr(module, PLUGIN_HOOK, None)
            if callable(hook):
                try:
                    hook(self.registry)
                except Exception as exc:
                    raise RunnerConfigError(
                        f"Plugin module '{dotted}' failed to register "
                        f"runners: {exc}"
                    ) from exc
            else:
                LOGGER.warning(
                    "Plugin module '%s' has no %s() hook", dotted, PLUGIN_HOOK
                )

    def _ensure_dotenv(self) -> None:
        global _DOTENV_LOADED
        if _DOTENV_LOADED:
            return
        try:  # pragma: no cover
            load_dotenv()
        except Exception:
            pass
        _DOTENV_LOADED = True


__all__ = ["DEFAULT_CONFIG_PATH", "PLUGIN_HOOK", "RunOrchestrator"]
