"""Typed helpers for parsing langrunner configuration dictionaries."""

from __future__ import annotations

import os

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from langrunner.constants import (
    DEFAULT_HOME_PREFIXES,
    DEFAULT_PACKAGE_MANAGER,
    DEFAULT_SHELL,
    DEFAULT_TEMP_DIR,
    ENV_PACKAGE_MANAGER,
    ENV_TEMP_DIR,
    PACKAGE_MANAGER_PRESETS,
)
from langrunner.exceptions import InvalidCommandTemplateError, RunnerConfigError
from langrunner.runtime.templates import validate_templates
from langrunner.types import RunnerDefinition


def _ensure_path(value: str | Path, *, config_root: Path) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = (config_root / path).resolve()
    return path


def _as_tuple(value: Any) -> Tuple[str, ...]:
    if value is None:
        return tuple()
    if isinstance(value, str):
        return (value,)
    return tuple(str(item) for item in value)


@dataclass(frozen=True)
class ExecutionSettings:
    temp_dir: str = DEFAULT_TEMP_DIR
    home_prefixes: Tuple[str, ...] = DEFAULT_HOME_PREFIXES
    line_ending: str = "\n"
    session_startup_delay_s: float = 0.5
    shell: str = DEFAULT_SHELL
    lookup_command: Optional[str] = None


@dataclass(frozen=True)
class PackageSettings:
    manager: str = DEFAULT_PACKAGE_MANAGER
    refresh_command: str = PACKAGE_MANAGER_PRESETS[DEFAULT_PACKAGE_MANAGER][0]
    install_command: str = PACKAGE_MANAGER_PRESETS[DEFAULT_PACKAGE_MANAGER][1]
    timeout_s: Optional[float] = 600.0


@dataclass(frozen=True)
class PluginSettings:
    modules: Tuple[str, ...] = field(default_factory=tuple)
    paths: Tuple[Path, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RunnerSettings:
    execution: ExecutionSettings = field(default_factory=ExecutionSettings)
    packages: PackageSettings = field(default_factory=PackageSettings)
    plugins: PluginSettings = field(default_factory=PluginSettings)
    script_overrides: Tuple[Path, ...] = field(default_factory=tuple)
    runners: Tuple[RunnerDefinition, ...] = field(default_factory=tuple)
    disabled_runners: Tuple[str, ...] = field(default_factory=tuple)


def load_config(path: Path) -> Dict[str, Any]:
    path = Path(path)
    if not path.exists():
        raise RunnerConfigError(f"Config file {path} not found")
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise RunnerConfigError(f"Config file {path} must contain a mapping")
    return data


def _build_package_settings(
    packages_cfg: Mapping[str, Any], environ: Mapping[str, str]
) -> PackageSettings:
    manager = str(
        environ.get(ENV_PACKAGE_MANAGER)
        or packages_cfg.get("manager")
        or DEFAULT_PACKAGE_MANAGER
    ).lower()
    preset = PACKAGE_MANAGER_PRESETS.get(manager)
    refresh = packages_cfg.get("refresh_command")
    install = packages_cfg.get("install_command")
    if preset is None and not install:
        raise RunnerConfigError(
            f"Unknown package manager '{manager}'; "
            "set packages.install_command explicitly"
        )
    if preset is not None:
        refresh = preset[0] if refresh is None else refresh
        install = install or preset[1]
    timeout = packages_cfg.get("timeout_s", 600)
    return PackageSettings(
        manager=manager,
        refresh_command=str(refresh or ""),
        install_command=str(install),
        timeout_s=float(timeout) if timeout is not None else None,
    )


def _build_runner_definitions(
    runners_cfg: Mapping[str, Any]
) -> Tuple[RunnerDefinition, ...]:
    definitions = []
    for runner_id, data in runners_cfg.items():
        if not isinstance(data, Mapping):
            raise RunnerConfigError(f"Runner '{runner_id}' must be a mapping")
        try:
            definition = RunnerDefinition.from_dict(str(runner_id), data)
            validate_templates(c.cmd for c in definition.commands)
        except (ValueError, InvalidCommandTemplateError) as exc:
            raise RunnerConfigError(
                f"Invalid runner '{runner_id}': {exc}"
            ) from exc
        if not definition.extensions:
            raise RunnerConfigError(
                f"Runner '{runner_id}' declares no extensions"
            )
        if not definition.commands:
            raise RunnerConfigError(f"Runner '{runner_id}' declares no commands")
        definitions.append(definition)
    return tuple(definitions)


def build_runner_settings(
    config: Optional[Mapping[str, Any]] = None,
    *,
    config_root: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    temp_dir: Optional[str] = None,
) -> RunnerSettings:
    """Build settings; an explicit ``temp_dir`` beats the environment and config."""

    config = config or {}
    config_root = config_root or Path.cwd()
    environ = os.environ if environ is None else environ

    runner_cfg = dict(config.get("runner") or {})
    home_prefixes = runner_cfg.get("home_prefixes")
    lookup_command = runner_cfg.get("lookup_command")
    execution = ExecutionSettings(
        temp_dir=str(
            temp_dir
            or environ.get(ENV_TEMP_DIR)
            or runner_cfg.get("temp_dir")
            or DEFAULT_TEMP_DIR
        ),
        home_prefixes=(
            DEFAULT_HOME_PREFIXES
            if home_prefixes is None
            else _as_tuple(home_prefixes)
        ),
        line_ending=str(runner_cfg.get("line_ending", "\n")),
        session_startup_delay_s=float(
            runner_cfg.get("session_startup_delay_s", 0.5)
        ),
        shell=str(runner_cfg.get("shell") or DEFAULT_SHELL),
        lookup_command=str(lookup_command) if lookup_command else None,
    )

    packages = _build_package_settings(
        dict(config.get("packages") or {}), environ
    )

    plugins_cfg = dict(config.get("plugins") or {})
    plugins = PluginSettings(
        modules=_as_tuple(plugins_cfg.get("modules")),
        paths=tuple(
            _ensure_path(item, config_root=config_root)
            for item in _as_tuple(plugins_cfg.get("paths"))
        ),
    )

    scripts_cfg = dict(config.get("scripts") or {})
    script_overrides = tuple(
        _ensure_path(item, config_root=config_root)
        for item in _as_tuple(scripts_cfg.get("template_dirs"))
    )

    return RunnerSettings(
        execution=execution,
        packages=packages,
        plugins=plugins,
        script_overrides=script_overrides,
        runners=_build_runner_definitions(dict(config.get("runners") or {})),
        disabled_runners=_as_tuple(config.get("disabled_runners")),
    )


__all__ = [
    "ExecutionSettings",
    "PackageSettings",
    "PluginSettings",
    "RunnerSettings",
    "build_runner_settings",
    "load_config",
]
