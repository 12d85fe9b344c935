"""Core dataclasses used throughout langrunner."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple

from langrunner.constants import (
    EDITOR_FILE_KIND,
    FILE_SCHEME,
    INSTALL_SESSION_PREFIX,
)


def _normalize_extension(extension: str) -> str:
    return extension.strip().lstrip(".").lower()


@dataclass(frozen=True)
class CommandCandidate:
    """One command template considered for a runner, in priority order."""

    cmd: str
    packages: Tuple[str, ...] = field(default_factory=tuple)
    requires_manifest: Optional[str] = None

    @property
    def executable(self) -> str:
        """First whitespace-delimited token of the template."""
        parts = self.cmd.split()
        return parts[0] if parts else ""

    @property
    def install_packages(self) -> Tuple[str, ...]:
        return tuple(pkg for pkg in self.packages if pkg)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CommandCandidate":
        cmd = data.get("cmd")
        if not cmd or not isinstance(cmd, str):
            raise ValueError("command candidate requires a 'cmd' string")
        manifest = data.get("requires_manifest")
        # Older definitions flag Cargo projects with a boolean.
        if manifest is None and data.get("requiresCargo"):
            manifest = "Cargo.toml"
        return cls(
            cmd=cmd,
            packages=tuple(str(pkg) for pkg in data.get("packages") or ()),
            requires_manifest=str(manifest) if manifest else None,
        )


@dataclass(frozen=True)
class RunnerDefinition:
    """How to execute source files of one language."""

    id: str
    extensions: Tuple[str, ...]
    commands: Tuple[CommandCandidate, ...]
    description: str

    def __post_init__(self) -> None:
        normalized = tuple(
            dict.fromkeys(
                _normalize_extension(ext) for ext in self.extensions if ext
            )
        )
        object.__setattr__(self, "extensions", normalized)
        object.__setattr__(self, "commands", tuple(self.commands))

    def claims(self, extension: str) -> bool:
        return _normalize_extension(extension) in self.extensions

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "extensions": list(self.extensions),
            "description": self.description,
            "commands": [
                {
                    "cmd": candidate.cmd,
                    "packages": list(candidate.packages),
                    "requires_manifest": candidate.requires_manifest,
                }
                for candidate in self.commands
            ],
        }

    @classmethod
    def from_dict(
        cls, runner_id: str, data: Mapping[str, Any]
    ) -> "RunnerDefinition":
        extensions = data.get("extensions") or ()
        if isinstance(extensions, str):
            extensions = [extensions]
        commands: Iterable[Mapping[str, Any]] = data.get("commands") or ()
        return cls(
            id=runner_id,
            extensions=tuple(str(ext) for ext in extensions),
            commands=tuple(CommandCandidate.from_dict(c) for c in commands),
            description=str(data.get("description") or runner_id),
        )


@dataclass
class TargetFile:
    """Read-only view of the editor file a run was requested for."""

    filename: str
    read_content: Optional[Callable[[], str]] = None
    uri: Optional[str] = None
    is_unsaved: bool = False
    kind: str = EDITOR_FILE_KIND

    @property
    def runnable(self) -> bool:
        return self.kind == EDITOR_FILE_KIND and self.read_content is not None

    def content(self) -> str:
        if self.read_content is None:
            raise ValueError(f"{self.filename} has no content accessor")
        return self.read_content()

    @classmethod
    def from_path(cls, path: Path) -> "TargetFile":
        path = Path(path).resolve()
        return cls(
            filename=path.name,
            read_content=lambda: path.read_text(encoding="utf-8"),
            uri=f"{FILE_SCHEME}{path}",
        )

    @classmethod
    def from_text(cls, filename: str, text: str) -> "TargetFile":
        """Unsaved buffer with no location."""
        return cls(
            filename=filename,
            read_content=lambda: text,
            uri=None,
            is_unsaved=True,
        )


@dataclass
class TerminalSession:
    """Interactive shell process owned by the terminal provider."""

    id: str
    name: str
    pid: Optional[int] = None
    busy: bool = False

    @property
    def is_busy(self) -> bool:
        return self.busy or INSTALL_SESSION_PREFIX in self.name


__all__ = [
    "CommandCandidate",
    "RunnerDefinition",
    "TargetFile",
    "TerminalSession",
]
