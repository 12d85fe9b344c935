"""Decide where a toolchain reads the file from, and what it runs in."""

from __future__ import annotations

import shlex

from dataclasses import dataclass
from typing import Optional, Sequence

from langrunner.constants import DEFAULT_TEMP_DIR, HOME_DIR_EXPANSION
from langrunner.types import TargetFile

from . import paths
from .templates import Placeholders


@dataclass(frozen=True)
class Materialization:
    placeholders: Placeholders
    directory: str
    shell_directory: str
    temp_path: Optional[str] = None
    temp_dir: str = DEFAULT_TEMP_DIR

    @property
    def needs_temp_copy(self) -> bool:
        return self.temp_path is not None

    @property
    def changes_directory(self) -> bool:
        return self.directory != self.temp_dir


def needs_temp_copy(file: TargetFile) -> bool:
    """Unsaved, content-provider, compound and remote files get copied."""

    if not file.uri or file.is_unsaved:
        return True
    return not paths.is_local_uri(file.uri)


def materialize(
    file: TargetFile,
    *,
    temp_dir: str = DEFAULT_TEMP_DIR,
    home_prefixes: Sequence[str] = (),
) -> Materialization:
    name = paths.stem(file.filename)
    if needs_temp_copy(file):
        temp_path = paths.join(temp_dir, file.filename)
        return Materialization(
            placeholders=Placeholders(file=temp_path, name=name, path=temp_path),
            directory=temp_dir,
            shell_directory=shlex.quote(temp_dir),
            temp_path=temp_path,
            temp_dir=temp_dir,
        )

    assert file.uri is not None
    actual_path = paths.strip_file_scheme(file.uri)
    directory = paths.dirname(actual_path)
    if paths.is_within(actual_path, home_prefixes):
        # Left unquoted so the shell expands it.
        shell_directory = HOME_DIR_EXPANSION
    else:
        shell_directory = shlex.quote(directory)
    return Materialization(
        placeholders=Placeholders(
            file=file.filename, name=name, path=actual_path
        ),
        directory=directory,
        shell_directory=shell_directory,
        temp_dir=temp_dir,
    )


__all__ = ["Materialization", "materialize", "needs_temp_copy"]
