"""Built-in runner definitions for common languages."""

from __future__ import annotations

from typing import Tuple

from langrunner.types import CommandCandidate, RunnerDefinition


def _cmd(
    cmd: str, *packages: str, requires_manifest: str | None = None
) -> CommandCandidate:
    return CommandCandidate(
        cmd=cmd, packages=tuple(packages), requires_manifest=requires_manifest
    )


DEFAULT_RUNNERS: Tuple[RunnerDefinition, ...] = (
    RunnerDefinition(
        id="python",
        extensions=("py", "pyw"),
        commands=(
            _cmd('python3 "{file}"', "python3", "py3-pip"),
            _cmd('python "{file}"', "python3"),
        ),
        description="Python interpreter",
    ),
    RunnerDefinition(
        id="c",
        extensions=("c",),
        commands=(
            _cmd('gcc "{file}" -o "{name}" && ./{name}', "gcc", "musl-dev"),
            _cmd('clang "{file}" -o "{name}" && ./{name}', "clang"),
        ),
        description="C compiler",
    ),
    RunnerDefinition(
        id="cpp",
        extensions=("cpp", "cxx", "cc", "c++"),
        commands=(
            _cmd('clang++ "{file}" -o "{name}" && ./{name}', "clang"),
        ),
        description="C++ compiler",
    ),
    RunnerDefinition(
        id="java",
        extensions=("java",),
        commands=(
            _cmd('java "{file}"', "openjdk17-jdk"),
            _cmd('javac "{file}" && java "{name}"', "openjdk11-jdk"),
        ),
        description="Java compiler and runtime",
    ),
    RunnerDefinition(
        id="go",
        extensions=("go",),
        commands=(_cmd('go run "{file}"', "go"),),
        description="Go compiler",
    ),
    RunnerDefinition(
        id="php",
        extensions=("php",),
        commands=(_cmd('php82 "{file}"', "php82", "php82-cli"),),
        description="PHP interpreter",
    ),
    RunnerDefinition(
        id="ruby",
        extensions=("rb",),
        commands=(_cmd('ruby "{file}"', "ruby", "ruby-dev"),),
        description="Ruby interpreter",
    ),
    RunnerDefinition(
        id="rust",
        extensions=("rs",),
        commands=(
            _cmd('rustc "{file}" -o "{name}" && ./{name}', "rust"),
            _cmd("cargo run", "cargo", requires_manifest="Cargo.toml"),
        ),
        description="Rust compiler",
    ),
    RunnerDefinition(
        id="lua",
        extensions=("lua",),
        commands=(_cmd('lua5.4 "{file}"', "lua5.4"),),
        description="Lua interpreter",
    ),
    RunnerDefinition(
        id="shell",
        extensions=("sh", "bash"),
        commands=(
            _cmd('bash "{file}"', "bash"),
            _cmd('sh "{file}"'),
        ),
        description="Shell script interpreter",
    ),
)


__all__ = ["DEFAULT_RUNNERS"]
