"""Expose the project root on sys.path for pytest runs."""

from __future__ import annotations

import sys

from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from langrunner.languages import RunnerRegistry  # noqa: E402
from tests.fakes import PipelineHarness  # noqa: E402


@pytest.fixture()
def harness_factory():
    """Return a builder for pipelines wired to in-memory collaborators."""

    def _make(**kwargs) -> PipelineHarness:
        return PipelineHarness(**kwargs)

    return _make


@pytest.fixture()
def registry() -> RunnerRegistry:
    reg = RunnerRegistry()
    reg.initialize_defaults()
    return reg
