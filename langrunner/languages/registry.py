"""In-memory table of runner definitions keyed by language id."""

from __future__ import annotations

import logging

from typing import Dict, Optional

from langrunner.runtime.paths import extname
from langrunner.runtime.templates import validate_templates
from langrunner.types import RunnerDefinition

from .defaults import DEFAULT_RUNNERS

LOGGER = logging.getLogger(__name__)


class RunnerRegistry:
    """Maps language ids to runner definitions, in registration order."""

    def __init__(self) -> None:
        self._runners: Dict[str, RunnerDefinition] = {}

    def initialize_defaults(self) -> None:
        """Seed the built-in runners (re-seeding overwrites in place)."""

        for definition in DEFAULT_RUNNERS:
            self.register(definition.id, definition)

    def register(self, runner_id: str, definition: RunnerDefinition) -> None:
        """Register or override a runner; templates are validated first."""

        validate_templates(candidate.cmd for candidate in definition.commands)
        if definition.id != runner_id:
            definition = RunnerDefinition(
                id=runner_id,
                extensions=definition.extensions,
                commands=definition.commands,
                description=definition.description,
            )
        if runner_id in self._runners:
            LOGGER.debug("Replacing runner '%s'", runner_id)
        self._runners[runner_id] = definition

    def unregister(self, runner_id: str) -> None:
        """Remove a runner that was previously registered."""

        self._runners.pop(runner_id, None)

    def get(self, runner_id: str) -> Optional[RunnerDefinition]:
        return self._runners.get(runner_id)

    def lookup_by_extension(
        self, extension: str
    ) -> Optional[RunnerDefinition]:
        if not extension:
            return None
        for definition in self._runners.values():
            if definition.claims(extension):
                return definition
        return None

    def can_run(self, filename: Optional[str]) -> bool:
        extension = extname(filename)
        if not extension:
            return False
        return self.lookup_by_extension(extension) is not None

    def list_all(self) -> Dict[str, RunnerDefinition]:
        return dict(self._runners)

    def teardown(self) -> None:
        self._runners.clear()

    def __contains__(self, runner_id: object) -> bool:
        return runner_id in self._runners

    def __len__(self) -> int:
        return len(self._runners)


__all__ = ["RunnerRegistry"]
