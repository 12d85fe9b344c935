"""Placeholder substitution for command templates."""

from __future__ import annotations

import difflib
import logging
import re

from dataclasses import dataclass
from typing import Iterable, Set

from langrunner.constants import PLACEHOLDERS
from langrunner.exceptions import InvalidCommandTemplateError

LOGGER = logging.getLogger(__name__)

# ``${VAR}`` is shell expansion, not a placeholder.
_PLACEHOLDER_RE = re.compile(r"(?<!\$)\{(\w+)\}")


@dataclass(frozen=True)
class Placeholders:
    file: str
    name: str
    path: str

    def as_dict(self) -> dict[str, str]:
        return {"file": self.file, "name": self.name, "path": self.path}


def placeholders_in(template: str) -> Set[str]:
    return set(_PLACEHOLDER_RE.findall(template))


def _near_miss(token: str) -> bool:
    lowered = token.lower()
    if lowered in PLACEHOLDERS:
        return True
    return bool(difflib.get_close_matches(lowered, PLACEHOLDERS, n=1, cutoff=0.75))


def validate_template(template: str) -> str:
    """Reject empty templates and misspelled placeholders.

    Other brace tokens such as awk's ``{print}`` are shell text; they are
    logged and left alone.
    """

    if not template or not template.strip():
        raise InvalidCommandTemplateError("command template is empty")
    unknown = placeholders_in(template) - PLACEHOLDERS
    misspelled = sorted(token for token in unknown if _near_miss(token))
    if misspelled:
        names = ", ".join("{%s}" % item for item in misspelled)
        raise InvalidCommandTemplateError(
            f"unknown placeholder(s) {names} in command '{template}'; "
            "expected {file}, {name} or {path}"
        )
    if unknown:
        LOGGER.debug(
            "Leaving brace token(s) %s in '%s' as shell text",
            ", ".join(sorted(unknown)),
            template,
        )
    return template


def validate_templates(templates: Iterable[str]) -> None:
    for template in templates:
        validate_template(template)


def substitute(template: str, values: Placeholders) -> str:
    """Replace every ``{file}``, ``{name}`` and ``{path}`` in one pass."""

    mapping = values.as_dict()

    def _replace(match: re.Match[str]) -> str:
        key = match.group(1)
        return mapping.get(key, match.group(0))

    return _PLACEHOLDER_RE.sub(_replace, template)


__all__ = [
    "Placeholders",
    "placeholders_in",
    "substitute",
    "validate_template",
    "validate_templates",
]
