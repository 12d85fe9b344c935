"""Runtime helpers (paths, placeholder substitution, materialization)."""

from . import paths
from .materialize import Materialization, materialize, needs_temp_copy
from .templates import Placeholders, substitute, validate_template

__all__ = [
    "Materialization",
    "Placeholders",
    "materialize",
    "needs_temp_copy",
    "paths",
    "substitute",
    "validate_template",
]
