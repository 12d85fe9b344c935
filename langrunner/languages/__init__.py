"""Runner definitions and the registry that holds them."""

from .defaults import DEFAULT_RUNNERS
from .registry import RunnerRegistry

__all__ = ["DEFAULT_RUNNERS", "RunnerRegistry"]
