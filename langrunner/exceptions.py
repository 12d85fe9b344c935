"""Custom exceptions for the runner framework."""


class RunnerError(RuntimeError):
    """Base exception for runner failures."""


class InvalidCommandTemplateError(RunnerError, ValueError):
    """Raised when a command template uses an unknown placeholder."""


class RunnerConfigError(RunnerError):
    """Raised when configuration is invalid."""


class DispatchError(RunnerError):
    """Raised when a command cannot be handed to a terminal session."""
