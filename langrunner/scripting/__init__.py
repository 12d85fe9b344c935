"""Shell script templating for the run wrapper."""

from .manager import ScriptManager
from .wrapper import LaunchScript, ScriptBuilder, heredoc_marker

__all__ = ["LaunchScript", "ScriptBuilder", "ScriptManager", "heredoc_marker"]
