"""Text commands that drive buffer operations."""

from .command import Command, CommandError, apply_command, parse_command, run_script

__all__ = [
    "Command",
    "CommandError",
    "apply_command",
    "parse_command",
    "run_script",
]
