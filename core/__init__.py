"""Shared core utilities for command execution, configuration and console output."""

from .command_runner import (
    CommandError,
    CommandResult,
    CommandRunner,
    RecordedCommand,
    RecordingCommandRunner,
    SubprocessCommandRunner,
    format_command,
)
from .config_loader import (
    ConfigFileError,
    FILE_LOADERS,
    find_config_file,
    load_config_file,
    layer_values,
)
from .console import Console

__all__ = [
    "CommandError",
    "CommandResult",
    "CommandRunner",
    "RecordedCommand",
    "RecordingCommandRunner",
    "SubprocessCommandRunner",
    "format_command",
    "ConfigFileError",
    "FILE_LOADERS",
    "find_config_file",
    "load_config_file",
    "layer_values",
    "Console",
]
