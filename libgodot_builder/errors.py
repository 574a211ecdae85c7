"""
Exceptions raised by the builder
"""

from typing import List, Sequence


class BuilderError(Exception):
    """Base class for all builder errors"""


class UnsupportedPlatformError(BuilderError):
    """Raised when the host or a requested target is not a known platform"""


class ConfigError(BuilderError):
    """Raised when a configuration file cannot be used"""


class ToolNotFoundError(BuilderError):
    """Raised when an external executable is not installed"""

    def __init__(self, tool: str):
        super().__init__(f"Required tool not found in PATH: {tool}")
        self.tool = tool


class CommandError(BuilderError):
    """Raised when an external command exits with a non-zero status"""

    def __init__(self, cmd: Sequence[str], returncode: int):
        self.cmd: List[str] = [str(c) for c in cmd]
        self.returncode = returncode
        super().__init__(
            f"Command failed with exit code {returncode}: {' '.join(self.cmd)}"
        )


__all__ = [
    "BuilderError",
    "UnsupportedPlatformError",
    "ConfigError",
    "ToolNotFoundError",
    "CommandError",
]
