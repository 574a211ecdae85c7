"""
Base builder class that all build steps inherit from
"""

import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Sequence

from ..config import BuildPaths, ConfigLoader
from ..platform import PlatformDescriptor
from ..utils import CommandRunner, Logger


class BaseBuilder(ABC):
    """Abstract base class for all build steps"""

    def __init__(self,
                 config: ConfigLoader,
                 paths: BuildPaths,
                 runner: CommandRunner,
                 logger: Logger):
        """
        Initialize base builder

        Args:
            config: Configuration loader
            paths: Resolved paths for this run
            runner: Command runner
            logger: Logger instance
        """
        self.config = config
        self.paths = paths
        self.runner = runner
        self.logger = logger

    @abstractmethod
    def execute(self, descriptor: Optional[PlatformDescriptor] = None) -> Optional[Path]:
        """Run the step, for a platform where the step is platform specific"""
        pass

    @property
    def dry_run(self) -> bool:
        return self.runner.dry_run

    def replace_variables(self, text: str, descriptor: Optional[PlatformDescriptor] = None) -> str:
        """Replace {placeholders} in configuration strings"""
        replacements = {
            "{cpu_count}": str(os.cpu_count() or 1),
        }
        if descriptor is not None:
            replacements["{platform}"] = descriptor.name
            replacements["{ext}"] = descriptor.lib_ext

        for key, value in replacements.items():
            text = text.replace(key, value)
        return text

    def scons_command(self, descriptor: PlatformDescriptor, args: Sequence[str]) -> List[str]:
        """Build a scons command line for a platform"""
        cmd = [self.config.get_option("scons", "scons"), f"platform={descriptor.name}"]
        cmd.extend(self.replace_variables(a, descriptor) for a in args)
        cmd.extend(
            self.replace_variables(a, descriptor)
            for a in self.config.get_list("build", "extra_args")
        )
        return cmd

    def run_command(self, cmd: Sequence[str], cwd: Optional[Path] = None) -> int:
        """Run a command, by default inside the Godot source tree"""
        if cwd is None:
            cwd = self.paths.godot_dir
        return self.runner.run(cmd, cwd=cwd)
