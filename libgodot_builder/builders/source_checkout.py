"""
Godot source checkout
"""

from typing import Optional

from ..platform import PlatformDescriptor
from .base_builder import BaseBuilder


class SourceCheckout(BaseBuilder):
    """Clones the Godot repository or updates an existing checkout"""

    def execute(self, descriptor: Optional[PlatformDescriptor] = None) -> None:
        """
        Make sure the source tree exists and tracks the configured branch

        Raises:
            ToolNotFoundError: git is not installed
            CommandError: a git command failed
        """
        repository = self.config.get("godot", "repository")
        branch = self.config.get("godot", "branch", "master")
        depth = str(self.config.get("godot", "clone_depth", 1))
        godot_dir = self.paths.godot_dir

        if not godot_dir.exists():
            self.logger.info("Cloning Godot repository...")
            self.run_command(
                ["git", "clone", "--depth", depth, "--branch", branch, repository, str(godot_dir)],
                cwd=self.paths.root_dir,
            )

        self.logger.info("Checking Godot version...")
        self.run_command(["git", "fetch", "--depth", depth, "origin", branch])
        self.run_command(["git", "checkout", branch])
