"""
SCons library builder and artifact discovery
"""

import shutil
from pathlib import Path
from typing import List, Optional, Sequence

from ..platform import PlatformDescriptor
from .base_builder import BaseBuilder


def expand_patterns(patterns: Sequence[str], descriptor: PlatformDescriptor) -> List[str]:
    """Fill {platform} and {ext} into filename patterns"""
    return [
        p.replace("{platform}", descriptor.name).replace("{ext}", descriptor.lib_ext)
        for p in patterns
    ]


def find_library(bin_dir: Path, descriptor: PlatformDescriptor, patterns: Sequence[str]) -> Optional[Path]:
    """
    Locate a built library

    Patterns are tried in order. The first pattern that matches anything wins
    and its first match (by name) is returned.

    Args:
        bin_dir: Directory holding scons output
        descriptor: Target platform
        patterns: Filename globs with {platform} and {ext} placeholders

    Returns:
        Path to the library, or None if nothing matched
    """
    if not bin_dir.is_dir():
        return None

    for pattern in expand_patterns(patterns, descriptor):
        matches = sorted(p for p in bin_dir.glob(pattern) if p.is_file())
        if matches:
            return matches[0]
    return None


class LibraryBuilder(BaseBuilder):
    """Builds Godot as a shared library and copies it to the output tree"""

    @property
    def library_patterns(self) -> List[str]:
        return self.config.get_list("artifacts", "library_patterns")

    def execute(self, descriptor: PlatformDescriptor) -> Optional[Path]:
        """
        Build the library for a platform

        Args:
            descriptor: Target platform

        Returns:
            Path of the copied library, or None if no artifact was found
        """
        self.logger.info(f"Building Godot library for {descriptor.name}...")
        self.run_command(self.scons_command(descriptor, self.config.get_list("build", "library_args")))

        output_dir = self.paths.platform_lib_dir(descriptor.output_dir)
        if not self.dry_run:
            output_dir.mkdir(parents=True, exist_ok=True)

        return self.copy_library(descriptor)

    def copy_library(self, descriptor: PlatformDescriptor) -> Optional[Path]:
        """
        Copy the built library into lib/<platform>

        A missing artifact is reported as a warning, never raised.
        """
        output_dir = self.paths.platform_lib_dir(descriptor.output_dir)
        lib_file = find_library(self.paths.bin_dir, descriptor, self.library_patterns)

        if lib_file is None:
            tried = " and ".join(expand_patterns(self.library_patterns, descriptor))
            self.logger.warning(f"Could not find built library (tried {tried})")
            return None

        dest_file = output_dir / lib_file.name
        if self.dry_run:
            self.logger.info(f"[DRY RUN] Would copy {lib_file.name} to {output_dir}")
            return dest_file

        output_dir.mkdir(parents=True, exist_ok=True)
        shutil.copy2(lib_file, dest_file)
        self.logger.info(f"Copied {lib_file.name} to {output_dir}")
        return dest_file
