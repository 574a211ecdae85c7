"""
GodotSharp bindings builder

Builds a Mono-enabled editor, regenerates the C# glue with it and compiles
the managed assemblies. The assemblies are platform independent, so this
runs once per invocation.
"""

import sys
from pathlib import Path
from typing import Optional, Sequence

from ..errors import BuilderError
from ..platform import PlatformDescriptor
from ..utils import copy_tree
from .base_builder import BaseBuilder


def select_editor_binary(candidates: Sequence[Path]) -> Optional[Path]:
    """
    Pick the editor executable among files matching the editor pattern

    Preference: *.mono.exe (not the .console. wrapper), any *.exe, *.mono,
    then whatever comes first.
    """
    files = sorted(candidates)
    if not files:
        return None

    preferences = (
        lambda n: n.endswith(".mono.exe") and ".console." not in n,
        lambda n: n.endswith(".exe"),
        lambda n: n.endswith(".mono"),
    )
    for prefer in preferences:
        for f in files:
            if prefer(f.name):
                return f
    return files[0]


class BindingsBuilder(BaseBuilder):
    """Produces the GodotSharp assemblies"""

    def __init__(self, *args, python: Optional[str] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.python = python or sys.executable

    def execute(self, descriptor: PlatformDescriptor) -> Optional[Path]:
        """
        Run the full bindings pipeline for the host platform

        Returns:
            The assemblies output directory, or None if nothing was copied
        """
        self.logger.info("Building GodotSharp bindings...")
        self.build_editor(descriptor)

        self.logger.info("Generating C# glue code...")
        self.generate_glue(descriptor)

        self.logger.info("Building C# assemblies...")
        self.build_assemblies()

        self.logger.info("Copying GodotSharp assemblies to output directory...")
        return self.copy_assemblies()

    def build_editor(self, descriptor: PlatformDescriptor) -> None:
        """Build the editor with Mono support. Failures propagate."""
        self.logger.info("Building Godot editor with Mono support...")
        self.run_command(self.scons_command(descriptor, self.config.get_list("build", "editor_args")))

    def find_editor_binary(self, descriptor: PlatformDescriptor) -> Optional[Path]:
        bin_dir = self.paths.bin_dir
        if not bin_dir.is_dir():
            return None
        pattern = self.replace_variables(self.config.get("artifacts", "editor_pattern"), descriptor)
        return select_editor_binary([p for p in bin_dir.glob(pattern) if p.is_file()])

    def generate_glue(self, descriptor: PlatformDescriptor) -> bool:
        """
        Run the editor headless to regenerate the C# glue sources

        Returns:
            True if glue was generated
        """
        editor_bin = self.find_editor_binary(descriptor)
        if editor_bin is None:
            pattern = self.replace_variables(self.config.get("artifacts", "editor_pattern"), descriptor)
            self.logger.warning(f"Could not find editor binary ({pattern})")
            self.logger.warning(f"Searched in: {self.paths.bin_dir}")
            if self.paths.bin_dir.is_dir():
                self.logger.info("Available files:")
                for f in sorted(self.paths.bin_dir.iterdir()):
                    if f.is_file():
                        self.logger.info(f"  {f.name}")
            return False

        self.logger.info(f"Found editor binary: {editor_bin}")
        try:
            self.run_command([str(editor_bin), "--headless", "--generate-mono-glue", str(self.paths.glue_dir)])
        except BuilderError as e:
            self.logger.warning(f"Glue generation failed: {e}")
            return False
        return True

    def build_assemblies(self) -> bool:
        """
        Compile the generated bindings with Godot's build_assemblies.py

        Returns:
            True if the script ran successfully
        """
        script = self.paths.build_assemblies_script
        if not script.exists():
            self.logger.warning(f"build_assemblies.py not found at {script}")
            return False

        cmd = [
            self.python,
            str(script),
            f"--godot-output-dir={self.paths.bin_dir}",
            "--push-nupkgs-local",
            str(self.paths.nupkgs_dir),
        ]
        try:
            self.run_command(cmd)
        except BuilderError as e:
            self.logger.warning(f"Assembly build failed: {e}")
            return False
        return True

    def copy_assemblies(self) -> Optional[Path]:
        """Copy bin/GodotSharp into the assemblies output directory"""
        source_dir = self.paths.godotsharp_dir
        dest_dir = self.paths.assemblies_dir

        if not source_dir.is_dir():
            self.logger.warning(f"GodotSharp directory not found at {source_dir}")
            self.logger.info("This might be because:")
            self.logger.info("  - The editor build with Mono support failed")
            self.logger.info("  - The C# glue generation failed")
            self.logger.info("  - The assembly build script failed")
            return None

        if self.dry_run:
            self.logger.info(f"[DRY RUN] Would copy {source_dir} to {dest_dir}")
            return dest_dir

        try:
            copy_tree(source_dir, dest_dir)
        except OSError as e:
            self.logger.warning(f"Could not copy GodotSharp assemblies: {e}")
            return None

        self.logger.info(f"Copied GodotSharp assemblies to {dest_dir}")
        return dest_dir
