#!/usr/bin/env python3
"""
Main entry point for libgodot-builder
Builds Godot as a shared library with C# bindings
"""

import argparse
import sys
import traceback
from pathlib import Path
from typing import List, Optional

from .builders import BuildOrchestrator, BuildSummary
from .config import BuildPaths, ConfigLoader
from .platform import PLATFORMS, PlatformDescriptor, PlatformDetector
from .utils import CommandRunner, Logger

HELP_EPILOG = """
Examples:
  %(prog)s                  # Build for the current platform
  %(prog)s --all            # Build for all platforms

Cross-Platform Building:
  The --all flag attempts to build for all platforms. However,
  cross-compilation requires specific toolchains:

  From Windows:
    - Windows: Native (Visual Studio or MinGW-w64)
    - Linux: Requires WSL2 or Linux cross-compiler (complex)
    - macOS: Not supported (requires OSXCross - very complex)

  From Linux:
    - Linux: Native (GCC or Clang)
    - Windows: Requires MinGW-w64 (apt install mingw-w64)
    - macOS: Not commonly supported

  From macOS:
    - macOS: Native (Xcode command line tools)
    - Windows: Requires MinGW-w64 (brew install mingw-w64)
    - Linux: Not commonly supported

  RECOMMENDATION: Run the builder natively on each target OS
                  for the most reliable builds.

Build time: 30-60 minutes per platform
"""


class GodotBuilder:
    """Main builder class"""

    def __init__(self,
                 root_dir: Optional[Path] = None,
                 config_file: Optional[Path] = None,
                 host: Optional[PlatformDescriptor] = None,
                 runner: Optional[CommandRunner] = None,
                 logger: Optional[Logger] = None,
                 verbose: bool = False,
                 dry_run: bool = False,
                 log_file: Optional[Path] = None):
        """
        Initialize the builder

        Args:
            root_dir: Root directory holding godot/, lib/ and src/
            config_file: Optional config file merged over the defaults
            host: Host platform (auto-detected when omitted)
            runner: Command runner (created when omitted)
            logger: Logger (created when omitted)
            verbose: Enable verbose output
            dry_run: Log commands without running them
            log_file: Optional log file path
        """
        self.logger = logger or Logger(verbose=verbose, log_file=log_file)
        self.config = ConfigLoader(config_file)
        self.paths = BuildPaths.resolve(self.config, root_dir)
        self.host = host or PlatformDetector().detect()
        self.runner = runner or CommandRunner(self.logger, dry_run=dry_run)

        self.orchestrator = BuildOrchestrator(
            config=self.config,
            paths=self.paths,
            host=self.host,
            runner=self.runner,
            logger=self.logger,
        )

    def show_header(self, build_all: bool) -> None:
        self.logger.raw("libgodot-builder - Build Godot as a library with C# bindings")
        self.logger.raw("=" * 60)
        self.logger.info(f"Root directory: {self.paths.root_dir}")
        self.logger.info(f"Godot directory: {self.paths.godot_dir}")
        self.logger.info(f"Native libs output: {self.paths.lib_dir}")
        self.logger.info(f"GodotSharp output: {self.paths.assemblies_dir}")
        self.logger.info(f"Current platform: {self.host.name}")

        if build_all:
            names = ", ".join(p.name for p in PLATFORMS)
            self.logger.info(f"Build mode: ALL PLATFORMS ({names})")
        else:
            self.logger.info(f"Build mode: CURRENT PLATFORM ONLY ({self.host.name})")
            self.logger.info("  (Use --all to build for all platforms)")

    def run(self, build_all: bool = False) -> Optional[BuildSummary]:
        """
        Check out Godot and build the selected platforms

        Args:
            build_all: Build every known platform instead of the host only

        Returns:
            The summary for an all-platforms run, None otherwise
        """
        self.show_header(build_all)
        self.orchestrator.checkout()

        summary = None
        if build_all:
            summary = self.orchestrator.build_all()
        else:
            self.orchestrator.build_platform(self.host)

        self.logger.banner("Build complete!", width=40)
        self.logger.info(f"Library files are in: {self.paths.lib_dir}")
        self.logger.info(f"GodotSharp assemblies are in: {self.paths.assemblies_dir}")
        return summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="libgodot-builder",
        description="Build Godot as a library with C# bindings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=HELP_EPILOG,
    )

    parser.add_argument(
        "--all", "-a",
        dest="build_all",
        action="store_true",
        help="Build for all platforms (Windows, Linux, macOS)"
    )

    parser.add_argument(
        "--root-dir",
        type=Path,
        help="Directory holding godot/, lib/ and src/ (default: $LIBGODOT_BUILDER_ROOT or cwd)"
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="YAML file merged over the default configuration"
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        help="Also write a debug log to this file"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print commands without running them"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line interface"""
    args = build_parser().parse_args(argv)

    try:
        builder = GodotBuilder(
            root_dir=args.root_dir,
            config_file=args.config,
            verbose=args.verbose,
            dry_run=args.dry_run,
            log_file=args.log_file,
        )
        builder.run(build_all=args.build_all)
    except KeyboardInterrupt:
        print("\nBuild interrupted by user", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        traceback.print_exc()
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
