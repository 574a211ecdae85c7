"""
Build orchestrator that sequences the per-platform builds
"""

import traceback
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from ..config import BuildPaths, ConfigLoader
from ..platform import PLATFORMS, PlatformDescriptor, ToolchainProbe
from ..utils import CommandRunner, Logger
from .bindings_builder import BindingsBuilder
from .scons_builder import LibraryBuilder
from .source_checkout import SourceCheckout

DOCS_URL = "https://docs.godotengine.org/en/stable/contributing/development/compiling/"

SUCCESS = "success"
FAILED = "failed"
SKIPPED = "skipped"


@dataclass
class PlatformResult:
    """Outcome of one platform in an all-platforms run"""

    platform: str
    status: str
    reason: str = ""
    required_tools: List[str] = field(default_factory=list)
    error: Optional[BaseException] = None
    library: Optional[Path] = None


@dataclass
class BuildSummary:
    """Per-platform tally of an all-platforms run"""

    results: List[PlatformResult] = field(default_factory=list)

    def _with_status(self, status: str) -> List[PlatformResult]:
        return [r for r in self.results if r.status == status]

    @property
    def successful(self) -> List[PlatformResult]:
        return self._with_status(SUCCESS)

    @property
    def failed(self) -> List[PlatformResult]:
        return self._with_status(FAILED)

    @property
    def skipped(self) -> List[PlatformResult]:
        return self._with_status(SKIPPED)

    @property
    def total(self) -> int:
        return len(self.results)


class BuildOrchestrator:
    """Runs the checkout, library and bindings steps in order"""

    def __init__(self,
                 config: ConfigLoader,
                 paths: BuildPaths,
                 host: PlatformDescriptor,
                 runner: CommandRunner,
                 logger: Logger,
                 probe: Optional[ToolchainProbe] = None,
                 platforms: Sequence[PlatformDescriptor] = PLATFORMS):
        """
        Initialize build orchestrator

        Args:
            config: Configuration loader
            paths: Resolved paths for this run
            host: Detected host platform
            runner: Command runner
            logger: Logger instance
            probe: Toolchain probe, defaults to one asking the runner for tools
            platforms: Targets processed by build_all, in order
        """
        self.config = config
        self.paths = paths
        self.host = host
        self.runner = runner
        self.logger = logger
        self.probe = probe or ToolchainProbe(host, is_available=runner.is_available)
        self.platforms = tuple(platforms)

        self.source = SourceCheckout(config, paths, runner, logger)
        self.library_builder = LibraryBuilder(config, paths, runner, logger)
        self.bindings_builder = BindingsBuilder(config, paths, runner, logger)

    def checkout(self) -> None:
        self.source.execute()

    def build_platform(self, descriptor: PlatformDescriptor) -> Optional[Path]:
        """
        Build the library for one platform, plus the bindings on the host

        Errors propagate to the caller.

        Returns:
            Path of the copied library, or None if it was not found
        """
        library = self.library_builder.execute(descriptor)

        if descriptor == self.host:
            self.bindings_builder.execute(descriptor)

        return library

    def build_all(self) -> BuildSummary:
        """
        Build every known platform, skipping those without a toolchain

        Failures are recorded and do not stop the remaining platforms.
        """
        self.logger.info("Building for all platforms...")
        self.logger.info("This will take significant time (30-60 minutes per platform)")
        self.logger.info("NOTE: Cross-platform builds require appropriate toolchains installed.")
        self.logger.info("      Builds will be skipped for platforms without required tools.")

        summary = BuildSummary()

        for descriptor in self.platforms:
            self.logger.banner(f"Building for {descriptor.name}...")

            check = self.probe.check(descriptor)
            if not check.can_build:
                summary.results.append(PlatformResult(
                    platform=descriptor.name,
                    status=SKIPPED,
                    reason=check.reason,
                    required_tools=list(check.required_tools),
                ))
                self.logger.warning(f"{descriptor.name} build skipped: {check.reason}")
                self.logger.info(f"Required tools for {descriptor.name}:")
                for tool in check.required_tools:
                    self.logger.info(f"  - {tool}")
                continue

            try:
                library = self.build_platform(descriptor)
            except Exception as e:
                summary.results.append(PlatformResult(
                    platform=descriptor.name, status=FAILED, reason=str(e), error=e,
                ))
                self.logger.error(f"{descriptor.name} build failed: {e}")
                if self.logger.verbose:
                    self.logger.debug(traceback.format_exc())
                self.logger.info("Possible causes:")
                self.logger.info("  - Missing compiler or build tools")
                self.logger.info("  - Incompatible SCons version")
                self.logger.info("  - Missing platform-specific dependencies")
                self.logger.info(f"For {descriptor.name} build requirements, see:")
                self.logger.info(f"  {DOCS_URL}")
                self.logger.info("Continuing with next platform...")
                continue

            summary.results.append(PlatformResult(
                platform=descriptor.name, status=SUCCESS, library=library,
            ))
            self.logger.success(f"{descriptor.name} build successful")

        self.report(summary)
        return summary

    def report(self, summary: BuildSummary) -> None:
        """Log the build summary"""
        self.logger.banner("Build Summary")
        self.logger.info(f"Successful: {len(summary.successful)}/{summary.total}")
        self.logger.info(f"Failed: {len(summary.failed)}/{summary.total}")
        self.logger.info(f"Skipped: {len(summary.skipped)}/{summary.total}")

        if summary.failed or summary.skipped:
            self.logger.info("To build for all platforms, you need:")
            self.logger.info("  - Native build on each OS, OR")
            self.logger.info("  - Cross-compilation toolchains installed")
            self.logger.info("Recommendation: Run the builder on each target platform natively")
            self.logger.info("                for the most reliable results.")
