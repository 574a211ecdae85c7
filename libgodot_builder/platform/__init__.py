"""
Platform detection and cross-compilation toolchain probing
"""

import platform
import shutil
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from ..errors import UnsupportedPlatformError


@dataclass(frozen=True)
class PlatformDescriptor:
    """A Godot build target: SCons platform name, library extension and output folder"""

    name: str
    lib_ext: str
    output_dir: str

    def __str__(self) -> str:
        return self.name


WINDOWS = PlatformDescriptor("windows", "dll", "windows")
LINUX = PlatformDescriptor("linuxbsd", "so", "linux")
MACOS = PlatformDescriptor("macos", "dylib", "macos")

# Build order for --all
PLATFORMS: Tuple[PlatformDescriptor, ...] = (WINDOWS, LINUX, MACOS)

# platform.system() -> descriptor
_SYSTEM_MAP = {
    "windows": WINDOWS,
    "linux": LINUX,
    "darwin": MACOS,
}

MINGW_COMPILER = "x86_64-w64-mingw32-gcc"


def get_platform(name: str) -> PlatformDescriptor:
    """Look up a descriptor by its SCons platform name"""
    for descriptor in PLATFORMS:
        if descriptor.name == name:
            return descriptor
    raise UnsupportedPlatformError(
        f"Unknown platform: {name}. Known: {', '.join(p.name for p in PLATFORMS)}"
    )


class PlatformDetector:
    """Detects the host platform"""

    def __init__(self, system: Optional[str] = None):
        """
        Initialize detector

        Args:
            system: Override for platform.system(), mainly for tests
        """
        self.system = system

    def detect(self) -> PlatformDescriptor:
        """
        Detect the host platform

        Returns:
            Descriptor for the host

        Raises:
            UnsupportedPlatformError: host is not Windows, Linux or macOS
        """
        system = self.system if self.system is not None else platform.system()
        descriptor = _SYSTEM_MAP.get(system.lower())
        if descriptor is None:
            raise UnsupportedPlatformError(f"Unsupported platform: {system or 'unknown'}")
        return descriptor


@dataclass
class ToolchainCheck:
    """Result of probing whether a target can be built from the host"""

    can_build: bool
    reason: str = ""
    required_tools: List[str] = field(default_factory=list)


def on_path(name: str) -> bool:
    """Check whether an executable is on PATH"""
    return shutil.which(name) is not None


class ToolchainProbe:
    """Decides whether a target platform can be built from the host"""

    def __init__(self,
                 host: PlatformDescriptor,
                 is_available: Callable[[str], bool] = on_path):
        """
        Initialize probe

        Args:
            host: Detected host platform
            is_available: Tells whether an executable is installed
        """
        self.host = host
        self.is_available = is_available

    def check(self, target: PlatformDescriptor) -> ToolchainCheck:
        """
        Check cross-compilation requirements for a target

        Args:
            target: Platform to build

        Returns:
            ToolchainCheck with the decision, a reason and the tools involved
        """
        host = self.host.name

        if target.name == host:
            return ToolchainCheck(True)

        if target.name == "windows":
            if host == "linuxbsd":
                tools = [
                    f"MinGW-w64 ({MINGW_COMPILER})",
                    "mingw-w64 package installed",
                ]
                if not self.is_available(MINGW_COMPILER):
                    return ToolchainCheck(False, "MinGW-w64 cross-compiler not found", tools)
                return ToolchainCheck(True, "", tools)
            if host == "macos":
                return ToolchainCheck(
                    False,
                    "Cross-compiling Windows from macOS requires MinGW-w64",
                    ["MinGW-w64 via Homebrew (brew install mingw-w64)"],
                )

        elif target.name == "linuxbsd":
            if host == "windows":
                return ToolchainCheck(
                    False,
                    "Cross-compiling Linux from Windows requires WSL2 or Linux cross-compiler",
                    [
                        "WSL2 (Windows Subsystem for Linux)",
                        "Linux cross-compilation toolchain",
                        "GCC/Clang for Linux target",
                    ],
                )
            if host == "macos":
                return ToolchainCheck(
                    False,
                    "Cross-compiling Linux from macOS is not commonly supported",
                    ["Linux cross-compilation toolchain"],
                )

        elif target.name == "macos":
            return ToolchainCheck(
                False,
                "Cross-compiling macOS from non-macOS systems requires OSXCross (advanced setup)",
                [
                    "OSXCross toolchain",
                    "Xcode SDK",
                    "Note: macOS cross-compilation is complex and rarely used",
                ],
            )

        return ToolchainCheck(True)


__all__ = [
    "PlatformDescriptor",
    "PlatformDetector",
    "ToolchainCheck",
    "ToolchainProbe",
    "PLATFORMS",
    "WINDOWS",
    "LINUX",
    "MACOS",
    "MINGW_COMPILER",
    "get_platform",
    "on_path",
]
