"""
libgodot-builder
Builds Godot as a shared library and produces the GodotSharp bindings
Supports Windows, Linux and macOS hosts
"""

__version__ = "1.0.0"

from .main import GodotBuilder

__all__ = ["GodotBuilder", "__version__"]
