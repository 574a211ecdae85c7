"""
Build steps for producing Godot libraries and GodotSharp bindings
"""

from .base_builder import BaseBuilder
from .source_checkout import SourceCheckout
from .scons_builder import LibraryBuilder, find_library, expand_patterns
from .bindings_builder import BindingsBuilder, select_editor_binary
from .orchestrator import BuildOrchestrator, BuildSummary, PlatformResult

__all__ = [
    "BaseBuilder",
    "SourceCheckout",
    "LibraryBuilder",
    "BindingsBuilder",
    "BuildOrchestrator",
    "BuildSummary",
    "PlatformResult",
    "find_library",
    "expand_patterns",
    "select_editor_binary",
]
