"""
Configuration management for the builder
"""

import copy
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..errors import ConfigError

DEFAULT_CONFIG_FILE = Path(__file__).parent / "builder.yaml"

ROOT_ENV_VAR = "LIBGODOT_BUILDER_ROOT"


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base"""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Builder config not found: {path}")

    with open(path, 'r', encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a mapping: {path}")
    return data


class ConfigLoader:
    """Loads and manages builder configuration"""

    def __init__(self, config_file: Optional[Path] = None):
        """
        Initialize configuration loader

        Args:
            config_file: Optional user config merged over the packaged defaults
        """
        self.config_file = Path(config_file) if config_file else None
        self.config = _load_yaml(DEFAULT_CONFIG_FILE)

        if self.config_file is not None:
            self.config = _merge(self.config, _load_yaml(self.config_file))

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get a whole section, empty if absent"""
        value = self.config.get(section) or {}
        if not isinstance(value, dict):
            raise ConfigError(f"Config section '{section}' must be a mapping")
        return value

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """
        Get a value from a section

        Args:
            section: Section name (godot, build, artifacts, output)
            key: Key inside the section
            default: Default value if not found

        Returns:
            Configured value
        """
        return self.get_section(section).get(key, default)

    def get_list(self, section: str, key: str) -> List[str]:
        """Get a value that must be a list of strings"""
        value = self.get(section, key, [])
        if isinstance(value, str):
            return [value]
        if not isinstance(value, list):
            raise ConfigError(f"Config key '{section}.{key}' must be a list")
        return [str(v) for v in value]

    def get_option(self, key: str, default: Any = None) -> Any:
        """Get a value from the build section"""
        return self.get("build", key, default)


@dataclass(frozen=True)
class BuildPaths:
    """Filesystem locations used for one run"""

    root_dir: Path
    godot_dir: Path
    lib_dir: Path
    assemblies_dir: Path

    @classmethod
    def resolve(cls, config: ConfigLoader, root_dir: Optional[Path] = None) -> "BuildPaths":
        """
        Compute all paths from the root directory

        The root is root_dir when given, else $LIBGODOT_BUILDER_ROOT, else the
        current working directory.
        """
        if root_dir is None:
            env_root = os.environ.get(ROOT_ENV_VAR)
            root_dir = Path(env_root) if env_root else Path.cwd()
        root = Path(root_dir).resolve()

        return cls(
            root_dir=root,
            godot_dir=root / config.get("godot", "source_dir", "godot"),
            lib_dir=root / config.get("output", "lib_dir", "lib"),
            assemblies_dir=root / config.get("output", "assemblies_dir", "src/GodotAssemblies"),
        )

    @property
    def bin_dir(self) -> Path:
        return self.godot_dir / "bin"

    @property
    def glue_dir(self) -> Path:
        return self.godot_dir / "modules" / "mono" / "glue"

    @property
    def build_assemblies_script(self) -> Path:
        return self.godot_dir / "modules" / "mono" / "build_scripts" / "build_assemblies.py"

    @property
    def godotsharp_dir(self) -> Path:
        return self.bin_dir / "GodotSharp"

    @property
    def nupkgs_dir(self) -> Path:
        return self.godotsharp_dir / "NuPkgs"

    def platform_lib_dir(self, output_dir: str) -> Path:
        """Per-platform library output directory"""
        return self.lib_dir / output_dir


__all__ = ["ConfigLoader", "BuildPaths", "DEFAULT_CONFIG_FILE", "ROOT_ENV_VAR"]
