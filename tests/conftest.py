from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

import pytest

from libgodot_builder.errors import CommandError
from libgodot_builder.platform import get_platform
from libgodot_builder.utils import Logger


class FakeRunner:
    """Records commands instead of running them"""

    def __init__(self,
                 on_run: Optional[Callable[[List[str], Optional[Path]], None]] = None,
                 fail: Optional[Callable[[List[str]], bool]] = None,
                 dry_run: bool = False,
                 available: Sequence[str] = ()):
        self.on_run = on_run
        self.fail = fail
        self.dry_run = dry_run
        self.available = set(available)
        self.looked_up: List[str] = []
        self.calls: List[Tuple[List[str], Optional[Path]]] = []

    @property
    def commands(self) -> List[List[str]]:
        return [argv for argv, _ in self.calls]

    def is_available(self, name: str) -> bool:
        self.looked_up.append(name)
        return name in self.available

    def run(self, cmd, cwd=None) -> int:
        argv = [str(c) for c in cmd]
        self.calls.append((argv, Path(cwd) if cwd is not None else None))
        if self.fail is not None and self.fail(argv):
            raise CommandError(argv, 2)
        if self.on_run is not None:
            self.on_run(argv, Path(cwd) if cwd is not None else None)
        return 0


def simulate_godot(argv: List[str], cwd: Optional[Path]) -> None:
    """Fabricate the files the real tools would produce"""
    if argv[:2] == ["git", "clone"]:
        script = Path(argv[-1]) / "modules" / "mono" / "build_scripts" / "build_assemblies.py"
        script.parent.mkdir(parents=True, exist_ok=True)
        script.write_text("")
    elif argv[0] == "scons":
        descriptor = get_platform(argv[1].split("=", 1)[1])
        bin_dir = cwd / "bin"
        bin_dir.mkdir(parents=True, exist_ok=True)
        if "target=editor" in argv:
            (bin_dir / f"godot.{descriptor.name}.editor.x86_64.mono").write_text("editor")
        else:
            name = f"libgodot.{descriptor.name}.template_release.x86_64.{descriptor.lib_ext}"
            (bin_dir / name).write_text("lib")
    elif "--generate-mono-glue" in argv:
        Path(argv[-1]).mkdir(parents=True, exist_ok=True)
    elif len(argv) > 1 and argv[1].endswith("build_assemblies.py"):
        godotsharp = Path(argv[2].split("=", 1)[1]) / "GodotSharp"
        for rel in ("Api/Release/GodotSharp.dll", "Tools/GodotTools.dll", "NuPkgs/GodotSharp.4.5.0.nupkg"):
            target = godotsharp / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(rel)


@pytest.fixture
def logger() -> Logger:
    return Logger(verbose=True)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner(on_run=simulate_godot)


@pytest.fixture
def tmp_path(tmp_path: Path) -> Path:
    # Builder paths are resolved, so compare against the resolved location
    return tmp_path.resolve()
