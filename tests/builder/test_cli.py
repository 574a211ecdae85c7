import pytest
from conftest import FakeRunner, simulate_godot

from libgodot_builder import main as cli
from libgodot_builder.platform import PlatformDetector


class _Recorder:
    instances = []

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.build_all = None
        _Recorder.instances.append(self)

    def run(self, build_all=False):
        self.build_all = build_all


@pytest.fixture
def recorder(monkeypatch):
    _Recorder.instances = []
    monkeypatch.setattr(cli, "GodotBuilder", _Recorder)
    return _Recorder


def test_no_arguments_builds_host_only(recorder):
    assert cli.main([]) == 0

    assert recorder.instances[0].build_all is False
    assert recorder.instances[0].kwargs["dry_run"] is False


@pytest.mark.parametrize("flag", ["--all", "-a"])
def test_all_flag(recorder, flag):
    assert cli.main([flag]) == 0

    assert recorder.instances[0].build_all is True


@pytest.mark.parametrize("flag", ["--help", "-h"])
def test_help_exits_zero(recorder, flag, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main([flag])

    assert excinfo.value.code == 0
    out = capsys.readouterr().out
    assert "--all" in out
    assert "Cross-Platform Building" in out
    assert recorder.instances == []


def test_unknown_argument_is_rejected(recorder):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--bogus"])

    assert excinfo.value.code == 2


def test_unhandled_error_exits_nonzero(monkeypatch, capsys):
    def explode(**kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(cli, "GodotBuilder", explode)

    assert cli.main([]) == 1
    err = capsys.readouterr().err
    assert "Error: boom" in err
    assert "Traceback" in err


def test_keyboard_interrupt_exit_code(monkeypatch):
    def interrupt(**kwargs):
        raise KeyboardInterrupt

    monkeypatch.setattr(cli, "GodotBuilder", interrupt)

    assert cli.main([]) == 130


def _patch_runtime(monkeypatch, runner):
    monkeypatch.setattr(cli, "PlatformDetector", lambda: PlatformDetector(system="Linux"))
    monkeypatch.setattr(cli, "CommandRunner", lambda logger, dry_run=False: runner)


def test_single_platform_command_failure_exits_nonzero(monkeypatch, tmp_path, capsys):
    runner = FakeRunner(on_run=simulate_godot, fail=lambda argv: argv[0] == "scons")
    _patch_runtime(monkeypatch, runner)

    assert cli.main(["--root-dir", str(tmp_path)]) == 1
    assert "Command failed with exit code 2: scons platform=linuxbsd" in capsys.readouterr().err


def test_all_platforms_failure_still_exits_zero(monkeypatch, tmp_path):
    runner = FakeRunner(on_run=simulate_godot, fail=lambda argv: argv[0] == "scons")
    _patch_runtime(monkeypatch, runner)

    assert cli.main(["--all", "--root-dir", str(tmp_path)]) == 0
    assert ["scons", "platform=linuxbsd", "target=template_release", "library_type=shared_library"] in runner.commands


def test_unsupported_host_exits_nonzero(monkeypatch, tmp_path, capsys):
    monkeypatch.setattr(cli, "PlatformDetector", lambda: PlatformDetector(system="Haiku"))

    assert cli.main(["--root-dir", str(tmp_path)]) == 1
    assert "Unsupported platform: Haiku" in capsys.readouterr().err


def test_main_end_to_end_populates_outputs(monkeypatch, tmp_path):
    runner = FakeRunner(on_run=simulate_godot)
    _patch_runtime(monkeypatch, runner)

    assert cli.main(["--root-dir", str(tmp_path)]) == 0
    assert sorted(p.name for p in (tmp_path / "lib").iterdir()) == ["linux"]
    assert (tmp_path / "src" / "GodotAssemblies" / "Api" / "Release" / "GodotSharp.dll").exists()
