import pytest

from libgodot_builder.config import ROOT_ENV_VAR, BuildPaths, ConfigLoader
from libgodot_builder.errors import ConfigError


def test_default_config_values():
    config = ConfigLoader()

    assert config.get("godot", "repository") == "https://github.com/godotengine/godot.git"
    assert config.get("godot", "branch") == "master"
    assert config.get_list("build", "library_args") == [
        "target=template_release",
        "library_type=shared_library",
    ]
    assert config.get_list("artifacts", "library_patterns")[0] == "godot.{platform}.*.{ext}"
    assert config.get_option("scons") == "scons"
    assert config.get("godot", "missing", "fallback") == "fallback"


def test_user_config_is_merged_over_defaults(tmp_path):
    user = tmp_path / "builder.yaml"
    user.write_text(
        "godot:\n"
        "  branch: 4.5-stable\n"
        "build:\n"
        "  extra_args: ['-j{cpu_count}']\n"
    )

    config = ConfigLoader(user)

    assert config.get("godot", "branch") == "4.5-stable"
    assert config.get("godot", "repository") == "https://github.com/godotengine/godot.git"
    assert config.get_list("build", "extra_args") == ["-j{cpu_count}"]
    assert config.get_list("build", "editor_args") == ["target=editor", "module_mono_enabled=yes"]


def test_missing_user_config_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        ConfigLoader(tmp_path / "nope.yaml")


def test_non_mapping_config_raises(tmp_path):
    user = tmp_path / "builder.yaml"
    user.write_text("- just\n- a list\n")

    with pytest.raises(ConfigError):
        ConfigLoader(user)


def test_paths_from_explicit_root(tmp_path):
    paths = BuildPaths.resolve(ConfigLoader(), tmp_path)

    assert paths.root_dir == tmp_path
    assert paths.godot_dir == tmp_path / "godot"
    assert paths.lib_dir == tmp_path / "lib"
    assert paths.assemblies_dir == tmp_path / "src" / "GodotAssemblies"
    assert paths.bin_dir == tmp_path / "godot" / "bin"
    assert paths.glue_dir == tmp_path / "godot" / "modules" / "mono" / "glue"
    assert paths.nupkgs_dir == tmp_path / "godot" / "bin" / "GodotSharp" / "NuPkgs"
    assert paths.platform_lib_dir("linux") == tmp_path / "lib" / "linux"


def test_paths_root_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv(ROOT_ENV_VAR, str(tmp_path))

    assert BuildPaths.resolve(ConfigLoader()).root_dir == tmp_path


def test_paths_root_defaults_to_cwd(tmp_path, monkeypatch):
    monkeypatch.delenv(ROOT_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)

    assert BuildPaths.resolve(ConfigLoader()).root_dir == tmp_path


def test_paths_follow_output_config(tmp_path):
    user = tmp_path / "builder.yaml"
    user.write_text("output:\n  lib_dir: out/native\n  assemblies_dir: out/managed\n")

    paths = BuildPaths.resolve(ConfigLoader(user), tmp_path)

    assert paths.lib_dir == tmp_path / "out" / "native"
    assert paths.assemblies_dir == tmp_path / "out" / "managed"
