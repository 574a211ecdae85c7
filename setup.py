"""
setup.py for libgodot-builder

Runtime Requirements:
- git (clones and updates the Godot source tree)
- SCons (builds the Godot library and editor)
- A C++ toolchain for each target platform
  (MSVC or MinGW-w64 on Windows, GCC/Clang on Linux, Xcode on macOS)
- .NET SDK (compiles the GodotSharp assemblies)

Cross-Compilation Support:
- Windows libraries can be built from Linux when x86_64-w64-mingw32-gcc is on PATH
- Other cross builds are reported as skipped by `libgodot-builder --all`

Root Directory:
- Outputs land under the working directory by default
- Override with --root-dir or: export LIBGODOT_BUILDER_ROOT=/path/to/checkout
"""

from pathlib import Path

from setuptools import find_packages, setup

readme_path = Path("README.md")
long_description = ""
if readme_path.exists():
    with open(readme_path, "r", encoding="utf-8") as f:
        long_description = f.read()

setup(
    name="libgodot-builder",
    version="1.0.0",
    description="Builds Godot as a shared library for each platform and produces the GodotSharp bindings",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["libgodot_builder", "libgodot_builder.*"]),
    package_data={
        "libgodot_builder": [
            "config/*.yaml",
        ]
    },
    include_package_data=True,
    install_requires=[
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
        "dev": [
            "pytest",
            "pytest-cov",
            "black",
            "flake8",
            "mypy",
        ]
    },
    entry_points={
        "console_scripts": [
            "libgodot-builder=libgodot_builder.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Operating System :: Microsoft :: Windows",
        "Operating System :: POSIX :: Linux",
        "Operating System :: MacOS",
        "Topic :: Software Development :: Build Tools",
    ],
    zip_safe=False,
    python_requires=">=3.10",
)
