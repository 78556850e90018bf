"""Shared pytest fixtures for emsecp tests."""

from __future__ import annotations

import os
import pathlib
import sys
from dataclasses import dataclass

import pytest

REPO_ROOT = pathlib.Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT))

from emsecp.config import initialize_paths  # noqa: E402

# emconfigure/emmake forward to the wrapped command, emcc does nothing
PASSTHROUGH_TOOL = '#!/bin/sh\nexec "$@"\n'
NOOP_TOOL = "#!/bin/sh\nexit 0\n"

AUTOGEN = """#!/bin/sh
echo ran >> autogen.log
cp configure.template configure
chmod +x configure
"""

# Runs inside the inner build directory
CONFIGURE = """#!/bin/sh
printf '%s\\n' "$@" > configure.args
printf '%s\\n' "$CFLAGS" > configure.cflags
echo ran >> configure.count
touch a.out a.out.js
if [ -n "$FAKE_CONFIGURE_EXIT" ]; then
    exit "$FAKE_CONFIGURE_EXIT"
fi
printf 'all:\\n' > Makefile
"""


def write_script(path: pathlib.Path, content: str) -> pathlib.Path:
    path.write_text(content)
    path.chmod(0o755)
    return path


@dataclass
class Workspace:
    root: pathlib.Path
    source_dir: pathlib.Path
    library_dir: pathlib.Path
    build_dir: pathlib.Path
    bin_dir: pathlib.Path

    @property
    def inner_build_dir(self) -> pathlib.Path:
        return self.build_dir / "secp256k1-build"

    @property
    def makefile(self) -> pathlib.Path:
        return self.build_dir / "Makefile"

    def paths(self):
        return initialize_paths(self.source_dir, self.library_dir, self.build_dir)

    def configure_args(self) -> list[str]:
        return (self.inner_build_dir / "configure.args").read_text().splitlines()

    def configure_runs(self) -> int:
        count = self.inner_build_dir / "configure.count"
        return len(count.read_text().splitlines()) if count.exists() else 0

    def autogen_runs(self) -> int:
        log = self.library_dir / "autogen.log"
        return len(log.read_text().splitlines()) if log.exists() else 0

    def snapshot(self) -> set[pathlib.Path]:
        return {p for p in self.root.rglob("*")}


@pytest.fixture
def workspace(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch) -> Workspace:
    """Glue source dir, an unbootstrapped library, an empty build dir, fake Emscripten."""
    source_dir = tmp_path / "src"
    library_dir = tmp_path / "secp256k1"
    build_dir = tmp_path / "build"
    bin_dir = tmp_path / "bin"
    for d in (source_dir, library_dir, build_dir, bin_dir):
        d.mkdir()

    (source_dir / "init.js").write_text("// glue\n")
    write_script(library_dir / "autogen.sh", AUTOGEN)
    (library_dir / "configure.template").write_text(CONFIGURE)

    write_script(bin_dir / "emcc", NOOP_TOOL)
    write_script(bin_dir / "emconfigure", PASSTHROUGH_TOOL)
    write_script(bin_dir / "emmake", PASSTHROUGH_TOOL)

    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")
    monkeypatch.delenv("DEBUG", raising=False)
    monkeypatch.delenv("FAKE_CONFIGURE_EXIT", raising=False)
    monkeypatch.chdir(build_dir)

    return Workspace(tmp_path, source_dir, library_dir, build_dir, bin_dir)


@pytest.fixture
def bootstrapped(workspace: Workspace) -> Workspace:
    """Workspace whose library already has a configure script."""
    write_script(workspace.library_dir / "configure", CONFIGURE)
    return workspace


@pytest.fixture
def paths(tmp_path: pathlib.Path):
    """BuildPaths rooted in tmp_path; nothing is created on disk."""
    return initialize_paths(tmp_path / "src", tmp_path / "secp256k1", tmp_path / "build")
