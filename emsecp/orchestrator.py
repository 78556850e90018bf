#!/usr/bin/env python3
"""
Orchestrator - configures the nested secp256k1 build and writes the top-level Makefile

Order of a run:
  1. check the glue script and the Emscripten toolchain (no side effects)
  2. autogen.sh, only when the library has no configure script
  3. emconfigure in the inner build directory, unless already configured
  4. write the Makefile that builds, links and installs libsecp256k1.js
"""

from typing import Iterable, Optional, Sequence

from .config import EXPORTS, BuildPaths
from .descriptor import build_descriptor_graph, refresh_nested_object
from .exceptions import GlueScriptNotFoundError
from .makefile import write_descriptor
from .nested import bootstrap, configure
from .toolchain import BuildProfile, require_toolchain, resolve_toolchain
from .utils import console

print = console.print


class Orchestrator:
    """Drives one configure run for a build directory"""

    def __init__(self, paths: BuildPaths, passthrough: Sequence[str] = (),
                 profile: Optional[BuildProfile] = None, symbols: Iterable[str] = EXPORTS):
        self.paths = paths
        self.passthrough = list(passthrough)
        self.profile = profile or BuildProfile.from_environment()
        self.symbols = tuple(symbols)
        self.toolchain = resolve_toolchain(self.profile)

    def check_preconditions(self) -> None:
        """Glue script first, then the toolchain; neither touches the filesystem"""
        if not self.paths.glue_script.exists():
            raise GlueScriptNotFoundError(self.paths.glue_script)
        require_toolchain()

    def write_makefile(self) -> str:
        """Write the top-level Makefile"""
        descriptor = self.paths.descriptor
        print(f'[green]Writing Makefile to "{descriptor}"[/]')
        refresh_nested_object(self.paths)
        graph = build_descriptor_graph(self.paths, self.toolchain, self.symbols)
        return write_descriptor(descriptor, graph)

    def run(self) -> str:
        """
        Run every step in order.

        Returns:
            The Makefile text that was written
        """
        self.check_preconditions()
        print(f"[bold cyan]Configuring {self.profile.value} build in {self.paths.build_dir}[/]")

        bootstrapped = bootstrap(self.paths)
        configure(self.paths, self.toolchain, self.passthrough, force=bootstrapped)
        return self.write_makefile()
