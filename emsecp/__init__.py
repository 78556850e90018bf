#!/usr/bin/env python3
"""
Emscripten build orchestrator for secp256k1.

Modules:
- config: Paths, file names and toolchain flags
- utils: Console output and command execution
- exports: EXPORTED_FUNCTIONS generation
- toolchain: Build profile and Emscripten discovery
- nested: Bootstrap and configure of the nested autoconf build
- descriptor: Top-level build graph
- makefile: Makefile rendering
- orchestrator: Runs all steps in order
"""

from .config import EXPORTS, BuildPaths, initialize_paths
from .descriptor import BuildGraph, Recipe, Target, build_descriptor_graph, refresh_nested_object
from .exceptions import (
    CommandFailedError,
    GlueScriptNotFoundError,
    OrchestratorError,
    ToolchainNotFoundError,
    UsageError,
)
from .exports import export_list_literal, normalize_symbols
from .makefile import MakefileWriter, write_descriptor
from .nested import NestedConfigState, bootstrap, configure, probe_nested_state
from .orchestrator import Orchestrator
from .toolchain import BuildProfile, ToolchainEnvironment, require_toolchain, resolve_toolchain

__version__ = "0.1.0"

__all__ = [
    # config
    "EXPORTS",
    "BuildPaths",
    "initialize_paths",
    # descriptor
    "BuildGraph",
    "Recipe",
    "Target",
    "build_descriptor_graph",
    "refresh_nested_object",
    # exceptions
    "CommandFailedError",
    "GlueScriptNotFoundError",
    "OrchestratorError",
    "ToolchainNotFoundError",
    "UsageError",
    # exports
    "export_list_literal",
    "normalize_symbols",
    # makefile
    "MakefileWriter",
    "write_descriptor",
    # nested
    "NestedConfigState",
    "bootstrap",
    "configure",
    "probe_nested_state",
    # orchestrator
    "Orchestrator",
    # toolchain
    "BuildProfile",
    "ToolchainEnvironment",
    "require_toolchain",
    "resolve_toolchain",
]
