#!/usr/bin/env python3
"""
Top-level build graph.

Describes what has to be built in what order. The textual Makefile form is
produced separately by makefile.MakefileWriter.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from .config import EMCC, EMMAKE, EXPORTS, LINK_SETTINGS, MAKE, BuildPaths
from .exports import export_list_literal
from .toolchain import ToolchainEnvironment


@dataclass(frozen=True)
class Recipe:
    """One recipe line: environment assignments, then a command."""

    argv: Sequence[str]
    env: Dict[str, str] = field(default_factory=dict)
    ignore_errors: bool = False


@dataclass
class Target:
    name: str
    prerequisites: List[str] = field(default_factory=list)
    recipes: List[Recipe] = field(default_factory=list)
    phony: bool = False


class BuildGraph:
    """Ordered, acyclic set of named targets."""

    def __init__(self):
        self._targets: Dict[str, Target] = {}

    def add(self, name, prerequisites: Iterable = (), recipes: Iterable[Recipe] = (),
            phony: bool = False) -> Target:
        name = str(name)
        if name in self._targets:
            raise ValueError(f"Duplicate target: {name}")
        target = Target(name, [str(p) for p in prerequisites], list(recipes), phony)
        self._targets[name] = target
        self._check_acyclic()
        return target

    def __getitem__(self, name) -> Target:
        return self._targets[str(name)]

    def __contains__(self, name) -> bool:
        return str(name) in self._targets

    def __iter__(self):
        return iter(self._targets.values())

    @property
    def phony_targets(self) -> List[str]:
        return [t.name for t in self if t.phony]

    def dependencies(self, name) -> List[str]:
        """All targets reachable from name, prerequisites before dependents."""
        order: List[str] = []

        def visit(node: str) -> None:
            if node in order or node not in self._targets:
                return
            for prerequisite in self._targets[node].prerequisites:
                visit(prerequisite)
            order.append(node)

        for prerequisite in self[name].prerequisites:
            visit(prerequisite)
        return order

    def _check_acyclic(self) -> None:
        done = set()
        active = set()

        def visit(node: str) -> None:
            if node in done or node not in self._targets:
                return
            if node in active:
                raise ValueError(f"Dependency cycle through target: {node}")
            active.add(node)
            for prerequisite in self._targets[node].prerequisites:
                visit(prerequisite)
            active.discard(node)
            done.add(node)

        for node in self._targets:
            visit(node)


def build_descriptor_graph(paths: BuildPaths, toolchain: ToolchainEnvironment,
                           symbols: Optional[Iterable[str]] = None) -> BuildGraph:
    """
    Build the top-level graph: default -> install -> all -> artifact -> nested object.

    Every path is absolute so the Makefile works from any directory.
    """
    artifact = paths.artifact
    nested_object = paths.nested_object
    inner_build_dir = paths.inner_build_dir
    exports = export_list_literal(EXPORTS if symbols is None else symbols)

    graph = BuildGraph()
    graph.add("default", ["install"], phony=True)
    graph.add("all", [artifact], phony=True)
    graph.add(
        "install",
        ["all"],
        [Recipe(["mv", artifact, paths.installed_artifact], ignore_errors=True)],
        phony=True,
    )
    graph.add(
        artifact,
        [nested_object, paths.glue_script],
        [
            Recipe(
                [
                    EMCC, nested_object,
                    "-o", artifact,
                    "--pre-js", paths.glue_script,
                    *toolchain.link_flags,
                    *LINK_SETTINGS,
                    "-s", f"EXPORTED_FUNCTIONS={exports}",
                ],
                env={"EMCC_CLOSURE_ARGS": toolchain.closure_args},
            )
        ],
    )
    # Left without prerequisites: the nested make decides what is stale
    graph.add(
        nested_object,
        recipes=[Recipe([EMMAKE, MAKE, "-C", inner_build_dir], env=dict(toolchain.build_env))],
    )
    graph.add(
        "clean",
        recipes=[
            Recipe([MAKE, "-C", inner_build_dir, "clean"]),
            Recipe(["rm", "-f", artifact, paths.memory_file], ignore_errors=True),
        ],
        phony=True,
    )
    graph.add(
        "veryclean",
        recipes=[
            Recipe(["rm", "-rf", inner_build_dir], ignore_errors=True),
            Recipe(["rm", "-f", artifact, paths.memory_file, paths.descriptor], ignore_errors=True),
        ],
        phony=True,
    )
    return graph


def refresh_nested_object(paths: BuildPaths) -> Optional[Path]:
    """
    Bump the nested object's mtime to now, if it was built before.

    Rerunning configure regenerates the nested Makefile and headers, after
    which the nested make treats an object built from unchanged sources as
    out of date and relinks everything. Touching the object keeps it current.
    """
    nested_object = paths.nested_object
    try:
        os.utime(nested_object)
    except FileNotFoundError:
        return None
    return nested_object
