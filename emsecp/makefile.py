"""Render a BuildGraph as a GNU Makefile."""

import shlex
from pathlib import Path

from .descriptor import BuildGraph, Recipe, Target

HEADER = "# Generated by emsecp-configure. Do not edit; rerun emsecp-configure instead.\n"


def _escape_dollars(text: str) -> str:
    return text.replace("$", "$$")


def _make_name(name: str) -> str:
    """Target and prerequisite names are not shell-quoted; escape what make cares about."""
    return _escape_dollars(name).replace(" ", "\\ ")


class MakefileWriter:
    """Serializes a BuildGraph. Same graph in, same bytes out."""

    def __init__(self, header: str = HEADER):
        self.header = header

    def render_recipe(self, recipe: Recipe) -> str:
        words = [f"{key}={shlex.quote(str(value))}" for key, value in recipe.env.items()]
        words.extend(shlex.quote(str(arg)) for arg in recipe.argv)
        line = _escape_dollars(" ".join(words))
        return "\t" + ("-" if recipe.ignore_errors else "") + line

    def render_target(self, target: Target) -> str:
        rule = _make_name(target.name) + ":"
        if target.prerequisites:
            rule += " " + " ".join(_make_name(p) for p in target.prerequisites)
        lines = [rule]
        lines.extend(self.render_recipe(recipe) for recipe in target.recipes)
        return "\n".join(lines) + "\n"

    def render(self, graph: BuildGraph) -> str:
        sections = [self.header]
        phony = graph.phony_targets
        if phony:
            sections.append(".PHONY: " + " ".join(_make_name(name) for name in phony) + "\n")
        sections.extend(self.render_target(target) for target in graph)
        return "\n".join(sections)


def write_descriptor(path: Path, graph: BuildGraph) -> str:
    """Render graph and write it to path. Returns the rendered text."""
    text = MakefileWriter().render(graph)
    path.write_text(text)
    return text
