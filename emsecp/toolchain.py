#!/usr/bin/env python3
"""
Emscripten discovery and build profile utilities.

Decides between release and debug builds and computes the flags and
environment handed to emcc and to the nested emmake build.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional

from .config import (
    CLOSURE_ARGS,
    DEBUG_ENV_VAR,
    DEBUG_FLAGS,
    NESTED_BUILD_CFLAGS,
    RELEASE_FLAGS,
    REQUIRED_TOOLS,
)
from .exceptions import ToolchainNotFoundError
from .utils import command_exists


class BuildProfile(Enum):
    RELEASE = "release"
    DEBUG = "debug"

    @classmethod
    def from_environment(cls, environ: Optional[Mapping[str, str]] = None) -> "BuildProfile":
        """Unset or empty DEBUG means release; any other value means debug."""
        environ = os.environ if environ is None else environ
        return cls.DEBUG if environ.get(DEBUG_ENV_VAR) else cls.RELEASE


@dataclass(frozen=True)
class ToolchainEnvironment:
    profile: BuildProfile
    link_flags: List[str] = field(default_factory=list)
    build_env: Dict[str, str] = field(default_factory=dict)
    debug_instrumentation: bool = False
    closure_args: str = CLOSURE_ARGS


def resolve_toolchain(profile: BuildProfile) -> ToolchainEnvironment:
    """
    Get the emcc link flags and nested build environment for a profile.

    Args:
        profile: Release or debug build

    Returns:
        ToolchainEnvironment for the run
    """
    debug = profile is BuildProfile.DEBUG
    return ToolchainEnvironment(
        profile=profile,
        link_flags=list(DEBUG_FLAGS if debug else RELEASE_FLAGS),
        build_env={
            "EMMAKEN_CFLAGS": NESTED_BUILD_CFLAGS,
            "EMCC_DEBUG": "1" if debug else "0",
        },
        debug_instrumentation=debug,
    )


def find_missing_tools() -> List[str]:
    """Return the required Emscripten tools that are not on PATH."""
    return [tool for tool in REQUIRED_TOOLS if not command_exists(tool)]


def require_toolchain() -> None:
    """
    Ensure emcc, emconfigure and emmake can be found.

    Raises:
        ToolchainNotFoundError: If any of them is missing
    """
    missing = find_missing_tools()
    if missing:
        raise ToolchainNotFoundError(missing)
