#!/usr/bin/env python3
"""
Configuration module for the emsecp build orchestrator
Manages paths, toolchain flags, and export settings
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


########################################################################
# Exported Functions
########################################################################

# C functions that must stay callable from Javascript
EXPORTS = (
    "secp256k1_context_create",
    "secp256k1_context_destroy",
    "secp256k1_pedersen_blind_sum",
    "secp256k1_pedersen_commit",
    "secp256k1_rangeproof_sign",
    "secp256k1_pedersen_verify_tally",
    "secp256k1_rangeproof_info",
)


########################################################################
# File Names
########################################################################

TARGET_SCRIPT_NAME = "libsecp256k1.js"
MEMORY_FILE_SUFFIX = ".mem"
GLUE_SCRIPT_NAME = "init.js"
INNER_BUILD_DIR_NAME = "secp256k1-build"
NESTED_OBJECT = "src/libsecp256k1_la-secp256k1.o"
DESCRIPTOR_NAME = "Makefile"
CONFIGURE_SCRIPT_NAME = "configure"
BOOTSTRAP_SCRIPT_NAME = "autogen.sh"
CONFIGURE_STAMP_NAME = ".emsecp-configure.json"

# Left behind by configure's compiler checks
PROBE_ARTIFACTS = ("a.out", "a.out.js")


########################################################################
# Toolchain Configuration
########################################################################

EMCC = "emcc"
EMCONFIGURE = "emconfigure"
EMMAKE = "emmake"
MAKE = "make"

REQUIRED_TOOLS = (EMCC, EMCONFIGURE, EMMAKE)

# Set DEBUG to anything but the empty string for a debug build
DEBUG_ENV_VAR = "DEBUG"

# Add --minify 0 to debug Closure renaming issues
RELEASE_FLAGS = ["-O3", "--memory-init-file", "0", "--closure", "1"]
DEBUG_FLAGS = ["-g", "--memory-init-file", "0", "--closure", "0", "-s", "ASSERTIONS=1"]

CLOSURE_ARGS = "--language_in ECMASCRIPT6 --language_out ES5"
NESTED_BUILD_CFLAGS = "-Wno-warn-absolute-paths"
LINK_SETTINGS = ["-s", "NO_EXIT_RUNTIME=1"]


########################################################################
# Configure Options
########################################################################

# Portable C backends only: no asm, no GMP
PORTABILITY_FLAGS = (
    "--with-field=32bit",
    "--with-scalar=32bit",
    "--with-bignum=no",
    "--with-asm=no",
    "--enable-tests=no",
)


########################################################################
# Path Configuration
########################################################################

@dataclass(frozen=True)
class BuildPaths:
    """Absolute locations used by one orchestrator run."""

    source_dir: Path
    library_source_dir: Path
    build_dir: Path

    @property
    def inner_build_dir(self) -> Path:
        return self.build_dir / INNER_BUILD_DIR_NAME

    @property
    def glue_script(self) -> Path:
        return self.source_dir / GLUE_SCRIPT_NAME

    @property
    def configure_script(self) -> Path:
        return self.library_source_dir / CONFIGURE_SCRIPT_NAME

    @property
    def bootstrap_script(self) -> Path:
        return self.library_source_dir / BOOTSTRAP_SCRIPT_NAME

    @property
    def nested_object(self) -> Path:
        return self.inner_build_dir / NESTED_OBJECT

    @property
    def nested_descriptor(self) -> Path:
        return self.inner_build_dir / DESCRIPTOR_NAME

    @property
    def configure_stamp(self) -> Path:
        return self.inner_build_dir / CONFIGURE_STAMP_NAME

    @property
    def artifact(self) -> Path:
        return self.build_dir / TARGET_SCRIPT_NAME

    @property
    def memory_file(self) -> Path:
        return self.build_dir / (TARGET_SCRIPT_NAME + MEMORY_FILE_SUFFIX)

    @property
    def installed_artifact(self) -> Path:
        return self.source_dir / TARGET_SCRIPT_NAME

    @property
    def descriptor(self) -> Path:
        return self.build_dir / DESCRIPTOR_NAME


def initialize_paths(source_dir, library_source_dir, build_dir: Optional[Path] = None) -> BuildPaths:
    """Resolve all paths to absolute form; build_dir defaults to the current directory"""
    return BuildPaths(
        source_dir=Path(source_dir).resolve(),
        library_source_dir=Path(library_source_dir).resolve(),
        build_dir=Path(build_dir or Path.cwd()).resolve(),
    )
