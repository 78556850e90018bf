#!/usr/bin/env python3
"""
Nested secp256k1 project: bootstrap and configure steps.

The state of the nested project lives on disk. probe_nested_state() is the
only place that reads it back:

- UNBOOTSTRAPPED: autogen.sh has not produced a configure script yet
- BOOTSTRAPPED_UNCONFIGURED: configure exists but the inner build directory
  has no Makefile, or it was configured with different inputs
- CONFIGURED: the inner build matches the requested configure inputs
"""

import json
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence

from .config import EMCONFIGURE, PORTABILITY_FLAGS, PROBE_ARTIFACTS, BuildPaths
from .toolchain import ToolchainEnvironment
from .utils import console, remove_files, run_command

print = console.print


class NestedConfigState(Enum):
    UNBOOTSTRAPPED = "unbootstrapped"
    BOOTSTRAPPED_UNCONFIGURED = "bootstrapped-unconfigured"
    CONFIGURED = "configured"


def configure_argv(paths: BuildPaths, passthrough: Sequence[str] = ()) -> List[str]:
    """Fixed portability flags first, caller flags last so they can override."""
    return [EMCONFIGURE, str(paths.configure_script), *PORTABILITY_FLAGS, *passthrough]


def configure_environment(paths: BuildPaths) -> dict:
    """Let the nested sources find the headers configure generates."""
    return {"CFLAGS": f"-I {paths.inner_build_dir / 'src'}"}


def configure_fingerprint(paths: BuildPaths, toolchain: ToolchainEnvironment,
                          passthrough: Sequence[str] = ()) -> dict:
    """Everything that, when changed, requires configure to run again."""
    return {
        "argv": configure_argv(paths, passthrough),
        "env": configure_environment(paths),
        "profile": toolchain.profile.value,
    }


def _read_stamp(stamp: Path) -> Optional[dict]:
    try:
        return json.loads(stamp.read_text())
    except FileNotFoundError:
        return None
    except ValueError:
        # Interrupted write; treat as never configured
        return None


def probe_nested_state(paths: BuildPaths, fingerprint: Optional[dict] = None) -> NestedConfigState:
    """
    Work out the nested project's state from the filesystem.

    Args:
        paths: Paths of this run
        fingerprint: Requested configure inputs; None only checks that a
            configure stamp and Makefile exist

    Returns:
        NestedConfigState
    """
    if not paths.configure_script.exists():
        return NestedConfigState.UNBOOTSTRAPPED

    stamp = paths.configure_stamp
    recorded = _read_stamp(stamp)
    if recorded is None or not paths.nested_descriptor.exists():
        return NestedConfigState.BOOTSTRAPPED_UNCONFIGURED

    if fingerprint is not None and recorded != fingerprint:
        return NestedConfigState.BOOTSTRAPPED_UNCONFIGURED

    if paths.configure_script.stat().st_mtime_ns > stamp.stat().st_mtime_ns:
        return NestedConfigState.BOOTSTRAPPED_UNCONFIGURED

    return NestedConfigState.CONFIGURED


def bootstrap(paths: BuildPaths) -> bool:
    """
    Run autogen.sh in the library source directory if it has no configure script.

    A stale top-level Makefile is removed afterwards since it embeds paths
    and flags from the previous configuration.

    Returns:
        True if autogen.sh ran, False if nothing had to be done
    """
    if probe_nested_state(paths) is not NestedConfigState.UNBOOTSTRAPPED:
        return False

    library_dir = paths.library_source_dir
    print(f'[green]Need to first run autogen.sh in "{library_dir}"[/]')
    run_command([paths.bootstrap_script], "Running autogen.sh", cwd=library_dir)

    if paths.descriptor.exists():
        print(f'[green]Removing "{paths.descriptor}"[/]')
        paths.descriptor.unlink()
    print()
    return True


def configure(paths: BuildPaths, toolchain: ToolchainEnvironment,
              passthrough: Sequence[str] = (), force: bool = False) -> bool:
    """
    Run configure (through emconfigure) for the nested build.

    Skipped when the inner build was already configured with the same inputs,
    unless force is set.

    Returns:
        True if configure ran, False if it was skipped
    """
    fingerprint = configure_fingerprint(paths, toolchain, passthrough)
    library_dir = paths.library_source_dir

    if not force and probe_nested_state(paths, fingerprint) is NestedConfigState.CONFIGURED:
        print(f'[yellow]"{paths.inner_build_dir}" is already configured, skipping configure[/]')
        print()
        return False

    print(f'[green]Running configure on "{library_dir}"[/]')
    inner_build_dir = paths.inner_build_dir
    inner_build_dir.mkdir(parents=True, exist_ok=True)

    run_command(
        configure_argv(paths, passthrough),
        f'Configuring in "{inner_build_dir}"',
        cwd=inner_build_dir,
        env_overrides=configure_environment(paths),
    )

    remove_files(inner_build_dir / name for name in PROBE_ARTIFACTS)
    paths.configure_stamp.write_text(json.dumps(fingerprint, indent=2, sort_keys=True) + "\n")

    print(f'[green]Done with configure on "{library_dir}"[/]')
    print()
    return True
