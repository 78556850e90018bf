#!/usr/bin/env python3
"""
emsecp-configure - set up an Emscripten build of secp256k1

Usage:
    emsecp-configure <src_dir> <secp256k1_src_dir> [arguments_passed_to_configure]...

Run it from the build directory. Afterwards `make` builds libsecp256k1.js
and moves it into <src_dir>. Set DEBUG=1 for a debug build.
"""

from typing import List, Optional

import typer
from rich.markup import escape

from .config import initialize_paths
from .exceptions import OrchestratorError, ToolchainNotFoundError, UsageError
from .orchestrator import Orchestrator
from .utils import console

print = console.print

USAGE = "Usage: emsecp-configure <src_dir> <secp256k1_src_dir> [arguments_passed_to_configure]..."

app = typer.Typer(add_completion=False, help="Configure an Emscripten build of secp256k1")


def _report(error: OrchestratorError) -> None:
    if isinstance(error, UsageError):
        print(escape(str(error)))
        return
    print(f"[red]{escape(str(error))}[/]")
    if isinstance(error, ToolchainNotFoundError):
        print("[red]You need to install and activate the Emscripten SDK first.[/]")
        print('[red]Also, make sure it is in your PATH by sourcing "emsdk_env.sh"[/]')


@app.command(
    context_settings={
        "help_option_names": ["-h", "--help"],
        "ignore_unknown_options": True,
    }
)
def run(
    args: Optional[List[str]] = typer.Argument(
        None,
        metavar="SRC_DIR SECP256K1_SRC_DIR [CONFIGURE_ARGS]...",
        help="Glue script directory, secp256k1 source directory, then flags passed to configure",
    ),
):
    """
    Configure the nested secp256k1 build and write the top-level Makefile.
    """
    args = list(args or [])
    try:
        if len(args) < 2:
            raise UsageError(USAGE)
        source_dir, library_source_dir, *passthrough = args
        paths = initialize_paths(source_dir, library_source_dir)
        Orchestrator(paths, passthrough).run()
    except OrchestratorError as e:
        _report(e)
        raise typer.Exit(code=e.exit_code)
    except KeyboardInterrupt:
        print("\n[red]Configure interrupted.[/]")
        raise typer.Exit(code=130)

    print("[green]Done. Run `make` to build and install the Javascript module.[/]")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
