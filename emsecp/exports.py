"""
Exported function list for the final emcc link.

emcc drops or renames any C function not named in EXPORTED_FUNCTIONS, so
every symbol the glue script calls has to be listed here. C symbols carry a
leading underscore at the link level.
"""

from typing import Iterable, Tuple

from .config import EXPORTS


def normalize_symbols(symbols: Iterable[str]) -> Tuple[str, ...]:
    """Strip each name and drop empty or whitespace-only entries, keeping order."""
    return tuple(name.strip() for name in symbols if name and name.strip())


def export_list_literal(symbols: Iterable[str] = EXPORTS) -> str:
    """
    Build the EXPORTED_FUNCTIONS value, e.g. ["_secp256k1_context_create"].

    Duplicates are kept as given.
    """
    entries = ",".join(f'"_{name}"' for name in normalize_symbols(symbols))
    return f"[{entries}]"
