"""Parses and maps .mbs script files as an extension to the M&B module system."""

import sys
from typing import Any, List, Tuple

from mbs_lang import (
    ModsysProjection,
    SymbolTable,
    __version__,
    parse_file,
)

__all__ = ["parse", "version"]


def version() -> str:
    return f"{__version__}-{sys.version}"


def parse(path: str, name: str, modules: List[str]) -> Tuple[str, List[Any]]:
    """Parse the script at ``path`` against the namespaces of ``modules``.

    Returns ``(name, statements)`` with every statement rendered as module
    system values. Raises `mbs_lang.MbsError` on any failure.
    """
    symbols = SymbolTable.from_modules(modules)
    script = parse_file(path, name, symbols)
    return ModsysProjection().project_script(script)
