import importlib
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Optional

from .exceptions import LoadError

logger = logging.getLogger(__name__)

# Value produced for names absent from the table. Scripts may reference
# constants that are defined later, so a missing name is never an error.
UNRESOLVED = NotImplemented


class SymbolTable(Mapping):
    """Read-only name -> value bindings shared by every statement of a script."""

    def __init__(self, bindings: Optional[Mapping] = None):
        self._bindings = MappingProxyType(dict(bindings or {}))

    @classmethod
    def from_modules(cls, module_names: Iterable[str]) -> "SymbolTable":
        """Merge the namespaces of the named modules, later ones winning."""
        merged: Dict[str, Any] = {}
        for module_name in module_names:
            try:
                module = importlib.import_module(module_name)
            except ImportError as e:
                logger.warning("Could not import symbol module %s: %s", module_name, e)
                raise LoadError(f"Failed to import module '{module_name}'.") from e
            namespace = vars(module)
            logger.debug("Merging %d names from %s", len(namespace), module_name)
            merged.update(namespace)
        return cls(merged)

    def resolve(self, name: str) -> Any:
        return self._bindings.get(name, UNRESOLVED)

    def __getitem__(self, name: str) -> Any:
        return self._bindings[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __repr__(self) -> str:
        return f"SymbolTable({len(self)} names)"
