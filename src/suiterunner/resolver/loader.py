"""Import hook that loads classes from registered symbol maps."""

import importlib
import importlib.abc
import importlib.machinery
import importlib.util
import logging
import sys
from pathlib import Path
from typing import Optional

from suiterunner.exceptions import SymbolResolutionError
from suiterunner.resolver.symbol_map import SymbolMap

logger = logging.getLogger(__name__)


class SymbolResolver(importlib.abc.MetaPathFinder):
    """Resolves class names through one or more symbol maps.

    Once registered, the resolver sits at the front of ``sys.meta_path`` and
    answers for every module its maps know about, so test modules (and the
    library code they import) load by name without touching ``sys.path``.
    Directories without an ``__init__.py`` load as namespace packages.
    """

    def __init__(self) -> None:
        self._maps: list[SymbolMap] = []
        self._loaded: set[str] = set()

    @property
    def maps(self) -> list[SymbolMap]:
        """Attached symbol maps, in the order they were added."""
        return list(self._maps)

    @property
    def registered(self) -> bool:
        return self in sys.meta_path

    def add_map(self, symbol_map: SymbolMap) -> None:
        """Attach a symbol map. Earlier maps win when module names clash."""
        self._maps.append(symbol_map)

    def register(self) -> bool:
        """Install the resolver as an import hook.

        Returns:
            True if the resolver is installed, False if there is nothing to
            resolve (no maps attached)
        """
        if not self._maps:
            return False

        for symbol_map in self._maps:
            if symbol_map.package in sys.modules and symbol_map.package not in self._loaded:
                logger.warning(
                    "Module %r is already imported; classes in %s will not resolve through %s",
                    symbol_map.package,
                    symbol_map.root,
                    symbol_map.map_id,
                )

        if not self.registered:
            sys.meta_path.insert(0, self)
            logger.debug("Registered resolver with maps %s", [m.map_id for m in self._maps])
        return True

    def unregister(self) -> None:
        """Remove the import hook and forget the modules loaded through it."""
        if self.registered:
            sys.meta_path.remove(self)
        for name in self._loaded:
            sys.modules.pop(name, None)
        self._loaded.clear()

    def find_spec(self, fullname, path=None, target=None):
        location = self._locate(fullname)
        if location is None:
            return None

        self._loaded.add(fullname)
        if location.is_dir():
            init_file = location / "__init__.py"
            if init_file.is_file():
                return importlib.util.spec_from_file_location(
                    fullname, init_file, submodule_search_locations=[str(location)]
                )
            spec = importlib.machinery.ModuleSpec(fullname, None, is_package=True)
            spec.submodule_search_locations = [str(location)]
            return spec
        return importlib.util.spec_from_file_location(fullname, location)

    def _locate(self, module_name: str) -> Optional[Path]:
        for symbol_map in self._maps:
            location = symbol_map.module_location(module_name)
            if location is not None:
                return location
        return None

    def reverse_lookup(self, file_path: Path | str) -> list[str]:
        """Return the class names declared in a file across all maps."""
        names: list[str] = []
        for symbol_map in self._maps:
            for name in symbol_map.reverse_lookup(file_path):
                if name not in names:
                    names.append(name)
        return names

    def resolve(self, name: str) -> object:
        """Import the module declaring name and return the named object.

        Raises:
            SymbolResolutionError: If the name is unknown, its module fails to
                import, or the module does not define it
        """
        if not any(symbol_map.lookup(name) for symbol_map in self._maps):
            raise SymbolResolutionError(f"Unknown symbol: {name}")

        module_name, _, attribute = name.rpartition(".")
        try:
            module = importlib.import_module(module_name)
        except (Exception, SystemExit) as e:
            raise SymbolResolutionError(f"Could not import {module_name}: {e!r}") from e

        try:
            return getattr(module, attribute)
        except AttributeError as e:
            raise SymbolResolutionError(f"{module_name} does not define {attribute}") from e
