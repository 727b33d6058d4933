"""Static map of the classes declared under a source root.

Files are parsed with :mod:`ast`, never imported, so building a map has no
side effects. Module names are derived from the file's position below the
root, with the root's package name in front: ``<root>/test/foo/a_test.py``
in package ``lib`` is module ``lib.test.foo.a_test``.

The package name is a top-level module name. If a module of that name is
already imported, Python uses it and none of the root's classes resolve.
"""

import ast
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from suiterunner.core.enumerator import enumerate_source_files

logger = logging.getLogger(__name__)


@dataclass
class SymbolMap:
    """Class names declared under a root, and the modules that hold them."""

    map_id: str
    root: Path
    package: str
    symbols: dict[str, Path] = field(default_factory=dict)
    modules: dict[str, Path] = field(default_factory=dict)
    _by_file: dict[Path, list[str]] = field(default_factory=dict, repr=False)

    def lookup(self, name: str) -> Optional[Path]:
        """Return the file declaring the fully qualified class name."""
        return self.symbols.get(name)

    def reverse_lookup(self, file_path: Path | str) -> list[str]:
        """Return the class names declared in a file, in declaration order."""
        return list(self._by_file.get(Path(file_path).absolute(), []))

    def module_location(self, module_name: str) -> Optional[Path]:
        """Return the file (or package directory) for a module name."""
        return self.modules.get(module_name)

    def module_name(self, file_path: Path | str) -> str:
        """Compute the dotted module name for a file below the root."""
        relative = Path(file_path).absolute().relative_to(self.root).with_suffix("")
        parts = list(relative.parts)
        if parts and parts[-1] == "__init__":
            parts.pop()
        return ".".join([self.package, *parts])

    def add_file(self, file_path: Path, class_names: list[str]) -> None:
        """Record a parsed file and the packages leading to it."""
        file_path = file_path.absolute()
        module = self.module_name(file_path)

        if file_path.name == "__init__.py":
            self.modules[module] = file_path.parent
        else:
            self.modules[module] = file_path

        # Every directory between the root and the file is importable as a package
        directory = file_path.parent
        while True:
            self.modules.setdefault(self.module_name(directory / "__init__.py"), directory)
            if directory == self.root:
                break
            directory = directory.parent

        names = self._by_file.setdefault(file_path, [])
        for class_name in class_names:
            qualified = f"{module}.{class_name}"
            if qualified not in self.symbols:
                self.symbols[qualified] = file_path
                names.append(qualified)

    def __len__(self) -> int:
        return len(self.symbols)


def declared_classes(file_path: Path) -> list[str]:
    """Return the names of the top-level classes declared in a Python file.

    Raises:
        OSError: If the file cannot be read
        SyntaxError: If the file is not valid Python
    """
    source = file_path.read_text(encoding="utf-8")
    tree = ast.parse(source, filename=str(file_path))
    return [node.name for node in tree.body if isinstance(node, ast.ClassDef)]


def build_symbol_map(
    root: Path | str,
    map_id: str,
    package: Optional[str] = None,
) -> SymbolMap:
    """Scan root and map every top-level class to its declaring file.

    Args:
        root: Directory to scan
        map_id: Identifier for the map (e.g. "lib-map")
        package: Top-level package name for the root (default: directory name)

    Returns:
        SymbolMap for the root
    """
    root = Path(root).absolute()
    symbol_map = SymbolMap(map_id=map_id, root=root, package=package or root.name)

    for file_path in enumerate_source_files(root):
        try:
            class_names = declared_classes(file_path)
        except (OSError, UnicodeDecodeError, SyntaxError, ValueError) as e:
            logger.debug("Skipping %s while building %s: %s", file_path, map_id, e)
            continue
        symbol_map.add_file(file_path, class_names)

    logger.debug("Built %s with %d classes from %s", map_id, len(symbol_map), root)
    return symbol_map
