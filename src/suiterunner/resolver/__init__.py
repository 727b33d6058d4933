"""Mapping between class names and the files that declare them."""

from suiterunner.resolver.loader import SymbolResolver
from suiterunner.resolver.symbol_map import SymbolMap, build_symbol_map

__all__ = ["SymbolMap", "SymbolResolver", "build_symbol_map"]
