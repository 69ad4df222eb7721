"""Parsing utilities for the symbol indexer."""

from parse.treesitter_symbols import (
    extract_symbols_from_source,
    extract_symbols_treesitter,
)

__all__ = [
    "extract_symbols_from_source",
    "extract_symbols_treesitter",
]
