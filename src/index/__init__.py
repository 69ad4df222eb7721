"""Workspace symbol index.

``SymbolIndex`` lives in ``index.symbols``; it is not re-exported here
because the parser imports ``index.models`` while ``index.symbols``
imports the parser.
"""

from index.models import Symbol, SymbolKind

__all__ = ["Symbol", "SymbolKind"]
