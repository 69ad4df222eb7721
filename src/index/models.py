"""Symbol model for the workspace index.

A Symbol is one file-scope declaration (function, method, type,
variable or constant) together with the source position of its name.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

SymbolKind = Literal["Function", "Method", "Struct", "Variable", "Constant"]


class Symbol(BaseModel):
    """A declaration extracted from a Go source file."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: SymbolKind
    path: str
    line: int
    column: int


__all__ = ["Symbol", "SymbolKind"]
