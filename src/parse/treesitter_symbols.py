"""Tree-sitter based declaration extraction for Go sources."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from tree_sitter import Language, Node, Parser
from tree_sitter_go import language as get_go_language

from index.models import Symbol, SymbolKind

if TYPE_CHECKING:
    from pathlib import Path

_LOCAL = threading.local()

_GROUP_NODES = frozenset({"var_spec_list", "const_spec_list", "type_spec_list"})


def _get_parser() -> Parser:
    """Return this thread's Tree-sitter parser for Go.

    Parsers are stateful, so concurrent rebuilds each get their own.
    """
    parser: Parser | None = getattr(_LOCAL, "parser", None)
    if parser is None:
        parser = Parser(Language(get_go_language()))
        _LOCAL.parser = parser
    return parser


def _create_symbol(name_node: Node, path: str, kind: SymbolKind) -> Symbol | None:
    if not name_node.text:
        return None
    return Symbol(
        name=name_node.text.decode("utf8"),
        kind=kind,
        path=path,
        line=name_node.start_point[0] + 1,
        column=name_node.start_point[1] + 1,
    )


def _iter_specs(node: Node, spec_types: tuple[str, ...]) -> list[Node]:
    """Collect specs of a declaration, flattening ``( ... )`` groups."""
    specs: list[Node] = []
    for child in node.named_children:
        if child.type in spec_types:
            specs.append(child)
        elif child.type in _GROUP_NODES:
            specs.extend(c for c in child.named_children if c.type in spec_types)
    return specs


def _handle_function(node: Node, path: str, kind: SymbolKind) -> list[Symbol]:
    name_node = node.child_by_field_name("name")
    if name_node is None:
        return []
    symbol = _create_symbol(name_node, path, kind)
    return [symbol] if symbol else []


def _handle_type_declaration(node: Node, path: str) -> list[Symbol]:
    symbols: list[Symbol] = []
    for spec in _iter_specs(node, ("type_spec", "type_alias")):
        name_node = spec.child_by_field_name("name")
        if name_node is None:
            continue
        symbol = _create_symbol(name_node, path, "Struct")
        if symbol:
            symbols.append(symbol)
    return symbols


def _handle_value_declaration(
    node: Node, path: str, spec_type: str, kind: SymbolKind
) -> list[Symbol]:
    """Emit one symbol per declared name; ``var a, b int`` yields two."""
    symbols: list[Symbol] = []
    for spec in _iter_specs(node, (spec_type,)):
        for name_node in spec.children_by_field_name("name"):
            if name_node.type != "identifier":
                continue
            symbol = _create_symbol(name_node, path, kind)
            if symbol:
                symbols.append(symbol)
    return symbols


def _extract_declaration(node: Node, path: str) -> list[Symbol]:
    if node.type == "function_declaration":
        return _handle_function(node, path, "Function")
    if node.type == "method_declaration":
        return _handle_function(node, path, "Method")
    if node.type == "type_declaration":
        return _handle_type_declaration(node, path)
    if node.type == "var_declaration":
        return _handle_value_declaration(node, path, "var_spec", "Variable")
    if node.type == "const_declaration":
        return _handle_value_declaration(node, path, "const_spec", "Constant")
    return []


def extract_symbols_from_source(source_bytes: bytes, path: str) -> list[Symbol]:
    """Extract file-scope declarations from Go source bytes.

    Only direct children of the ``source_file`` node are inspected, so
    declarations nested inside function bodies are never indexed. A
    source that does not parse cleanly yields no symbols at all.
    """
    tree = _get_parser().parse(source_bytes)
    root_node = tree.root_node
    if root_node.has_error:
        return []

    symbols: list[Symbol] = []
    for child in root_node.named_children:
        symbols.extend(_extract_declaration(child, path))
    return symbols


def extract_symbols_treesitter(file_path: Path | str) -> list[Symbol]:
    """Extract symbols from a Go file using Tree-sitter.

    Args:
        file_path: Path to the Go file; recorded verbatim on each Symbol

    Returns:
        Symbols in declaration order, or an empty list when the file
        cannot be read or fails to parse.
    """
    try:
        with open(file_path, "rb") as handle:
            source_bytes = handle.read()
    except OSError:
        return []

    return extract_symbols_from_source(source_bytes, str(file_path))
