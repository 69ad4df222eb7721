"""Import specifier resolution."""

from resolve.imports import ALIAS_PREFIX, check_suffixes, resolve_import

__all__ = ["ALIAS_PREFIX", "check_suffixes", "resolve_import"]
