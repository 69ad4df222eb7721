"""Process-wide symbol snapshot and its background rebuilds."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from parse.treesitter_symbols import extract_symbols_treesitter
from scan.files import DEFAULT_SKIP_DIRS, find_source_files

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from index.models import Symbol

logger = logging.getLogger(__name__)


def collect_symbols(
    root: Path,
    *,
    skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS,
    respect_gitignore: bool = False,
) -> tuple[Symbol, ...]:
    """Walk ``root`` and extract every file-scope declaration.

    Order is file visit order, then declaration order within a file.
    """
    symbols: list[Symbol] = []
    for file_path in find_source_files(
        root,
        skip_dirs=skip_dirs,
        respect_gitignore=respect_gitignore,
    ):
        symbols.extend(extract_symbols_treesitter(file_path))
    return tuple(symbols)


class SymbolIndex:
    """Holds the last completed full scan of the active workspace.

    The snapshot is an immutable tuple swapped in a single assignment, so
    readers see either the previous or the new complete snapshot.

    Every rebuild takes a generation number when it starts. A rebuild
    that finishes after a newer-started one has already published is
    discarded, so the most recently started scan wins.
    """

    def __init__(
        self,
        *,
        skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS,
        respect_gitignore: bool = False,
    ) -> None:
        self._skip_dirs = tuple(skip_dirs)
        self._respect_gitignore = respect_gitignore
        self._lock = threading.Lock()
        self._snapshot: tuple[Symbol, ...] = ()
        self._started_generation = 0
        self._published_generation = 0

    @property
    def generation(self) -> int:
        """Generation number of the currently published snapshot."""
        return self._published_generation

    def list(self) -> tuple[Symbol, ...]:
        """Return the current snapshot without blocking."""
        return self._snapshot

    def rebuild(self, root: Path) -> bool:
        """Scan ``root`` and publish the result.

        Returns:
            True when the new snapshot was published, False when a newer
            rebuild had already published and this one was discarded.
        """
        with self._lock:
            self._started_generation += 1
            generation = self._started_generation

        logger.info("Indexing symbols in: %s", root)
        symbols = collect_symbols(
            root,
            skip_dirs=self._skip_dirs,
            respect_gitignore=self._respect_gitignore,
        )

        with self._lock:
            if generation < self._published_generation:
                logger.info(
                    "Discarding stale index of %s (generation %d < %d)",
                    root,
                    generation,
                    self._published_generation,
                )
                return False
            self._snapshot = symbols
            self._published_generation = generation

        logger.info("Indexed %d symbols", len(symbols))
        return True

    def _rebuild_in_background(self, root: Path) -> None:
        try:
            self.rebuild(root)
        except Exception:
            logger.exception("Symbol index rebuild of %s failed", root)

    def schedule(self, root: Path) -> threading.Thread:
        """Start a rebuild on a daemon thread and return without waiting."""
        worker = threading.Thread(
            target=self._rebuild_in_background,
            args=(root,),
            name="symbol-index-rebuild",
            daemon=True,
        )
        worker.start()
        return worker


__all__ = ["SymbolIndex", "collect_symbols"]
