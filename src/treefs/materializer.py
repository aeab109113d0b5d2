"""Writing an entry model to disk.

This module provides the Materializer class, which turns an EntryModel into files and
directories under a resolved root and hands ownership of that root to a Tree.

Materialization runs in three phases:

1. Every entry path is normalised and checked against the root boundary. Nothing
   touches the disk until all paths have passed.
2. The root is resolved (an explicit root is created if missing, otherwise a fresh
   directory is allocated under the system temporary directory) and every directory
   implied by the entries is created, parents before children.
3. File entries are written left to right. A file that already exists is a conflict
   unless overwriting is enabled, in which case the later entry replaces it.
   Settings such as read-only are applied only after the content has been written.

The first failure aborts the run. Nothing is rolled back; the raised error reports
the root so the partial tree can be inspected or discarded.
"""

import logging
import os
import shutil
import stat
import tempfile
from pathlib import Path
from typing import List, Optional, Tuple

from treefs.directory_plan.directory_plan import DirectoryPlan
from treefs.entry import Entry, EntryModel, TreeOptions
from treefs.exceptions import (
    ConflictError,
    PathSafetyError,
    SettingsApplicationError,
    TreeIOError,
)
from treefs.paths import normalize_entry_path
from treefs.tree import Tree
from treefs.types import EntryKind

logger = logging.getLogger(__name__)

TEMP_DIR_PREFIX = "treefs-"

_WRITE_BITS = stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH


class Materializer:
    """Materialize entry models according to a fixed set of options.

    A Materializer holds no state between runs, so one instance may materialize any
    number of models; each run resolves its own root and returns an independent Tree.

    Attributes:
        options (TreeOptions): Root, overwrite policy and auto-cleanup flag.

    Example:
        >>> model = EntryModel([Entry.text_file("a/b.txt", "hi"), Entry.empty_file("a/c.txt")])
        >>> tree = Materializer(TreeOptions()).materialize(model)  # doctest: +SKIP
        >>> (tree.path / "a" / "b.txt").read_text()  # doctest: +SKIP
        'hi'
    """

    def __init__(self, options: Optional[TreeOptions] = None) -> None:
        self.options = options if options is not None else TreeOptions()

    def materialize(self, model: EntryModel) -> Tree:
        """Write ``model`` to disk and return a Tree owning the root.

        Args:
            model: The entries to create.

        Returns:
            A Tree owning the resolved root.

        Raises:
            PathSafetyError: If an entry path is absolute or escapes the root. Raised
                before any disk mutation, except when an existing symlink under an
                explicit root would lead a directory or file outside the root.
            ConflictError: If a file already exists and overwriting is disabled.
            TreeIOError: If creating the root, a directory or a file fails.
            SettingsApplicationError: If applying entry settings fails.
        """
        planned = self._normalize(model)
        root = self._resolve_root()
        plan = DirectoryPlan(((path, entry.kind is EntryKind.DIRECTORY) for entry, path in planned), root.name)

        resolved_root = root.resolve()
        for directory in plan.iter_directories():
            self._check_contained(root, resolved_root, root / directory, directory)
            try:
                (root / directory).mkdir(exist_ok=True)
            except (OSError, ValueError) as e:
                raise TreeIOError(directory, f"cannot create directory: {e}", root=root, cause=e) from e
            logger.debug("Ensured directory %s", directory)

        for entry, path in planned:
            if entry.is_file:
                self._write_file(root, resolved_root, entry, path)

        logger.debug(
            "Materialized %d entries (%d directories) under %s", len(planned), plan.get_directory_count(), root
        )
        return Tree(root, auto_cleanup=self.options.auto_cleanup)

    def _normalize(self, model: EntryModel) -> List[Tuple[Entry, str]]:
        planned = []
        for entry in model:
            path = normalize_entry_path(entry.path)
            if entry.is_file and not path:
                raise PathSafetyError(entry.path, "a file entry cannot replace the tree root")
            planned.append((entry, path))
        return planned

    def _resolve_root(self) -> Path:
        root = self.options.root
        if root is None:
            allocated = Path(tempfile.mkdtemp(prefix=TEMP_DIR_PREFIX))
            logger.debug("Allocated temporary tree root %s", allocated)
            return allocated

        try:
            root.mkdir(parents=True, exist_ok=True)
        except (OSError, ValueError) as e:
            raise TreeIOError("", f"cannot create tree root: {e}", root=root, cause=e) from e
        logger.debug("Using tree root %s", root)
        return root

    def _write_file(self, root: Path, resolved_root: Path, entry: Entry, path: str) -> None:
        target = root / path
        self._check_contained(root, resolved_root, target, path)
        if target.is_file():
            if not self.options.overwrite_existing:
                raise ConflictError(path, root=root)
            self._restore_write_permission(root, target, path)

        try:
            if entry.kind is EntryKind.COPIED_FILE and entry.source is not None:
                shutil.copyfile(entry.source, target)
            else:
                target.write_bytes(entry.content or b"")
        except (OSError, ValueError) as e:
            raise TreeIOError(path, f"cannot write file: {e}", root=root, cause=e) from e
        logger.debug("Wrote %s (%s)", path, entry.kind.value)

        if entry.settings.readonly:
            try:
                mode = stat.S_IMODE(target.stat().st_mode)
                os.chmod(target, mode & ~_WRITE_BITS)
            except OSError as e:
                raise SettingsApplicationError(path, f"cannot mark file read-only: {e}", root=root, cause=e) from e
            logger.debug("Marked %s read-only", path)

    @staticmethod
    def _check_contained(root: Path, resolved_root: Path, target: Path, path: str) -> None:
        # Symlinks already present under an explicit root must not lead outside it.
        try:
            resolved = target.resolve()
        except (OSError, RuntimeError) as e:
            raise TreeIOError(path, f"cannot resolve path: {e}", root=root, cause=e) from e
        if resolved != resolved_root and resolved_root not in resolved.parents:
            raise PathSafetyError(path, f"resolves outside the tree root through a symlink: {resolved}", root=root)

    @staticmethod
    def _restore_write_permission(root: Path, target: Path, path: str) -> None:
        # An existing read-only file must become writable before it is replaced.
        try:
            mode = stat.S_IMODE(target.stat().st_mode)
            if not mode & stat.S_IWUSR:
                os.chmod(target, mode | stat.S_IWUSR)
        except OSError as e:
            raise TreeIOError(path, f"cannot make existing file writable: {e}", root=root, cause=e) from e


def materialize(model: EntryModel, options: Optional[TreeOptions] = None) -> Tree:
    """Materialize ``model`` with ``options`` and return the owning Tree.

    Convenience wrapper around ``Materializer(options).materialize(model)``.
    """
    return Materializer(options).materialize(model)
