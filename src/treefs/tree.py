"""Handle owning a materialized tree and its teardown.

The Tree returned by a successful materialization owns its root directory. When
auto-cleanup is enabled the root is removed exactly once: on an explicit
``cleanup()``, when a ``with`` block exits, when the handle is garbage collected, or
at interpreter exit, whichever happens first.
"""

import logging
import os
import shutil
import stat
import types
import weakref
from pathlib import Path
from typing import Optional, Type

from treefs.types import PathType

logger = logging.getLogger(__name__)


class Tree:
    """A materialized tree of files and directories.

    Teardown never raises. If the root has already been removed, teardown does
    nothing; if deletion fails because of restrictive permissions, write permission
    is restored throughout the tree and deletion is retried once, after which any
    remaining failure is logged and ignored.

    Attributes:
        root (Path): The directory holding the tree. Alias of ``path``.

    Example:
        >>> from treefs.builder import TreeBuilder
        >>> with TreeBuilder().add_file("a/b.txt", "hi").create() as tree:  # doctest: +SKIP
        ...     (tree.path / "a" / "b.txt").read_text()
        'hi'
    """

    def __init__(self, root: PathType, auto_cleanup: bool = True) -> None:
        """Take ownership of an existing root directory.

        Args:
            root: The root directory of the materialized tree.
            auto_cleanup: Whether teardown deletes the root. Defaults to True.
        """
        self._root = Path(root)
        self._auto_cleanup = auto_cleanup
        self._finalizer = weakref.finalize(self, remove_tree, self._root)
        if not auto_cleanup:
            self._finalizer.detach()

    @property
    def path(self) -> Path:
        """The root directory of the tree, valid for the handle's entire lifetime."""
        return self._root

    @property
    def root(self) -> Path:
        return self._root

    @property
    def auto_cleanup(self) -> bool:
        return self._auto_cleanup

    @property
    def is_cleaned_up(self) -> bool:
        """True once teardown has removed (or attempted to remove) the root."""
        return self._auto_cleanup and not self._finalizer.alive

    def join(self, *parts: PathType) -> Path:
        """Resolve a path relative to the tree root.

        Example:
            >>> Tree("/tmp/example", auto_cleanup=False).join("a", "b.txt").as_posix()
            '/tmp/example/a/b.txt'
        """
        return self._root.joinpath(*parts)

    def disarm(self) -> None:
        """Disable auto-cleanup so the tree outlives this handle."""
        self._auto_cleanup = False
        self._finalizer.detach()

    def cleanup(self) -> None:
        """Tear down the tree now.

        Removes the root and everything below it when auto-cleanup is enabled; does
        nothing when it is disabled or when teardown already ran.
        """
        self._finalizer()

    def __enter__(self) -> "Tree":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        self.cleanup()

    def __repr__(self) -> str:
        return f"Tree(root={str(self._root)!r}, auto_cleanup={self._auto_cleanup})"


def remove_tree(root: Path) -> bool:
    """Recursively delete ``root``, best effort.

    Args:
        root: Directory to delete.

    Returns:
        True if the root no longer exists afterwards, False otherwise.
    """
    if not os.path.lexists(root):
        logger.debug("Tree root %s already removed", root)
        return True

    try:
        shutil.rmtree(root)
        logger.debug("Removed tree root %s", root)
        return True
    except FileNotFoundError:
        return True
    except OSError as e:
        logger.debug("Removing %s failed (%s); restoring write permission and retrying", root, e)

    _make_writable(root)
    shutil.rmtree(root, ignore_errors=True)
    if os.path.lexists(root):
        logger.warning("Could not completely remove tree root %s", root)
        return False
    return True


def _make_writable(root: Path) -> None:
    """Add owner read/write (and search, for directories) permission throughout ``root``."""
    dir_bits = stat.S_IRUSR | stat.S_IWUSR | stat.S_IXUSR
    # Directories are fixed before os.walk descends into them.
    _add_mode_bits(os.fspath(root), dir_bits)
    for dirpath, dirnames, filenames in os.walk(root):
        for dirname in dirnames:
            _add_mode_bits(os.path.join(dirpath, dirname), dir_bits)
        for filename in filenames:
            _add_mode_bits(os.path.join(dirpath, filename), stat.S_IRUSR | stat.S_IWUSR)


def _add_mode_bits(path: str, bits: int) -> None:
    try:
        mode = os.lstat(path).st_mode
        if stat.S_ISLNK(mode):
            return
        os.chmod(path, stat.S_IMODE(mode) | bits)
    except OSError as e:
        logger.debug("Could not restore permissions on %s: %s", path, e)
