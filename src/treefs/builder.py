"""Fluent construction of file trees.

This module provides the TreeBuilder class, which accumulates entries and options in
memory and materializes them only when ``create()`` is called.
"""

from pathlib import Path
from typing import Optional

from treefs.entry import Content, Entry, EntryModel, Settings, TreeOptions
from treefs.materializer import Materializer
from treefs.tree import Tree
from treefs.types import PathType


class TreeBuilder:
    """Chainable builder for a tree of files and directories.

    Every method except ``create()`` returns the builder itself and performs no I/O.
    By default the tree is created in a fresh temporary directory, existing files are
    not overwritten, and the tree is deleted when its handle is torn down.

    Calling ``create()`` more than once materializes the same entries again against a
    freshly resolved root and returns an independent Tree.

    Example:
        >>> tree = (
        ...     TreeBuilder()
        ...     .add_file("config/app.conf", "host = localhost")
        ...     .add_empty_file("logs/app.log")
        ...     .add_directory("data/raw")
        ...     .add_file_with_settings("secrets/api.key", "key", Settings(readonly=True))
        ...     .create()
        ... )  # doctest: +SKIP
        >>> (tree.path / "config" / "app.conf").read_text()  # doctest: +SKIP
        'host = localhost'
    """

    def __init__(self) -> None:
        self._entries = EntryModel()
        self._root: Optional[Path] = None
        self._overwrite = False
        self._auto_cleanup = True

    @property
    def entries(self) -> EntryModel:
        """A copy of the entries accumulated so far."""
        return self._entries.copy()

    @property
    def options(self) -> TreeOptions:
        """The options ``create()`` would use."""
        return TreeOptions(root=self._root, overwrite_existing=self._overwrite, auto_cleanup=self._auto_cleanup)

    def root(self, path: PathType) -> "TreeBuilder":
        """Create the tree under ``path`` instead of a fresh temporary directory."""
        self._root = Path(path)
        return self

    def root_folder(self, path: PathType) -> "TreeBuilder":
        return self.root(path)

    def overwrite(self, yes: bool = True) -> "TreeBuilder":
        """Set whether files that already exist may be replaced."""
        self._overwrite = yes
        return self

    def override_file(self, yes: bool = True) -> "TreeBuilder":
        return self.overwrite(yes)

    def auto_cleanup(self, yes: bool = True) -> "TreeBuilder":
        """Set whether the tree is deleted when its handle is torn down."""
        self._auto_cleanup = yes
        return self

    def drop(self, yes: bool = True) -> "TreeBuilder":
        return self.auto_cleanup(yes)

    def add_entry(self, entry: Entry) -> "TreeBuilder":
        self._entries.append(entry)
        return self

    def add_directory(self, path: PathType) -> "TreeBuilder":
        return self.add_entry(Entry.directory(path))

    def add_directory_with_settings(self, path: PathType, settings: Settings) -> "TreeBuilder":
        """Add a directory. Settings are recorded but have no effect on directories."""
        return self.add_entry(Entry.directory(path, settings))

    def add_empty_file(self, path: PathType) -> "TreeBuilder":
        return self.add_entry(Entry.empty_file(path))

    def add_empty(self, path: PathType) -> "TreeBuilder":
        return self.add_empty_file(path)

    def add_empty_file_with_settings(self, path: PathType, settings: Settings) -> "TreeBuilder":
        return self.add_entry(Entry.empty_file(path, settings))

    def add_file(self, path: PathType, content: Content) -> "TreeBuilder":
        """Add a file with ``content``; strings are written as UTF-8."""
        return self.add_entry(Entry.text_file(path, content))

    def add(self, path: PathType, content: Content) -> "TreeBuilder":
        return self.add_file(path, content)

    def add_file_with_settings(self, path: PathType, content: Content, settings: Settings) -> "TreeBuilder":
        return self.add_entry(Entry.text_file(path, content, settings))

    def add_readonly_file(self, path: PathType, content: Content) -> "TreeBuilder":
        return self.add_file_with_settings(path, content, Settings(readonly=True))

    def add_readonly_empty_file(self, path: PathType) -> "TreeBuilder":
        return self.add_empty_file_with_settings(path, Settings(readonly=True))

    def add_copied_file(
        self, path: PathType, source: PathType, settings: Optional[Settings] = None
    ) -> "TreeBuilder":
        """Add a file whose content is copied from ``source`` on the host at creation time."""
        return self.add_entry(Entry.copied_file(path, source, settings))

    def create(self) -> Tree:
        """Materialize the accumulated entries.

        Returns:
            A Tree owning the resolved root.

        Raises:
            MaterializeError: If any entry cannot be created. See Materializer.materialize.
        """
        return Materializer(self.options).materialize(self._entries.copy())
