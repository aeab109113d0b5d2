"""In-memory description of a tree of files and directories.

The classes here are plain containers. They perform no validation and no I/O;
path safety is checked by the materializer and document shape by the decoder.
"""

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Iterator, List, Optional, Union

from treefs.types import EntryKind, PathType

Content = Union[str, bytes]


@dataclass(frozen=True)
class Settings:
    """Attributes applied to an entry after it has been written.

    Attributes:
        readonly: Remove write permission from the file once its content is written.

    Example:
        >>> Settings().readonly
        False
        >>> Settings().with_readonly(True).readonly
        True
    """

    readonly: bool = False

    def with_readonly(self, value: bool = True) -> "Settings":
        """Return a copy of these settings with ``readonly`` set to ``value``."""
        return replace(self, readonly=value)


@dataclass(frozen=True)
class Entry:
    """One file or directory to create, relative to the tree root.

    Attributes:
        path: Slash-separated path relative to the root, as written by the caller.
        kind: What to create at ``path``.
        content: Bytes to write for TEXT_FILE entries.
        source: Host file to copy for COPIED_FILE entries.
        settings: Attributes to apply after the write.

    Example:
        >>> entry = Entry.text_file("a/b.txt", "hi")
        >>> entry.kind.value, entry.content
        ('text_file', b'hi')
    """

    path: str
    kind: EntryKind
    content: Optional[bytes] = None
    source: Optional[Path] = None
    settings: Settings = field(default_factory=Settings)

    @classmethod
    def directory(cls, path: PathType, settings: Optional[Settings] = None) -> "Entry":
        return cls(_as_str(path), EntryKind.DIRECTORY, settings=settings or Settings())

    @classmethod
    def empty_file(cls, path: PathType, settings: Optional[Settings] = None) -> "Entry":
        return cls(_as_str(path), EntryKind.EMPTY_FILE, settings=settings or Settings())

    @classmethod
    def text_file(cls, path: PathType, content: Content, settings: Optional[Settings] = None) -> "Entry":
        if isinstance(content, str):
            data = content.encode("utf-8")
        elif isinstance(content, (bytes, bytearray)):
            data = bytes(content)
        else:
            raise TypeError(f"file content must be str or bytes, not {type(content).__name__}")
        return cls(_as_str(path), EntryKind.TEXT_FILE, content=data, settings=settings or Settings())

    @classmethod
    def copied_file(cls, path: PathType, source: PathType, settings: Optional[Settings] = None) -> "Entry":
        return cls(_as_str(path), EntryKind.COPIED_FILE, source=Path(source), settings=settings or Settings())

    @property
    def is_file(self) -> bool:
        """True for every kind that produces a regular file."""
        return self.kind is not EntryKind.DIRECTORY


class EntryModel:
    """Ordered, append-only collection of entries describing one tree.

    Order only matters when several entries share a path: the materializer processes
    entries left to right, so with overwriting enabled the last one wins.

    Example:
        >>> model = EntryModel()
        >>> model.append(Entry.directory("x"))
        >>> model.append(Entry.text_file("x/y.txt", "z"))
        >>> [entry.path for entry in model]
        ['x', 'x/y.txt']
    """

    def __init__(self, entries: Optional[List[Entry]] = None) -> None:
        self._entries: List[Entry] = list(entries) if entries else []

    def append(self, entry: Entry) -> None:
        self._entries.append(entry)

    def extend(self, entries: "Union[EntryModel, List[Entry]]") -> None:
        self._entries.extend(entries)

    def copy(self) -> "EntryModel":
        return EntryModel(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> Entry:
        return self._entries[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EntryModel):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"EntryModel({self._entries!r})"


@dataclass
class TreeOptions:
    """Global options governing one materialization.

    Attributes:
        root: Explicit root directory. When None, a fresh unique directory is
            allocated under the system temporary directory.
        overwrite_existing: Replace files that already exist instead of failing with
            a ConflictError.
        auto_cleanup: Delete the root when the resulting Tree is torn down.
    """

    root: Optional[Path] = None
    overwrite_existing: bool = False
    auto_cleanup: bool = True

    def __post_init__(self) -> None:
        if self.root is not None:
            self.root = Path(self.root)


def _as_str(path: PathType) -> str:
    return str(os.fspath(path)).replace(os.sep, "/")
