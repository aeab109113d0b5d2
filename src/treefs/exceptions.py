from pathlib import Path
from typing import Optional


class TreeFsError(Exception):
    """
    Base class for every error raised by treefs.

    Catching this exception catches both decoding failures ("bad document") and
    materialization failures ("bad disk").
    """

    pass


class DecodeError(TreeFsError):
    """
    Exception raised when a tree document cannot be turned into an entry model.

    This covers malformed YAML, a missing required field such as ``path``, and fields of
    the wrong shape (for example a non-boolean ``readonly``). Decoding never touches the
    disk, so a DecodeError guarantees that nothing was created.

    Attributes:
        source (Optional[Path]): Path of the document file, when decoding from a file.
        cause (Optional[BaseException]): The underlying parser error, if any.

    Example:
        >>> error = DecodeError("entry #1: missing required field 'path'")
        >>> str(error)
        "entry #1: missing required field 'path'"
        >>> str(DecodeError("bad", source="tree.yaml"))
        'tree.yaml: bad'
    """

    def __init__(
        self, message: str, source: Optional[object] = None, cause: Optional[BaseException] = None
    ) -> None:
        self.source = Path(str(source)) if source is not None else None
        self.cause = cause
        super().__init__(f"{self.source}: {message}" if self.source is not None else message)


class DocumentReadError(TreeFsError):
    """
    Exception raised when a tree document file cannot be read from disk.

    Kept distinct from DecodeError so callers can tell an unreadable file apart from
    a readable file with invalid contents.

    Attributes:
        source (Path): Path of the document that could not be read.
        cause (OSError): The underlying OS error.
    """

    def __init__(self, source: object, cause: OSError) -> None:
        self.source = Path(str(source))
        self.cause = cause
        super().__init__(f"Cannot read tree document {self.source}: {cause}")


class MaterializeError(TreeFsError):
    """
    Base exception for failures while writing an entry model to disk.

    Materialization stops at the first failing entry and does not roll back; entries
    written before the failure stay on disk. The ``root`` attribute tells the caller
    where that partial tree lives so it can be inspected or discarded.

    Attributes:
        path (str): The entry path (relative to the root) that failed.
        root (Optional[Path]): The resolved root, or None if it was never resolved.
        cause (Optional[BaseException]): The underlying error, if any.

    Example:
        >>> error = MaterializeError("a/b.txt", "write failed", root="/tmp/treefs-x")
        >>> str(error)
        'a/b.txt: write failed (root: /tmp/treefs-x)'
        >>> error.path
        'a/b.txt'
    """

    def __init__(
        self,
        path: str,
        message: str,
        root: Optional[object] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        self.path = path
        self.root = Path(str(root)) if root is not None else None
        self.cause = cause
        text = f"{path}: {message}"
        if self.root is not None:
            text += f" (root: {self.root})"
        super().__init__(text)


class PathSafetyError(MaterializeError):
    """
    Exception raised when an entry path is absolute or would resolve outside the root.

    Raised before any disk mutation for the offending entry.

    Example:
        >>> error = PathSafetyError("../etc/passwd", "path escapes the tree root")
        >>> str(error)
        '../etc/passwd: path escapes the tree root'
    """

    pass


class ConflictError(MaterializeError):
    """
    Exception raised when a target file already exists and overwriting is disabled.

    This applies to files present before materialization began as well as to a
    second entry for the same path within one entry model.
    """

    def __init__(self, path: str, root: Optional[object] = None) -> None:
        super().__init__(path, "target already exists and overwrite is disabled", root=root)


class TreeIOError(MaterializeError):
    """
    Exception raised when an underlying create, write or copy call fails.

    The originating OSError is available as ``cause`` and as ``__cause__``.
    """

    pass


class SettingsApplicationError(MaterializeError):
    """
    Exception raised when applying entry settings (such as read-only) fails after a write.
    """

    pass
