"""Convenience functions that decode a YAML document and materialize it in one call."""

from typing import Optional

from treefs.decoder import TreeDocument, decode_yaml_file, decode_yaml_str
from treefs.entry import TreeOptions
from treefs.materializer import Materializer
from treefs.tree import Tree
from treefs.types import PathType


def from_yaml_str(content: str, options: Optional[TreeOptions] = None) -> Tree:
    """Create a tree from a YAML document string.

    Args:
        content: The YAML document.
        options: Options to use instead of those declared in the document. When
            None, the document's ``root``, ``override_file`` and ``drop`` apply.

    Returns:
        A Tree owning the materialized root.

    Raises:
        DecodeError: If the document is invalid. Nothing is written in that case.
        MaterializeError: If writing the tree fails.

    Example:
        >>> tree = from_yaml_str("entries: [{path: foo.txt, content: foo}]")  # doctest: +SKIP
        >>> (tree.path / "foo.txt").read_text()  # doctest: +SKIP
        'foo'
    """
    return _create(decode_yaml_str(content), options)


def from_yaml_file(path: PathType, options: Optional[TreeOptions] = None) -> Tree:
    """Create a tree from a YAML document file.

    Raises:
        DocumentReadError: If the file cannot be read.
        DecodeError: If the document is invalid.
        MaterializeError: If writing the tree fails.
    """
    return _create(decode_yaml_file(path), options)


def _create(document: TreeDocument, options: Optional[TreeOptions]) -> Tree:
    return Materializer(options if options is not None else document.options).materialize(document.entries)

