"""Declarative file trees for tests and scaffolding.

This package creates trees of files and directories, described either with the
fluent TreeBuilder or with a YAML document, under a temporary or chosen root, and
removes them again when the returned Tree is torn down.
"""

from importlib.metadata import PackageNotFoundError, version

from treefs.api import from_yaml_file, from_yaml_str
from treefs.builder import TreeBuilder
from treefs.decoder import TreeDocument, decode_yaml_file, decode_yaml_str
from treefs.entry import Entry, EntryModel, Settings, TreeOptions
from treefs.exceptions import (
    ConflictError,
    DecodeError,
    DocumentReadError,
    MaterializeError,
    PathSafetyError,
    SettingsApplicationError,
    TreeFsError,
    TreeIOError,
)
from treefs.materializer import Materializer, materialize
from treefs.tree import Tree
from treefs.types import EntryKind

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("treefs")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "ConflictError",
    "DecodeError",
    "DocumentReadError",
    "Entry",
    "EntryKind",
    "EntryModel",
    "Materializer",
    "MaterializeError",
    "PathSafetyError",
    "Settings",
    "SettingsApplicationError",
    "Tree",
    "TreeBuilder",
    "TreeDocument",
    "TreeFsError",
    "TreeIOError",
    "TreeOptions",
    "decode_yaml_file",
    "decode_yaml_str",
    "from_yaml_file",
    "from_yaml_str",
    "materialize",
]
