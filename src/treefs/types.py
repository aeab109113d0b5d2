from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class EntryKind(str, Enum):
    """Enumeration of the kinds of entries a tree can describe.

    The values double as the ``type`` names accepted in YAML documents.

    Attributes:
        DIRECTORY: A directory, created together with all of its ancestors.
        EMPTY_FILE: A zero-length file.
        TEXT_FILE: A file with inline content.
        COPIED_FILE: A file whose content is copied from a file on the host.
    """

    DIRECTORY = "directory"
    EMPTY_FILE = "empty_file"
    TEXT_FILE = "text_file"
    COPIED_FILE = "copied_file"
