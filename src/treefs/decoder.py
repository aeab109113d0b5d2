"""Decoding of YAML tree documents into entry models.

A tree document looks like this::

    override_file: false      # optional, default false
    drop: true                # optional, default true (auto-cleanup)
    root: /tmp/my-tree        # optional, default: fresh temporary directory
    entries:                  # "files" is accepted as an alias
      - path: config/app.conf
        content: "host = localhost"
      - path: logs/app.log    # no content: empty file
      - path: data/raw
        type: directory
      - path: fixtures/input.bin
        source: /srv/fixtures/input.bin
      - path: secrets/api.key
        content: key
        settings:
          readonly: true

The document is validated at this boundary and converted straight into the
fixed-shape EntryModel and TreeOptions; nothing loosely typed leaves this module.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from treefs.entry import Entry, EntryModel, Settings, TreeOptions
from treefs.exceptions import DecodeError, DocumentReadError
from treefs.types import EntryKind, PathType

logger = logging.getLogger(__name__)

ENTRY_LIST_KEYS = ("entries", "files")


@dataclass
class TreeDocument:
    """A decoded tree document.

    Attributes:
        entries: The entries in document order.
        options: The options declared by the document, with defaults filled in.
    """

    entries: EntryModel
    options: TreeOptions = field(default_factory=TreeOptions)


def decode_yaml_str(content: str, source: Optional[PathType] = None) -> TreeDocument:
    """Decode a YAML tree document.

    Args:
        content: The document text.
        source: Path of the document, used only in error messages.

    Returns:
        The decoded document.

    Raises:
        DecodeError: If the text is not well-formed YAML, a required field is
            missing, or a field has the wrong type.

    Example:
        >>> document = decode_yaml_str("entries: [{path: a/b.txt, content: hi}, {path: a/c.txt}]")
        >>> [(entry.path, entry.kind.value) for entry in document.entries]
        [('a/b.txt', 'text_file'), ('a/c.txt', 'empty_file')]
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise DecodeError(f"invalid YAML: {e}", source=source, cause=e) from e

    if not isinstance(data, Mapping):
        raise DecodeError("document must be a mapping with an 'entries' list", source=source)

    options = TreeOptions(
        root=_optional_path(data, "root", source),
        overwrite_existing=_optional_bool(data, "override_file", False, "document", source),
        auto_cleanup=_optional_bool(data, "drop", True, "document", source),
    )

    key = next((k for k in ENTRY_LIST_KEYS if k in data), None)
    if key is None:
        raise DecodeError("missing required field 'entries'", source=source)
    items = data[key]
    if items is None:
        items = []
    if not isinstance(items, list):
        raise DecodeError(f"'{key}' must be a list", source=source)

    model = EntryModel()
    for index, item in enumerate(items, start=1):
        model.append(_decode_entry(item, f"entry #{index}", source))

    logger.debug("Decoded %d entries%s", len(model), f" from {source}" if source is not None else "")
    return TreeDocument(entries=model, options=options)


def decode_yaml_file(path: PathType) -> TreeDocument:
    """Read and decode a YAML tree document from ``path``.

    Raises:
        DocumentReadError: If the file cannot be read.
        DecodeError: If the file contents are not a valid tree document.
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"document is not valid UTF-8: {e}", source=path, cause=e) from e
    except OSError as e:
        raise DocumentReadError(path, e) from e
    return decode_yaml_str(content, source=path)


def _decode_entry(item: Any, where: str, source: Optional[PathType]) -> Entry:
    if not isinstance(item, Mapping):
        raise DecodeError(f"{where}: must be a mapping", source=source)

    path = item.get("path")
    if path is None:
        raise DecodeError(f"{where}: missing required field 'path'", source=source)
    if not isinstance(path, str) or not path:
        raise DecodeError(f"{where}: 'path' must be a non-empty string", source=source)
    where = f"{where} ({path})"

    settings = _decode_settings(item.get("settings"), where, source)
    content = item.get("content")
    if content is not None and not isinstance(content, (str, bytes)):
        raise DecodeError(f"{where}: 'content' must be a string; quote scalar values", source=source)
    entry_source = item.get("source")
    if entry_source is not None and not isinstance(entry_source, str):
        raise DecodeError(f"{where}: 'source' must be a string", source=source)

    kind = _decode_kind(item, content, entry_source, where, source)
    if kind is EntryKind.DIRECTORY:
        if content is not None or entry_source is not None:
            raise DecodeError(f"{where}: a directory cannot have 'content' or 'source'", source=source)
        return Entry.directory(path, settings)
    if kind is EntryKind.COPIED_FILE:
        if entry_source is None:
            raise DecodeError(f"{where}: 'copied_file' requires 'source'", source=source)
        if content is not None:
            raise DecodeError(f"{where}: 'content' and 'source' are mutually exclusive", source=source)
        return Entry.copied_file(path, entry_source, settings)
    if entry_source is not None:
        raise DecodeError(f"{where}: 'source' is only valid for copied files", source=source)
    if kind is EntryKind.TEXT_FILE:
        if content is None:
            raise DecodeError(f"{where}: 'text_file' requires 'content'", source=source)
        return Entry.text_file(path, content, settings)
    if content is not None:
        raise DecodeError(f"{where}: an empty file cannot have 'content'", source=source)
    return Entry.empty_file(path, settings)


def _decode_kind(
    item: Mapping[str, Any], content: Any, entry_source: Any, where: str, source: Optional[PathType]
) -> EntryKind:
    declared = item.get("type")
    if declared is None:
        if entry_source is not None:
            return EntryKind.COPIED_FILE
        return EntryKind.EMPTY_FILE if content is None else EntryKind.TEXT_FILE
    try:
        return EntryKind(declared)
    except ValueError:
        choices = ", ".join(kind.value for kind in EntryKind)
        raise DecodeError(
            f"{where}: unknown type {declared!r} (expected one of: {choices})", source=source
        ) from None


def _decode_settings(value: Any, where: str, source: Optional[PathType]) -> Settings:
    if value is None:
        return Settings()
    if not isinstance(value, Mapping):
        raise DecodeError(f"{where}: 'settings' must be a mapping", source=source)
    return Settings(readonly=_optional_bool(value, "readonly", False, where, source))


def _optional_bool(
    data: Mapping[str, Any], key: str, default: bool, where: str, source: Optional[PathType]
) -> bool:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise DecodeError(f"{where}: '{key}' must be a boolean, got {value!r}", source=source)
    return value


def _optional_path(data: Mapping[str, Any], key: str, source: Optional[PathType]) -> Optional[Path]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str) or not value:
        raise DecodeError(f"document: '{key}' must be a non-empty string", source=source)
    return Path(value)
