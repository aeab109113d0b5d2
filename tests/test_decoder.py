"""Unit tests for YAML document decoding."""

from pathlib import Path

import pytest

from treefs.decoder import decode_yaml_file, decode_yaml_str
from treefs.entry import Settings
from treefs.exceptions import DecodeError, DocumentReadError
from treefs.types import EntryKind

FIXTURES = Path(__file__).parent / "fixtures"


def test_minimal_document():
    document = decode_yaml_str(
        """
        entries:
          - path: a/b.txt
            content: hi
          - path: a/c.txt
        """
    )
    entries = list(document.entries)
    assert len(entries) == 2
    assert entries[0].path == "a/b.txt"
    assert entries[0].kind is EntryKind.TEXT_FILE
    assert entries[0].content == b"hi"
    assert entries[1].path == "a/c.txt"
    assert entries[1].kind is EntryKind.EMPTY_FILE
    assert entries[1].settings == Settings()


def test_default_options():
    options = decode_yaml_str("entries: []").options
    assert options.root is None
    assert options.overwrite_existing is False
    assert options.auto_cleanup is True


def test_document_options():
    options = decode_yaml_str(
        """
        override_file: true
        drop: false
        root: /tmp/custom-root
        entries: []
        """
    ).options
    assert options.overwrite_existing is True
    assert options.auto_cleanup is False
    assert options.root == Path("/tmp/custom-root")


def test_files_alias_for_entries():
    document = decode_yaml_str("files: [{path: foo.txt, content: foo}]")
    assert [entry.path for entry in document.entries] == ["foo.txt"]


def test_empty_entry_list():
    assert len(decode_yaml_str("entries:").entries) == 0


def test_explicit_types():
    document = decode_yaml_str(
        """
        entries:
          - path: foo.txt
            type: text_file
            content: foo
          - path: empty.txt
            type: empty_file
          - path: nested/dir/structure
            type: directory
          - path: copy.bin
            type: copied_file
            source: /srv/source.bin
        """
    )
    assert [entry.kind for entry in document.entries] == [
        EntryKind.TEXT_FILE,
        EntryKind.EMPTY_FILE,
        EntryKind.DIRECTORY,
        EntryKind.COPIED_FILE,
    ]
    assert document.entries[3].source == Path("/srv/source.bin")


def test_source_implies_copied_file():
    entry = decode_yaml_str("entries: [{path: c.bin, source: /srv/c.bin}]").entries[0]
    assert entry.kind is EntryKind.COPIED_FILE


def test_empty_string_content_is_text_file():
    entry = decode_yaml_str("entries: [{path: e.txt, content: ''}]").entries[0]
    assert entry.kind is EntryKind.TEXT_FILE
    assert entry.content == b""


def test_readonly_settings():
    document = decode_yaml_str(
        """
        entries:
          - path: secrets/api.key
            content: key
            settings:
              readonly: true
          - path: open.txt
            settings: {}
        """
    )
    assert document.entries[0].settings.readonly is True
    assert document.entries[1].settings.readonly is False


def test_multiline_content_preserved():
    document = decode_yaml_str('entries:\n  - path: foo.json\n    content: |\n      { "foo": "bar" }\n')
    assert document.entries[0].content == b'{ "foo": "bar" }\n'


def test_duplicate_paths_preserved_in_order():
    document = decode_yaml_str("entries: [{path: a, content: '1'}, {path: a, content: '2'}]")
    assert [entry.content for entry in document.entries] == [b"1", b"2"]


@pytest.mark.parametrize(
    "content, message",
    [
        ("entries: [", "invalid YAML"),
        ("- path: a", "must be a mapping"),
        ("", "must be a mapping"),
        ("override_file: true", "missing required field 'entries'"),
        ("entries: {path: a}", "'entries' must be a list"),
        ("entries: [a.txt]", "entry #1: must be a mapping"),
        ("entries: [{content: x}]", "entry #1: missing required field 'path'"),
        ("entries: [{path: 12}]", "'path' must be a non-empty string"),
        ("entries: [{path: ''}]", "'path' must be a non-empty string"),
        ("entries: [{path: a, content: 12}]", "'content' must be a string"),
        ("entries: [{path: a, settings: {readonly: 'yes please'}}]", "'readonly' must be a boolean"),
        ("entries: [{path: a, settings: [readonly]}]", "'settings' must be a mapping"),
        ("override_file: maybe\nentries: []", "'override_file' must be a boolean"),
        ("drop: 1\nentries: []", "'drop' must be a boolean"),
        ("root: 5\nentries: []", "'root' must be a non-empty string"),
        ("entries: [{path: a, type: symlink}]", "unknown type 'symlink'"),
        ("entries: [{path: a, type: text_file}]", "'text_file' requires 'content'"),
        ("entries: [{path: a, type: copied_file}]", "'copied_file' requires 'source'"),
        ("entries: [{path: a, type: directory, content: x}]", "a directory cannot have"),
        ("entries: [{path: a, type: empty_file, content: x}]", "an empty file cannot have 'content'"),
        ("entries: [{path: a, content: x, source: /s}]", "mutually exclusive"),
        ("entries: [{path: a, type: text_file, content: x, source: /s}]", "only valid for copied files"),
    ],
)
def test_invalid_documents(content, message):
    with pytest.raises(DecodeError, match=message.replace("[", r"\[").replace("(", r"\(")):
        decode_yaml_str(content)


def test_error_names_failing_entry():
    with pytest.raises(DecodeError) as exc_info:
        decode_yaml_str("entries: [{path: ok.txt}, {path: bad.txt, settings: {readonly: 3}}]")
    assert "entry #2 (bad.txt)" in str(exc_info.value)


def test_yaml_error_is_chained():
    with pytest.raises(DecodeError) as exc_info:
        decode_yaml_str("entries: [")
    assert exc_info.value.cause is not None
    assert exc_info.value.__cause__ is exc_info.value.cause


def test_decode_file():
    document = decode_yaml_file(FIXTURES / "tree.yaml")
    paths = [entry.path for entry in document.entries]
    assert paths == ["foo.json", "folder/bar.yaml", "folder/empty.txt", "data/raw", "secrets/api.key"]
    assert document.entries[0].content == b'{ "foo": "bar" }\n'
    assert document.entries[4].settings.readonly is True


def test_decode_file_accepts_string_path():
    assert len(decode_yaml_file(str(FIXTURES / "tree.yaml")).entries) == 5


def test_decode_missing_file_is_read_error(tmp_path):
    missing = tmp_path / "missing.yaml"
    with pytest.raises(DocumentReadError) as exc_info:
        decode_yaml_file(missing)
    assert exc_info.value.source == missing
    assert isinstance(exc_info.value.cause, FileNotFoundError)


def test_decode_file_errors_mention_source(tmp_path):
    document = tmp_path / "bad.yaml"
    document.write_text("entries: [{content: x}]")
    with pytest.raises(DecodeError) as exc_info:
        decode_yaml_file(document)
    assert exc_info.value.source == document
    assert str(document) in str(exc_info.value)


def test_decode_file_invalid_utf8(tmp_path):
    document = tmp_path / "binary.yaml"
    document.write_bytes(b"entries: [{path: \xff}]")
    with pytest.raises(DecodeError, match="UTF-8"):
        decode_yaml_file(document)
