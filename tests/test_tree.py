"""Unit tests for the Tree handle and its teardown."""

import gc
import logging
import os
import shutil
import stat
from unittest.mock import patch

import pytest

from treefs.tree import Tree, remove_tree


@pytest.fixture
def populated_root(tmp_path):
    root = tmp_path / "root"
    (root / "a" / "b").mkdir(parents=True)
    (root / "a" / "b" / "c.txt").write_text("c")
    (root / "top.txt").write_text("top")
    return root


def test_path_accessors(populated_root):
    tree = Tree(populated_root, auto_cleanup=False)
    assert tree.path == populated_root
    assert tree.root == populated_root
    assert tree.join("a", "b", "c.txt") == populated_root / "a" / "b" / "c.txt"
    assert "auto_cleanup=False" in repr(tree)


def test_cleanup_removes_root(populated_root):
    tree = Tree(populated_root)
    assert not tree.is_cleaned_up
    tree.cleanup()
    assert not populated_root.exists()
    assert tree.is_cleaned_up
    # The path stays readable after teardown.
    assert tree.path == populated_root


def test_double_cleanup_is_noop(populated_root):
    tree = Tree(populated_root)
    tree.cleanup()
    with patch("treefs.tree.shutil.rmtree") as mock_rmtree:
        tree.cleanup()
    mock_rmtree.assert_not_called()


def test_cleanup_after_manual_removal(populated_root):
    tree = Tree(populated_root)
    shutil.rmtree(populated_root)
    tree.cleanup()
    assert not populated_root.exists()


def test_cleanup_does_not_touch_recreated_root(populated_root):
    tree = Tree(populated_root)
    tree.cleanup()
    populated_root.mkdir()
    tree.cleanup()
    assert populated_root.is_dir()


def test_auto_cleanup_disabled_keeps_tree(populated_root):
    tree = Tree(populated_root, auto_cleanup=False)
    tree.cleanup()
    assert populated_root.exists()
    assert not tree.is_cleaned_up


def test_disarm(populated_root):
    tree = Tree(populated_root)
    tree.disarm()
    assert tree.auto_cleanup is False
    tree.cleanup()
    assert populated_root.exists()


def test_context_manager(populated_root):
    with Tree(populated_root) as tree:
        assert tree.path.exists()
    assert not populated_root.exists()


def test_context_manager_cleans_up_on_error(populated_root):
    with pytest.raises(RuntimeError):
        with Tree(populated_root):
            raise RuntimeError("boom")
    assert not populated_root.exists()


def test_end_of_scope_cleanup(populated_root):
    tree = Tree(populated_root)
    del tree
    gc.collect()
    assert not populated_root.exists()


def test_end_of_scope_without_auto_cleanup(populated_root):
    tree = Tree(populated_root, auto_cleanup=False)
    del tree
    gc.collect()
    assert populated_root.exists()


def test_cleanup_with_readonly_contents(populated_root):
    readonly_file = populated_root / "a" / "b" / "c.txt"
    os.chmod(readonly_file, stat.S_IRUSR)
    os.chmod(populated_root / "a" / "b", stat.S_IRUSR | stat.S_IXUSR)

    Tree(populated_root).cleanup()
    assert not populated_root.exists()


def test_remove_tree_retries_after_restoring_permissions(populated_root):
    real_rmtree = shutil.rmtree
    calls = []

    def flaky_rmtree(path, *args, **kwargs):
        calls.append(kwargs)
        if len(calls) == 1:
            raise PermissionError(13, "Permission denied")
        return real_rmtree(path, *args, **kwargs)

    with patch("treefs.tree.shutil.rmtree", side_effect=flaky_rmtree):
        assert remove_tree(populated_root) is True
    assert len(calls) == 2
    assert not populated_root.exists()


def test_remove_tree_never_raises(populated_root, caplog):
    def stubborn_rmtree(path, ignore_errors=False):
        if not ignore_errors:
            raise PermissionError(13, "Permission denied")

    with patch("treefs.tree.shutil.rmtree", side_effect=stubborn_rmtree):
        with caplog.at_level(logging.WARNING, logger="treefs.tree"):
            assert remove_tree(populated_root) is False
    assert populated_root.exists()
    assert "Could not completely remove" in caplog.text


def test_remove_tree_missing_root(tmp_path):
    assert remove_tree(tmp_path / "missing") is True
