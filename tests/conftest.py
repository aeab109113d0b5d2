"""Test configuration and fixtures for treefs."""

import os
import sys

import pytest

from treefs.tree import remove_tree


@pytest.fixture
def permissions_enforced():
    """Skip tests that rely on file write permission being enforced.

    Root ignores file write permission, and Windows only partially honours chmod.
    """
    if sys.platform == "win32" or (hasattr(os, "geteuid") and os.geteuid() == 0):
        pytest.skip("file permissions are not enforced for this user/platform")


@pytest.fixture
def cleanup_roots():
    """Collect roots created during a test and remove them afterwards."""
    roots = []
    yield roots
    for root in roots:
        remove_tree(root)
