"""Planned tree representation derived from an entry model.

This module provides the DirectoryPlan class, which arranges the normalised paths of
an entry model into an anytree hierarchy. The hierarchy yields the directories to
create in parent-before-child order and renders the planned tree as text.
"""

from typing import Dict, Iterable, Iterator, Tuple

from anytree import PreOrderIter

from treefs.directory_plan.plan_node import PlanNode
from treefs.entry import EntryModel
from treefs.paths import ancestors, normalize_entry_path
from treefs.types import EntryKind


class DirectoryPlan:
    """Hierarchy of the files and directories an entry model will create.

    Every proper ancestor of an entry path becomes a directory node, as does every
    entry of kind directory. A path that appears as a file entry and also as the
    ancestor of another entry is planned as a directory; writing the file will then
    fail at materialization time.

    Attributes:
        root_name (str): Name used for the root node when rendering.

    Example:
        >>> plan = DirectoryPlan([("a/b.txt", False), ("a/c", True)])
        >>> list(plan.iter_directories())
        ['a', 'a/c']
        >>> print(plan.get_tree_representation())
        ./
        └── a/
            ├── c/
            └── b.txt
    """

    def __init__(self, paths: Iterable[Tuple[str, bool]], root_name: str = ".") -> None:
        """Build the plan.

        Args:
            paths: Pairs of (normalised relative path, is_directory). The empty path
                denotes the root itself.
            root_name: Name displayed for the root node.
        """
        self.root_name = root_name
        self._root = PlanNode(root_name, is_dir=True, relative_path="")
        self._nodes: Dict[str, PlanNode] = {"": self._root}
        for path, is_dir in paths:
            self._add(path, is_dir)

    def _add(self, path: str, is_dir: bool) -> None:
        for ancestor in ancestors(path):
            self._ensure(ancestor, is_dir=True)
        if path:
            self._ensure(path, is_dir=is_dir)

    def _ensure(self, path: str, is_dir: bool) -> PlanNode:
        node = self._nodes.get(path)
        if node is None:
            parent_path, _, name = path.rpartition("/")
            node = PlanNode(name, parent=self._nodes[parent_path], is_dir=is_dir, relative_path=path)
            self._nodes[path] = node
        elif is_dir:
            node.is_dir = True
        return node

    def iter_directories(self) -> Iterator[str]:
        """Yield the relative path of every planned directory, parents before children.

        The root itself is not included.
        """
        for node in PreOrderIter(self._root):
            if node.is_dir and node is not self._root:
                yield node.relative_path

    def iter_files(self) -> Iterator[str]:
        """Yield the relative path of every planned file in pre-order."""
        for node in PreOrderIter(self._root):
            if not node.is_dir:
                yield node.relative_path

    def get_directory_count(self) -> int:
        return sum(1 for _ in self.iter_directories())

    def get_file_count(self) -> int:
        return sum(1 for _ in self.iter_files())

    def stream_tree_representation(self) -> Iterator[str]:
        """Generate a tree representation of the plan one line at a time.

        Output resembles the Unix ``tree`` command: directories carry a trailing
        slash and are listed before files, both alphabetically.

        Yields:
            Lines of the tree representation, including the connecting lines.
        """

        def write_node(
            node: PlanNode, prefix: str = "", is_last: bool = True, is_root: bool = False
        ) -> Iterator[str]:
            if is_root:
                yield f"{node.name}/"
            else:
                connector = "└── " if is_last else "├── "
                suffix = "/" if node.is_dir else ""
                yield f"{prefix}{connector}{node.name}{suffix}"

            if node.is_dir:
                sorted_children = sorted(node.children, key=lambda n: (not n.is_dir, n.name.lower()))
                for i, child in enumerate(sorted_children):
                    is_last_child = i == len(sorted_children) - 1
                    if is_root:
                        new_prefix = ""
                    else:
                        new_prefix = prefix + ("    " if is_last else "│   ")
                    yield from write_node(child, new_prefix, is_last_child, is_root=False)

        yield from write_node(self._root, is_root=True)

    def get_tree_representation(self) -> str:
        """Get the complete tree representation as a single string."""
        return "\n".join(self.stream_tree_representation())


def plan_for_model(model: EntryModel, root_name: str = ".") -> DirectoryPlan:
    """Build the DirectoryPlan of an entry model.

    Raises:
        PathSafetyError: If an entry path is absolute or escapes the root.
    """
    return DirectoryPlan(
        ((normalize_entry_path(entry.path), entry.kind is EntryKind.DIRECTORY) for entry in model), root_name
    )
