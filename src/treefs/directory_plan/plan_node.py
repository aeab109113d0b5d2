"""Node representation for planned entries in the tree."""

from typing import Any, Optional

from anytree import Node


class PlanNode(Node):  # type: ignore
    """Node class representing a planned file or directory.

    Extends anytree.Node with the information the materializer and the renderer
    need: whether the node is a directory and its path relative to the root.

    Attributes:
        name (str): The final path segment.
        parent (Optional[PlanNode]): The parent node in the plan.
        is_dir (bool): True if a directory must exist at this node.
        relative_path (str): Slash-separated path from the root ("" for the root).

    Example:
        >>> root = PlanNode("root", is_dir=True)
        >>> child = PlanNode("a", parent=root, is_dir=True, relative_path="a")
        >>> child.relative_path
        'a'
    """

    def __init__(
        self,
        name: str,
        parent: Optional["PlanNode"] = None,
        is_dir: bool = False,
        relative_path: str = "",
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.is_dir = is_dir
        self.relative_path = relative_path
