"""Node representation for entries in the built tree."""

from typing import Any, Optional

from anytree import Node

from project_tree.types import NodeKind, NodeStyle


class TreeNode(Node):  # type: ignore
    """Node class representing a file or directory in the rendered tree.

    Extends anytree.Node with the entry kind, its display style and whether the builder
    expanded it. Children are attached in the order they are created, which the builder
    guarantees is the final display order.

    Attributes:
        name (str): The base name of the entry. The root node has an empty name when the
            root is not displayed, making it an unnamed container.
        parent (Optional[TreeNode]): The parent node in the tree.
        kind (NodeKind): FILE or DIRECTORY.
        style (NodeStyle): NORMAL or DIMMED.
        recurse (bool): True if the directory's contents were listed. Always False for
            files, stopped directories and directories that could not be read.
        is_symlink (bool): True if the entry is a symbolic link (never followed).
        children (tuple[TreeNode]): The child nodes (inherited from anytree.Node).

    Example:
        >>> root = TreeNode("project", kind=NodeKind.DIRECTORY, recurse=True)
        >>> child = TreeNode("main.rs", parent=root)
        >>> child.kind
        <NodeKind.FILE: 'file'>
        >>> root.display_name, child.display_name
        ('project/', 'main.rs')
    """

    def __init__(
        self,
        name: str,
        parent: Optional["TreeNode"] = None,
        kind: NodeKind = NodeKind.FILE,
        style: NodeStyle = NodeStyle.NORMAL,
        recurse: bool = False,
        is_symlink: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.kind = kind
        self.style = style
        self.recurse = recurse and kind is NodeKind.DIRECTORY
        self.is_symlink = is_symlink

    @property
    def is_dir(self) -> bool:
        return self.kind is NodeKind.DIRECTORY

    @property
    def is_dimmed(self) -> bool:
        return self.style is NodeStyle.DIMMED

    @property
    def is_container(self) -> bool:
        """True for an unnamed root that only groups the top-level entries."""
        return self.is_root and not self.name

    @property
    def display_name(self) -> str:
        """The name as it appears in the tree, with ``/`` after directories."""
        return f"{self.name}/" if self.is_dir else self.name
