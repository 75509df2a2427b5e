"""Box-drawing rendering of a built tree."""

from typing import Iterator, NamedTuple

from project_tree.types import NodeStyle

from .tree_node import TreeNode

TEE = "├── "
CORNER = "└── "
PIPE = "│   "
SPACE = "    "


class TreeLine(NamedTuple):
    """One rendered line, split so that an output layer can style the name.

    Attributes:
        prefix: Indentation made of ``│   `` and blank columns inherited from ancestors.
        connector: ``├── ``, ``└── `` or empty for lines without a connector.
        name: The entry's base name.
        suffix: ``/`` for directories, otherwise empty.
        style: The entry's display style.
    """

    prefix: str
    connector: str
    name: str
    suffix: str = ""
    style: NodeStyle = NodeStyle.NORMAL

    @property
    def text(self) -> str:
        return f"{self.prefix}{self.connector}{self.name}{self.suffix}"


class TreeRenderer:
    """Renders a tree in the style of the Unix ``tree`` command.

    Every node becomes one line in pre-order. The last child of a directory uses the
    corner connector and all earlier children the tee connector. Below a non-last entry
    descendants are indented with a vertical bar, below a last entry with blanks.

    A named root is printed first, without connector or trailing slash, and its children
    start at the first connector level. An unnamed container root is not printed and its
    children are printed without connectors. Their descendants keep the indentation they
    would have below a named root, so a non-last top-level directory still draws its
    vertical bar.

    Rendering is a pure function of the tree.

    Example:
        >>> from project_tree.types import NodeKind
        >>> root = TreeNode("project", kind=NodeKind.DIRECTORY, recurse=True)
        >>> src = TreeNode("src", parent=root, kind=NodeKind.DIRECTORY, recurse=True)
        >>> _ = TreeNode("main.rs", parent=src)
        >>> _ = TreeNode("Cargo.toml", parent=root)
        >>> print(TreeRenderer().render(root))
        project
        ├── src/
        │   └── main.rs
        └── Cargo.toml
    """

    def stream_lines(self, tree: TreeNode) -> Iterator[TreeLine]:
        """Generate the rendered lines one at a time.

        Args:
            tree: Root of the tree to render.

        Yields:
            One TreeLine per displayed node.
        """
        if tree.is_container:
            children = tree.children
            for i, child in enumerate(children):
                is_last = i == len(children) - 1
                yield self._line(child, "", "")
                yield from self._walk(child, SPACE if is_last else PIPE)
            return

        yield TreeLine("", "", tree.name, "", tree.style)
        yield from self._walk(tree, "")

    def render(self, tree: TreeNode) -> str:
        """Render the tree as plain text, one line per node, without a trailing newline."""
        return "\n".join(line.text for line in self.stream_lines(tree))

    def _walk(self, node: TreeNode, prefix: str) -> Iterator[TreeLine]:
        children = node.children
        for i, child in enumerate(children):
            is_last = i == len(children) - 1
            yield self._line(child, prefix, CORNER if is_last else TEE)
            yield from self._walk(child, prefix + (SPACE if is_last else PIPE))

    @staticmethod
    def _line(node: TreeNode, prefix: str, connector: str) -> TreeLine:
        return TreeLine(prefix, connector, node.name, "/" if node.is_dir else "", node.style)
