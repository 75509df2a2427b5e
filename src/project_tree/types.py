from enum import Enum
from os import PathLike
from typing import NamedTuple, Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class NodeKind(Enum):
    """Kind of a filesystem entry as seen by the tree.

    Symbolic links are never followed, so they are reported as FILE.
    """

    FILE = "file"
    DIRECTORY = "directory"


class NodeStyle(Enum):
    """Semantic display style of a rendered entry.

    The core only decides between these two values; turning DIMMED into terminal
    escape codes is left to the output layer.
    """

    NORMAL = "normal"
    DIMMED = "dimmed"


class GitignoreMode(str, Enum):
    """How entries matched by the root ``.gitignore`` are treated.

    Values:
        OFF: The .gitignore is not consulted
        IGNORE: Matching entries are left out of the tree
        STOP: Matching directories are listed but not expanded
        DIM: Matching entries are shown dimmed (the default when a .gitignore exists)
        DIM_AND_STOP: Matching entries are dimmed and matching directories not expanded
    """

    OFF = "off"
    IGNORE = "ignore"
    STOP = "stop"
    DIM = "dim"
    DIM_AND_STOP = "dim-and-stop"

    @property
    def stops(self) -> bool:
        return self in (GitignoreMode.STOP, GitignoreMode.DIM_AND_STOP)

    @property
    def dims(self) -> bool:
        return self in (GitignoreMode.DIM, GitignoreMode.DIM_AND_STOP)


class DirectoryEntry(NamedTuple):
    """A single entry of a directory listing.

    Attributes:
        name: Base name of the entry.
        kind: FILE or DIRECTORY. Symbolic links are always FILE.
        is_symlink: True if the entry is a symbolic link.
    """

    name: str
    kind: NodeKind
    is_symlink: bool = False

    @property
    def is_dir(self) -> bool:
        return self.kind is NodeKind.DIRECTORY
