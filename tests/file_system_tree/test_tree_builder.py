"""Unit tests for TreeBuilder."""

from pathlib import Path

import pytest
from anytree import PreOrderIter

from project_tree.config import TreeConfig
from project_tree.exclusion_rules.entry_filter import EntryFilter
from project_tree.exclusion_rules.gitignore_rules import GitignorePatternSet
from project_tree.file_system_tree.tree_builder import TreeBuilder, list_directory
from project_tree.types import DirectoryEntry, GitignoreMode, NodeKind, NodeStyle


class FakeLister:
    """Directory lister backed by a dict of relative path -> entries.

    Paths in ``failing`` raise PermissionError, like an unreadable directory.
    """

    def __init__(self, root, listing, failing=()):
        self.root = Path(root)
        self.listing = listing
        self.failing = set(failing)
        self.calls = []

    def __call__(self, path):
        relative = Path(path).relative_to(self.root).as_posix()
        self.calls.append(relative)
        if relative in self.failing:
            raise PermissionError(f"Permission denied: '{path}'")
        return list(self.listing.get(relative, []))


def d(name):
    return DirectoryEntry(name, NodeKind.DIRECTORY)


def f(name, is_symlink=False):
    return DirectoryEntry(name, NodeKind.FILE, is_symlink)


LISTING = {
    ".": [f("README.md"), d("src"), f("Cargo.toml"), d("target"), f("build.rs"), d(".git")],
    "src": [f("main.rs"), d("bin"), f("lib.rs")],
    "src/bin": [f("tool.rs")],
    "target": [d("debug")],
    "target/debug": [f("app")],
    ".git": [f("HEAD")],
}


def build(tmp_path, config=None, gitignore=None, mode=GitignoreMode.OFF, listing=LISTING, failing=()):
    config = config or TreeConfig()
    lister = FakeLister(tmp_path, listing, failing)
    builder = TreeBuilder(config, EntryFilter(config, gitignore, mode), lister=lister)
    return builder.build(tmp_path), lister


def names(node):
    return [child.name for child in node.children]


def find(root, *parts):
    node = root
    for part in parts:
        node = next(child for child in node.children if child.name == part)
    return node


def test_build_root_container(tmp_path):
    """Without include_root the root is an unnamed, expanded container."""
    root, _ = build(tmp_path)
    assert root.name == ""
    assert root.is_container
    assert root.recurse
    assert root.is_dir


def test_build_named_root(tmp_path):
    root, _ = build(tmp_path, TreeConfig(include_root=True))
    assert root.name == tmp_path.name
    assert not root.is_container


def test_mixed_sort_is_case_sensitive(tmp_path):
    """Uppercase names sort before lowercase ones and directories mix with files."""
    root, _ = build(tmp_path)
    assert names(root) == ["Cargo.toml", "README.md", "build.rs", "src", "target"]
    assert names(find(root, "src")) == ["bin", "lib.rs", "main.rs"]


def test_directories_first(tmp_path):
    root, _ = build(tmp_path, TreeConfig(prioritize_dirs=True))
    assert names(root) == ["src", "target", "Cargo.toml", "README.md", "build.rs"]
    assert names(find(root, "src")) == ["bin", "lib.rs", "main.rs"]


def test_default_exclusions_are_not_listed(tmp_path):
    root, lister = build(tmp_path)
    assert ".git" not in names(root)
    # Excluded directories are never read
    assert ".git" not in lister.calls


def test_included_default_is_expanded(tmp_path):
    root, _ = build(tmp_path, TreeConfig(included_defaults=frozenset({".git"})))
    assert names(find(root, ".git")) == ["HEAD"]


def test_stop_lists_directory_without_contents(tmp_path):
    root, lister = build(tmp_path, TreeConfig(stop=("target",)))
    target = find(root, "target")
    assert target.children == ()
    assert not target.recurse
    assert "target" not in lister.calls


def test_ignore_removes_entries(tmp_path):
    root, _ = build(tmp_path, TreeConfig(ignore=("./src/main.rs", "Cargo.toml")))
    assert "Cargo.toml" not in names(root)
    assert names(find(root, "src")) == ["bin", "lib.rs"]


def test_gitignore_dim_marks_style_and_keeps_expanding(tmp_path):
    gitignore = GitignorePatternSet.from_lines(["/target"])
    root, _ = build(tmp_path, gitignore=gitignore, mode=GitignoreMode.DIM)
    target = find(root, "target")
    assert target.style is NodeStyle.DIMMED
    assert target.recurse
    assert find(root, "target", "debug").style is NodeStyle.DIMMED
    assert find(root, "target", "debug", "app").style is NodeStyle.DIMMED
    assert find(root, "src").style is NodeStyle.NORMAL


def test_gitignore_dim_and_stop(tmp_path):
    gitignore = GitignorePatternSet.from_lines(["/target"])
    root, _ = build(tmp_path, gitignore=gitignore, mode=GitignoreMode.DIM_AND_STOP)
    target = find(root, "target")
    assert target.style is NodeStyle.DIMMED
    assert target.children == ()


def test_unreadable_subdirectory_is_kept_empty(tmp_path, caplog):
    """A directory that cannot be read stays in the tree without children."""
    with caplog.at_level("INFO"):
        root, _ = build(tmp_path, failing=["src/bin"])
    bin_node = find(root, "src", "bin")
    assert bin_node.children == ()
    assert not bin_node.recurse
    # The rest of the tree is still built
    assert names(find(root, "target", "debug")) == ["app"]
    assert "Cannot read" in caplog.text


def test_unreadable_root_propagates(tmp_path):
    with pytest.raises(PermissionError):
        build(tmp_path, failing=["."])


def test_missing_root(tmp_path):
    builder = TreeBuilder(TreeConfig(), EntryFilter(TreeConfig()))
    with pytest.raises(FileNotFoundError):
        builder.build(tmp_path / "missing")


def test_root_is_a_file(tmp_path):
    file_path = tmp_path / "file.txt"
    file_path.write_text("content")
    builder = TreeBuilder(TreeConfig(), EntryFilter(TreeConfig()))
    with pytest.raises(NotADirectoryError):
        builder.build(file_path)


def test_symlink_entries_are_leaves(tmp_path):
    listing = {".": [f("link", is_symlink=True), d("real")], "real": [f("file")]}
    root, lister = build(tmp_path, listing=listing)
    link = find(root, "link")
    assert link.is_symlink
    assert not link.is_dir
    assert link.children == ()
    assert "link" not in lister.calls


def test_unexpanded_nodes_have_no_children(tmp_path):
    root, _ = build(tmp_path, TreeConfig(stop=("src",)), failing=["target/debug"])
    for node in PreOrderIter(root):
        if not node.recurse:
            assert node.children == (), f"{node.name} has children but was not expanded"
        if not node.is_dir:
            assert not node.recurse


def test_empty_directory(tmp_path):
    root, _ = build(tmp_path, listing={})
    assert root.children == ()


def test_list_directory_real_filesystem(tmp_path):
    (tmp_path / "dir").mkdir()
    (tmp_path / "file.txt").write_text("content")
    entries = sorted(list_directory(tmp_path))
    assert entries == [
        DirectoryEntry("dir", NodeKind.DIRECTORY, False),
        DirectoryEntry("file.txt", NodeKind.FILE, False),
    ]


def test_list_directory_does_not_follow_symlinks(tmp_path):
    (tmp_path / "real").mkdir()
    try:
        (tmp_path / "link").symlink_to(tmp_path / "real", target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("Symbolic links are not supported here")
    entries = {entry.name: entry for entry in list_directory(tmp_path)}
    assert entries["link"].kind is NodeKind.FILE
    assert entries["link"].is_symlink
    assert entries["real"].is_dir


def test_build_real_filesystem(tmp_path):
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "main.rs").write_text("fn main() {}")
    (tmp_path / "node_modules").mkdir()
    builder = TreeBuilder(TreeConfig(), EntryFilter(TreeConfig()))
    root = builder.build(tmp_path)
    assert names(root) == ["src"]
    assert names(find(root, "src")) == ["main.rs"]
