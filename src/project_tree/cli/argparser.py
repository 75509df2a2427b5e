"""Command-line argument parsing for project-tree.

This module defines the command-line interface for project-tree, handling argument
parsing, validation and the translation of parsed flags into a TreeConfig.
"""

import argparse
from pathlib import Path

from project_tree import __version__
from project_tree.cli.output import COLOR_CHOICES
from project_tree.config import TreeConfig
from project_tree.types import GitignoreMode

GITIGNORE_AUTO = "auto"
GITIGNORE_CHOICES = [GITIGNORE_AUTO] + [mode.value for mode in GitignoreMode]


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with project-tree's options.
    """
    description = """
    project-tree: print an ASCII tree of a project directory.

    The tree is printed to stdout and, unless --no-clip is given, copied to the clipboard
    so it can be pasted into documentation, issues or chat messages.

    Default exclusions:
    - node_modules, .git and .vscode are left out unless requested
    - target is left out when the directory holds a Cargo.toml

    .gitignore handling:
    When the directory has a .gitignore, entries it matches are shown dimmed by default.
    Use --gitignore to leave them out (ignore), list matching directories without their
    contents (stop), do both dimming and stopping (dim-and-stop) or disable it (off).
    """

    epilog = """
    Examples:
      # Tree of the current directory
      project-tree

      # Include the directory name as the first line and list directories first
      project-tree -r -d ~/code/myapp

      # Leave out files and directories (gitignore-style patterns)
      project-tree -i Cargo.lock -i "*.log" -i ./docs/generated

      # Show a directory without its contents
      project-tree -s assets -s vendor/

      # Show node_modules and .git, which are hidden by default
      project-tree --node-modules --git

      # Leave gitignored entries out instead of dimming them
      project-tree --gitignore ignore

      # Also write the tree to a file and skip the clipboard
      project-tree -o TREE.txt --no-clip
    """

    parser = argparse.ArgumentParser(
        prog="project-tree",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"project-tree {__version__}", help="Show the version and exit"
    )
    parser.add_argument(
        "directory",
        type=Path,
        nargs="?",
        default=Path("."),
        help="The directory to render (default: the current directory).",
    )
    parser.add_argument(
        "-i",
        "--ignore",
        metavar="PATTERN",
        action="append",
        default=[],
        help=(
            "Leave out files and directories matching PATTERN. A bare name matches at any depth, a path "
            "with a slash is relative to the directory, a trailing slash matches directories only. "
            "Can be specified multiple times."
        ),
    )
    parser.add_argument(
        "-s",
        "--stop",
        metavar="PATTERN",
        action="append",
        default=[],
        help="Show directories matching PATTERN without their contents. Can be specified multiple times.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Also write the tree to FILE.",
    )
    parser.add_argument("--node-modules", action="store_true", help="Show node_modules directories.")
    parser.add_argument("--git", action="store_true", help="Show .git directories.")
    parser.add_argument("--vscode", action="store_true", help="Show .vscode directories.")
    parser.add_argument("--target", action="store_true", help="Show target directories in Rust projects.")
    parser.add_argument(
        "-g",
        "--gitignore",
        choices=GITIGNORE_CHOICES,
        default=GITIGNORE_AUTO,
        help="How to treat entries matched by the directory's .gitignore (default: auto, which dims them).",
    )
    parser.add_argument("-r", "--root", action="store_true", help="Include the directory itself as the first line.")
    parser.add_argument("-d", "--dirs", action="store_true", help="List directories before files.")
    parser.add_argument(
        "--no-clip",
        "--noclip",
        dest="no_clip",
        action="store_true",
        help="Do not copy the tree to the clipboard.",
    )
    parser.add_argument(
        "--color",
        choices=COLOR_CHOICES,
        default="auto",
        help="Dim gitignored entries with terminal escape codes (default: auto, only on a terminal).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Report which .gitignore is used and which directories could not be read.",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    for option, patterns in (("--ignore", args.ignore), ("--stop", args.stop)):
        if any(not pattern.strip() for pattern in patterns):
            raise ValueError(f"{option} patterns must not be empty")

    if args.output is not None and args.output.is_dir():
        raise ValueError(f"--output must name a file, but {args.output} is a directory")


def config_from_args(args: argparse.Namespace) -> TreeConfig:
    """Build the TreeConfig described by the parsed arguments."""
    gitignore_mode = None if args.gitignore == GITIGNORE_AUTO else GitignoreMode(args.gitignore)
    return TreeConfig.from_flags(
        args.directory,
        show_node_modules=args.node_modules,
        show_git=args.git,
        show_vscode=args.vscode,
        show_target=args.target,
        ignore=args.ignore,
        stop=args.stop,
        gitignore_mode=gitignore_mode,
        prioritize_dirs=args.dirs,
        include_root=args.root,
    )
