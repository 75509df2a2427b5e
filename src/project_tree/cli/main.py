"""Command-line interface for project-tree.

This module provides the ``project-tree`` command. It parses the command line, builds
and renders the tree, prints it (dimming gitignored entries on terminals), and
optionally writes it to a file and copies it to the clipboard.

Exit Codes:
    0: Successful completion (a clipboard failure only produces a warning)
    1: Runtime error during execution, e.g. the directory does not exist
    2: Command-line syntax error
    126: Permission denied reading the directory
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    # Tree of the current directory, copied to the clipboard
    $ project-tree

    # Named root, directories first, no clipboard
    $ project-tree -r -d --no-clip path/to/project
"""

import logging
import sys

from project_tree.cli.argparser import config_from_args, create_parser, validate_args
from project_tree.cli.output import copy_to_clipboard, format_for_terminal, make_console, write_output_file
from project_tree.cli.safe_writer import SafeWriter
from project_tree.cli.signal_handler import setup_signal_handling, signal_handler
from project_tree.exceptions import ClipboardUnavailableError
from project_tree.project_tree import ProjectTree

EXIT_PERMISSION_DENIED = 126


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr; INFO and above with ``verbose``, warnings otherwise."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def main() -> None:
    """Main entry point for the project-tree command-line interface.

    Exit codes:
        0: Successful completion
        1: Runtime error during execution
        2: Command-line syntax error
        126: Permission denied
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe (SIGPIPE) on Unix-like systems
    """
    setup_signal_handling()

    try:
        parser = create_parser()
        # argparse exits with 2 on syntax errors and 0 for --version / --help
        args = parser.parse_args()
        validate_args(args)
        configure_logging(args.verbose)

        project = ProjectTree(args.directory, config_from_args(args))
        try:
            lines = list(project.stream_lines())
        except PermissionError as e:
            print(f"Error: {str(e)}", file=sys.stderr)
            sys.exit(EXIT_PERMISSION_DENIED)
        text = "\n".join(line.text for line in lines)

        try:
            with SafeWriter(sys.stdout.fileno()) as stdout_writer:
                stdout_writer.write(format_for_terminal(lines, make_console(args.color)))
        except BrokenPipeError:
            pass  # Nothing more can be shown; the exit code reflects the signal

        if not signal_handler.interrupted:
            if args.output is not None:
                write_output_file(args.output, text)
            if not args.no_clip:
                try:
                    copy_to_clipboard(text)
                except ClipboardUnavailableError as e:
                    print(f"Warning: {str(e)}", file=sys.stderr)

    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    # Handle exit codes based on received signals
    exit_code = signal_handler.exit_code()
    if exit_code is not None:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
