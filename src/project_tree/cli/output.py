"""Output collaborators: styled terminal text, the output file and the clipboard."""

from pathlib import Path
from typing import Iterable

import pyperclip
from rich.console import Console
from rich.text import Text

from project_tree.cli.safe_writer import SafeWriter
from project_tree.exceptions import ClipboardUnavailableError, OutputError
from project_tree.file_system_tree.tree_renderer import TreeLine
from project_tree.types import NodeStyle, PathType

COLOR_CHOICES = ("auto", "always", "never")

DIM_STYLE = "dim"


def make_console(color: str = "auto") -> Console:
    """Create the console used to resolve styles into escape codes.

    Args:
        color: ``auto`` emits escape codes only when stdout is a terminal (and honours
            ``NO_COLOR``), ``always`` forces them, ``never`` disables them.

    Raises:
        ValueError: If ``color`` is not one of the known choices.
    """
    if color == "auto":
        return Console(highlight=False, soft_wrap=True)
    if color == "always":
        return Console(force_terminal=True, color_system="standard", highlight=False, soft_wrap=True)
    if color == "never":
        return Console(color_system=None, highlight=False, soft_wrap=True)
    raise ValueError(f"Invalid color choice: {color}. Must be one of: {', '.join(COLOR_CHOICES)}")


def styled_line(line: TreeLine) -> Text:
    """Convert a rendered line into rich Text, dimming the name of ignored entries.

    Connectors and the trailing ``/`` keep the normal style.
    """
    text = Text(line.prefix + line.connector)
    text.append(line.name, style=DIM_STYLE if line.style is NodeStyle.DIMMED else None)
    text.append(line.suffix)
    return text


def format_for_terminal(lines: Iterable[TreeLine], console: Console) -> str:
    """Render lines to a string with the console's escape codes, one line per entry."""
    with console.capture() as capture:
        for line in lines:
            console.print(styled_line(line))
    return capture.get()


def write_output_file(path: PathType, text: str) -> None:
    """Write the plain tree text to ``path``, followed by a newline.

    Raises:
        OutputError: If the path is a directory or cannot be written.
    """
    output_path = Path(path)
    if output_path.is_dir():
        raise OutputError(str(output_path), "is a directory")
    try:
        with SafeWriter(output_path) as writer:
            writer.write_line(text)
    except BrokenPipeError:
        raise
    except OSError as e:
        raise OutputError(str(output_path), e.strerror or str(e)) from e


def copy_to_clipboard(text: str) -> None:
    """Copy the plain tree text to the system clipboard.

    Raises:
        ClipboardUnavailableError: If pyperclip has no working clipboard mechanism.
    """
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        raise ClipboardUnavailableError(str(e)) from e
