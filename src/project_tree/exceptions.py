class ProjectTreeError(Exception):
    """Base class for errors raised by project-tree outside the builtin OSError family."""

    pass


class ClipboardUnavailableError(ProjectTreeError):
    """
    Exception raised when the rendered tree cannot be copied to the clipboard.

    This happens when pyperclip finds no usable clipboard mechanism, e.g. on a headless
    Linux machine without xclip, xsel or wl-clipboard. The CLI reports it as a warning
    because the tree has already been printed.

    Attributes:
        message (str): Error message including a hint on how to avoid the clipboard.

    Example:
        >>> error = ClipboardUnavailableError("no backend")
        >>> str(error).startswith('Could not copy to clipboard: no backend')
        True
    """

    def __init__(self, reason: str) -> None:
        """
        Initialize the exception with the underlying reason.

        Args:
            reason (str): Description of why the clipboard could not be used.
        """
        self.reason = reason
        self.message = f"Could not copy to clipboard: {reason}. Use --no-clip to skip the clipboard."
        super().__init__(self.message)


class OutputError(ProjectTreeError):
    """
    Exception raised when the rendered tree cannot be written to the requested output file.

    Attributes:
        path (str): The output path that could not be written.

    Example:
        >>> error = OutputError("/tmp", "is a directory")
        >>> str(error)
        'Cannot write output to /tmp: is a directory'
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"Cannot write output to {path}: {reason}")
