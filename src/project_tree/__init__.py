"""ASCII directory tree rendering.

This package walks a project directory and renders it as a box-drawing tree,
honouring default exclusions, explicit ignore/stop patterns and an optional
``.gitignore``.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("project-tree")
except PackageNotFoundError:
    __version__ = "unknown"
