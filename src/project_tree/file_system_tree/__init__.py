"""In-memory tree of a directory and its box-drawing rendering.

This package provides the node type, the builder that walks the filesystem while
applying an entry filter, and the renderer that turns the built tree into lines.
"""
