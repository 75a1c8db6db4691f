"""Image order resolution for EPUB packages.

This package turns a decoded package document into the ordered list of image
paths that the archive writer copies. Archive path helpers live here as well
because both resolution and indexing depend on them.
"""
