"""
External collaborators for smart-find.

This module contains the adapters for the filesystem search tools, the
text-generation oracle and the in-process file lister.
"""
