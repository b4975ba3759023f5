"""
smart-find - Core Package

A natural-language file finder that resolves queries with instant patterns,
AI-synthesized search commands and AI semantic triage over a file listing.
"""

__version__ = "0.1.0"
__author__ = "smart-find Team"
