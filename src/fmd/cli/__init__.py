"""
fmd CLI Package.

Command-line interface for finding Markdown files by metadata.
"""

from .cli import app, cli_main

__all__ = ["app", "cli_main"]
