"""Path emission to stdout."""

from pathlib import Path
from typing import Iterable, Union

import typer


def emit_paths(paths: Iterable[Union[str, Path]], null_separator: bool = False) -> int:
    """
    Write one path per record to stdout.

    Args:
        paths: Paths to write, in the order given
        null_separator: Terminate records with NUL instead of newline

    Returns:
        Number of paths written
    """
    terminator = "\0" if null_separator else "\n"
    count = 0
    for path in paths:
        typer.echo(f"{path}{terminator}", nl=False)
        count += 1
    return count
