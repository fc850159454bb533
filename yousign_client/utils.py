"""
Utility functions for the Yousign CLI.
"""

import base64
import binascii
import json
import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional, Sequence

import click


class OutputFormat(str, Enum):
    """Output formats for CLI commands."""
    TABLE = "table"
    JSON = "json"


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """
    Configure root logging for CLI commands.

    Args:
        verbose: Show debug output
        quiet: Only show errors
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger().setLevel(level)


def print_success(message: str) -> None:
    click.echo(click.style("✓ ", fg="green") + message)


def print_error(message: str, details: Optional[str] = None) -> None:
    click.echo(click.style("✗ ", fg="red") + message, err=True)
    if details:
        click.echo(f"  {details}", err=True)


def print_warning(message: str) -> None:
    click.echo(click.style("! ", fg="yellow") + message)


def print_info(message: str) -> None:
    click.echo(click.style("ℹ ", fg="blue") + message)


def print_json(data: Any, indent: int = 2) -> None:
    """Print data as formatted JSON."""
    click.echo(json.dumps(data, indent=indent, default=str, ensure_ascii=False))


def print_table(headers: Sequence[str], rows: List[List[str]]) -> None:
    """Print rows as a left-aligned text table."""
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            if i < len(widths):
                widths[i] = max(widths[i], len(click.unstyle(str(cell))))

    def _line(cells: Sequence[Any]) -> str:
        parts = []
        for i, cell in enumerate(cells):
            text = str(cell)
            padding = widths[i] - len(click.unstyle(text))
            parts.append(text + " " * padding)
        return "  ".join(parts).rstrip()

    click.echo(click.style(_line(headers), bold=True))
    click.echo("  ".join("-" * w for w in widths))
    for row in rows:
        click.echo(_line(row))


def truncate_string(value: Optional[str], max_length: int = 50) -> str:
    """Truncate a string, ending it with '...' when cut."""
    if not value:
        return ""
    if len(value) <= max_length:
        return value
    return value[:max_length - 3] + "..."


def confirm_action(message: str, default: bool = False) -> bool:
    """Ask the user for confirmation."""
    return click.confirm(message, default=default)


def encode_file(path: Path) -> str:
    """
    Read a local file and return its base64 content.

    Raises:
        ValueError: If the file cannot be read
    """
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise ValueError(f"Cannot read file {path}: {e}")
    return base64.b64encode(data).decode("ascii")


def decode_content(content: Any) -> bytes:
    """
    Decode the base64 body returned by the file download endpoint.

    Raises:
        ValueError: If the content is not base64 text
    """
    if not isinstance(content, str):
        raise ValueError("Downloaded content is not a base64 string")
    try:
        return base64.b64decode(content, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Downloaded content is not valid base64: {e}")


def load_json_file(path: Path) -> Any:
    """
    Load JSON from a file.

    Raises:
        ValueError: If the file cannot be read or holds invalid JSON
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}")
    except OSError as e:
        raise ValueError(f"Cannot read file {path}: {e}")
