"""Output utilities for CLI commands with clear intent.

user_output is for humans and goes to stderr so stdout stays clean for
anything a script may want to capture.
"""

from typing import Any

import click


def user_output(message: Any = "", nl: bool = True) -> None:
    """Write a human-facing line to stderr."""
    click.echo(message, err=True, nl=nl)

