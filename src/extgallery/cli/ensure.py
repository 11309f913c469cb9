"""CLI error handling utilities with styled output.

This module provides the Ensure class used at the CLI error boundary. All
errors use a red "Error:" prefix for visual consistency and exit with
status 1.
"""

from typing import NoReturn

import click

from extgallery.cli.output import user_output


class Ensure:
    """Helper class for reporting fatal conditions with consistent output."""

    @staticmethod
    def fail(error_message: str) -> NoReturn:
        """Output styled error and exit.

        Args:
            error_message: Message to display. "Error: " prefix will be
                          added automatically in red.

        Raises:
            SystemExit: Always (with exit code 1)
        """
        user_output(click.style("Error: ", fg="red") + error_message)
        raise SystemExit(1)

