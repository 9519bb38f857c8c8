"""Command-line interface for platemask.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bars for layer export
- Calibration grid schedules as tables
- Quiet output mode
- Detailed error reporting
"""

from platemask.cli.app import cli, main

__all__ = ["cli", "main"]
