"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""


from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from platemask.config import PrinterProfile

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for layer export.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Platemask[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_printer_info(profile: PrinterProfile) -> None:
    """Print printer profile information."""
    width, height = profile.resolution
    orientation = "portrait" if profile.is_portrait else "landscape"
    line = Text("  ")
    line.append(profile.name, style="bold")
    line.append(f" ({width:,} x {height:,} px, {orientation})")
    console.print(line)

    extras = [f"{profile.pixel_pitch_mm * 1000:g} µm pitch"]
    if profile.rotate_180:
        extras.append("rotated 180°")
    console.print(f"  {f' {SYM_DOT} '.join(extras)}")


def print_layer_list(layers: list[tuple[str, str, bool]]) -> None:
    """Print the layers about to be exported.

    Args:
        layers: Tuples of (layer id, side, inverted)
    """
    for layer_id, side, inverted in layers:
        suffix = f" {SYM_DOT} inverted" if inverted else ""
        console.print(f"  {layer_id} [dim]({side}){suffix}[/dim]")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_success(
    output_dir: str,
    files: list[tuple[str, str]],
    total_time_s: float,
    exposures: int,
    avg_time_ms: float | None = None,
) -> None:
    """Print success message with summary.

    Args:
        output_dir: Directory the files were written to
        files: Tuples of (filename, human-readable size)
        total_time_s: Total export time in seconds
        exposures: Total number of exposure masks written
        avg_time_ms: Average export time per layer in milliseconds
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_dir, style="bold")
    console.print(line)

    for filename, size in files:
        console.print(f"  {filename} ({size})")

    console.print(f"  {len(files)} layers {SYM_DOT} {exposures} exposures")

    if avg_time_ms is not None:
        console.print(f"  {avg_time_ms:.1f}ms avg per layer")


def print_schedule(rows: int, columns: int, times: list[float], durations: list[float]) -> None:
    """Print a calibration exposure schedule as a table.

    Args:
        rows: Grid rows
        columns: Grid columns
        times: Cumulative exposure per step
        durations: Incremental exposure per step
    """
    table = Table(box=None, pad_edge=False)
    table.add_column("Step", justify="right")
    table.add_column("Cell", justify="center")
    table.add_column("Cumulative", justify="right")
    table.add_column("Exposure", justify="right", style="green")

    for step, (total, duration) in enumerate(zip(times, durations)):
        row, column = divmod(step, columns)
        table.add_row(
            str(step),
            f"{row},{column}",
            f"{total:.2f}s",
            f"{duration:.2f}s",
        )

    console.print(f"\n[bold]{rows} x {columns} calibration grid[/bold]\n")
    console.print(table)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_notice(message: str) -> None:
    """Print a secondary informational line."""
    console.print(f"  {SYM_DOT} {message}")
