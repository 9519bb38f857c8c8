"""CLI application entry point for platemask.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from platemask import __version__
from platemask.cli.output import (
    console,
    create_progress,
    print_error,
    print_header,
    print_layer_list,
    print_notice,
    print_printer_info,
    print_schedule,
    print_step,
    print_success,
)
from platemask.config import (
    AnchorCorner,
    CalibrationSpec,
    LoggingConfig,
    PlacementOptions,
    PlatemaskSettings,
    ProcessingConfig,
    load_printer_profile,
)
from platemask.core import (
    MaskExporter,
    calculate_exposure_times,
    incremental_durations,
    validate_calibration,
)
from platemask.domain import BoardLayer, Side
from platemask.exceptions import PlatemaskError
from platemask.io import ZipArchiveBuilder
from platemask.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="platemask",
    help="Convert PCB SVG layers into exposure masks for mask-projection resin printers.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Platemask[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Convert PCB SVG layers into exposure masks for mask-projection resin printers."""


@app.command()
def export(
    layer_files: Annotated[
        list[Path],
        typer.Argument(
            help="SVG layer files (physical width/height and viewBox required)",
            show_default=False,
        ),
    ],
    profile_path: Annotated[
        Path,
        typer.Option(
            "--profile",
            "-p",
            help="Printer profile JSON file",
            show_default=False,
        ),
    ],
    output_dir: Annotated[
        Path,
        typer.Option(
            "--output-dir",
            "-o",
            help="Directory for output files and previews",
        ),
    ] = Path("."),
    bottom: Annotated[
        list[str] | None,
        typer.Option(
            "--bottom",
            "-b",
            help="Layer id (file stem) on the bottom side; repeatable",
        ),
    ] = None,
    invert: Annotated[
        list[str] | None,
        typer.Option(
            "--invert",
            "-i",
            help="Layer id (file stem) printed with inverted polarity; repeatable",
        ),
    ] = None,
    anchor: Annotated[
        str,
        typer.Option(
            "--anchor",
            "-a",
            help="Plate anchor (TL|TR|BL|BR|C)",
        ),
    ] = "C",
    offset: Annotated[
        tuple[float, float],
        typer.Option(
            "--offset",
            help="Offset from the anchor in millimeters (X Y)",
        ),
    ] = (0.0, 0.0),
    exposure: Annotated[
        float | None,
        typer.Option(
            "--exposure",
            "-e",
            help="Exposure time in seconds for every layer",
            min=0.0,
        ),
    ] = None,
    cal_rows: Annotated[
        int | None,
        typer.Option("--cal-rows", help="Calibration grid rows"),
    ] = None,
    cal_columns: Annotated[
        int | None,
        typer.Option("--cal-columns", help="Calibration grid columns"),
    ] = None,
    cal_min: Annotated[
        float | None,
        typer.Option("--cal-min", help="Shortest calibration exposure in seconds"),
    ] = None,
    cal_max: Annotated[
        float | None,
        typer.Option("--cal-max", help="Longest calibration exposure in seconds"),
    ] = None,
    linear: Annotated[
        bool,
        typer.Option(
            "--linear",
            help="Space calibration exposures linearly instead of geometrically",
        ),
    ] = False,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of layers rendered in parallel (default: sequential)",
            min=1,
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
) -> None:
    """Export SVG board layers as printer exposure masks.

    Each layer is written as a ZIP archive of full-plate PNG masks with a JSON
    manifest, next to a PNG preview of the plate.

    Example:
        platemask export F_Cu.svg B_Cu.svg -p printer.json -b B_Cu -e 90
    """
    # Validate input files exist
    for path in layer_files:
        if not path.is_file():
            print_error(
                f"Input file not found: {path}",
                details=f"The file '{path}' does not exist or is not accessible.",
            )
            raise typer.Exit(code=1)

    try:
        corner = AnchorCorner(anchor.upper())
    except ValueError:
        print_error(
            f"Invalid anchor: {anchor}",
            details="Valid values: TL, TR, BL, BR, C",
        )
        raise typer.Exit(code=1)

    calibration_args = (cal_rows, cal_columns, cal_min, cal_max)
    calibration = None
    if any(value is not None for value in calibration_args):
        if any(value is None for value in calibration_args):
            print_error(
                "Incomplete calibration grid",
                details="--cal-rows, --cal-columns, --cal-min and --cal-max go together.",
            )
            raise typer.Exit(code=1)
        calibration = CalibrationSpec(
            rows=cal_rows,
            columns=cal_columns,
            min_time_s=cal_min,
            max_time_s=cal_max,
            geometric=not linear,
        )
    elif exposure is None:
        print_error(
            "No exposure time given",
            details="Pass --exposure, or a calibration grid with --cal-* options.",
        )
        raise typer.Exit(code=1)

    settings = PlatemaskSettings(
        processing=ProcessingConfig(max_workers=workers),
        logging=LoggingConfig(log_file=log_file, log_level=log_level),
    )
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    if not quiet:
        print_header(__version__)

    try:
        try:
            profile = load_printer_profile(profile_path)
        except (FileNotFoundError, ValidationError) as e:
            print_error(f"Could not load printer profile: {profile_path}", details=str(e))
            raise typer.Exit(code=1)

        if profile.file_format != "zip":
            if not quiet:
                print_notice(
                    f"No built-in '{profile.file_format}' encoder, writing ZIP archives"
                )
            profile = profile.model_copy(update={"file_format": "zip"})

        bottom_ids = set(bottom or [])
        inverted_ids = set(invert or [])
        layers = [
            BoardLayer(
                id=path.stem,
                side=Side.BOTTOM if path.stem in bottom_ids else Side.TOP,
                filename=path.name,
                markup=path.read_text(encoding="utf-8"),
                inverted=path.stem in inverted_ids,
                display_order=order,
            )
            for order, path in enumerate(layer_files)
        ]

        if not quiet:
            print_step("Printer")
            print_printer_info(profile)
            print_step("Layers")
            print_layer_list([(layer.id, layer.side.value, layer.inverted) for layer in layers])

        options = PlacementOptions(
            anchor_corner=corner,
            anchor_offset_mm=offset,
            exposure_times={layer.id: exposure for layer in layers} if exposure is not None else {},
            calibration=calibration,
        )
        exporter = MaskExporter(
            profile=profile,
            options=options,
            file_builder=ZipArchiveBuilder(),
            settings=settings,
            logger=logger,
        )

        if not quiet:
            print_step("Exporting")
            with create_progress() as progress:
                task_id = progress.add_task("Exporting", total=len(layers))

                def update_progress(completed: int, *_: object) -> None:
                    progress.update(task_id, completed=completed)

                records = exporter.export(layers, progress_callback=update_progress)
        else:
            records = exporter.export(layers)

        output_dir.mkdir(parents=True, exist_ok=True)
        written: list[tuple[str, str]] = []
        for record in records:
            artifact_path = output_dir / record.filename
            artifact_path.write_bytes(record.artifact)
            preview_path = artifact_path.with_name(f"{artifact_path.stem}-preview.png")
            preview_path.write_bytes(record.preview_png)
            written.append((record.filename, _format_file_size(len(record.artifact))))

        if not quiet:
            print_success(
                output_dir=str(output_dir),
                files=written,
                total_time_s=exporter.stats.duration_seconds,
                exposures=exporter.stats.exposure_count,
                avg_time_ms=exporter.stats.avg_layer_time_ms,
            )

    except PlatemaskError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        # Re-raise typer.Exit to allow clean exits
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


@app.command()
def times(
    rows: Annotated[int, typer.Option("--rows", "-r", help="Calibration grid rows")],
    columns: Annotated[int, typer.Option("--columns", "-c", help="Calibration grid columns")],
    min_time: Annotated[
        float, typer.Option("--min", help="Shortest exposure in seconds")
    ],
    max_time: Annotated[
        float, typer.Option("--max", help="Longest exposure in seconds")
    ],
    linear: Annotated[
        bool,
        typer.Option("--linear", help="Space exposures linearly instead of geometrically"),
    ] = False,
) -> None:
    """Show the exposure schedule of a calibration grid.

    Grids that `export` would reject are reported as errors.
    """
    spec = CalibrationSpec(
        rows=rows,
        columns=columns,
        min_time_s=min_time,
        max_time_s=max_time,
        geometric=not linear,
    )
    try:
        validate_calibration(spec)
        cumulative = calculate_exposure_times(spec)
    except PlatemaskError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    print_schedule(rows, columns, cumulative, incremental_durations(cumulative))


def _format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable form.

    Args:
        size_bytes: Size in bytes

    Returns:
        Human-readable file size (e.g., "428 KB")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
