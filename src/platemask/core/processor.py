"""Export orchestration for the mask pipeline.

This module coordinates the full export workflow for a list of board
layers, sequentially or with a thread pool.

Key components:
- MaskExporter: Main orchestrator class for exporting layers
"""

import time
import traceback
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor

import structlog
from PIL import Image

from platemask.config import (
    PlacementOptions,
    PlatemaskSettings,
    PrinterProfile,
    get_default_settings,
)
from platemask.core.assembler import OutputAssembler
from platemask.core.calibration import CalibrationGridRenderer
from platemask.core.compositor import PlateCanvas, PlateCompositor
from platemask.core.mirror import apply_mirror, mirror_matrix
from platemask.core.schedule import validate_calibration
from platemask.domain import BoardLayer, ExposureCell, OutputRecord
from platemask.exceptions import (
    ConfigurationError,
    LayerExportError,
    MissingExposureTimeError,
    PlatemaskError,
    RasterizationError,
)
from platemask.io import CairoSvgRasterizer, FileBuilder, Rasterizer, parse_markup
from platemask.utils import ExportLogger, ExportStats


class MaskExporter:
    """Orchestrates export of board layers into printer masks.

    Manages the complete workflow for every layer:
    1. Parse the layer markup and mirror it for its board side
    2. Rasterize the board at the printer's pixel pitch
    3. Place the board on the plate and correct the plate orientation
    4. Capture one exposure, or a calibration grid of exposures
    5. Derive the preview from the captured pixels and build the output file

    Layers are independent; only output filenames depend on input order and
    are resolved before any layer is rendered. The first failure aborts the
    export and no partial results are returned.

    Example:
        exporter = MaskExporter(profile, options, ZipArchiveBuilder())
        records = exporter.export(layers)
    """

    def __init__(
        self,
        profile: PrinterProfile,
        options: PlacementOptions,
        file_builder: FileBuilder,
        rasterizer: Rasterizer | None = None,
        settings: PlatemaskSettings | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the exporter.

        Args:
            profile: Target printer
            options: Placement, exposure times and calibration grid
            file_builder: Encodes each layer's exposures into a file
            rasterizer: Renders SVG markup (default: CairoSvgRasterizer)
            settings: Application settings (default: get_default_settings())
            logger: structlog logger (default: the "platemask" logger)
        """
        self.profile = profile
        self.options = options
        self.file_builder = file_builder
        self.rasterizer = rasterizer if rasterizer is not None else CairoSvgRasterizer()
        self.settings = settings if settings is not None else get_default_settings()
        self.logger = logger if logger is not None else structlog.get_logger("platemask")
        self.export_logger = ExportLogger(self.logger)
        self.compositor = PlateCompositor(profile)

    @property
    def stats(self) -> ExportStats:
        return self.export_logger.stats

    def export(
        self,
        layers: Sequence[BoardLayer],
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, str], None] | None = None,
    ) -> list[OutputRecord]:
        """Export layers into output records.

        Args:
            layers: Layers to export, in output order
            max_workers: Worker threads (None = settings; None or 1 = sequential)
            progress_callback: Optional callback(completed, total, layer_id)

        Returns:
            One OutputRecord per layer, in input order

        Raises:
            ConfigurationError: If the calibration grid or exposure times are invalid
            MalformedMarkupError: If a layer's markup cannot be used
            RasterizationError: If the rasterizer fails
            EncodingError: If the file builder fails
            LayerExportError: If a layer fails for any other reason
        """
        stats = self.stats
        stats.start_time = time.time()

        if max_workers is None:
            max_workers = self.settings.processing.max_workers

        self.logger.info(
            "Starting export",
            printer=self.profile.name,
            layers=len(layers),
            anchor=self.options.anchor_corner.value,
            calibration=self.options.calibration is not None,
            max_workers=max_workers,
        )

        self._check_configuration(layers)

        assembler = OutputAssembler(self.profile, self.file_builder)
        filenames = [assembler.resolve_filename(layer.filename) for layer in layers]

        if max_workers is None or max_workers <= 1 or len(layers) <= 1:
            records = self._export_sequential(layers, filenames, assembler, progress_callback)
        else:
            records = self._export_parallel(
                layers, filenames, assembler, max_workers, progress_callback
            )

        stats.end_time = time.time()

        self.logger.info(
            "Export complete",
            layers=stats.layer_count,
            exposures=stats.exposure_count,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return records

    def _check_configuration(self, layers: Sequence[BoardLayer]) -> None:
        """Reject unusable configuration before any layer is rendered."""
        calibration = self.options.calibration
        if calibration is not None:
            validate_calibration(calibration)
            return

        for layer in layers:
            exposure_time = self.options.exposure_times.get(layer.id)
            if exposure_time is None:
                raise MissingExposureTimeError(layer.id)
            if exposure_time <= 0:
                raise ConfigurationError(
                    f"Exposure time for layer '{layer.id}' must be positive "
                    f"(got {exposure_time}s)"
                )

    def _export_sequential(
        self,
        layers: Sequence[BoardLayer],
        filenames: list[str],
        assembler: OutputAssembler,
        progress_callback: Callable[[int, int, str], None] | None,
    ) -> list[OutputRecord]:
        records: list[OutputRecord] = []
        for layer, filename in zip(layers, filenames):
            try:
                record, duration_ms = self._export_layer(layer, filename, assembler)
            except Exception as e:
                self.export_logger.log_layer_error(layer.id, e, traceback.format_exc())
                raise

            self._record_completion(record, duration_ms)
            records.append(record)
            if progress_callback is not None:
                progress_callback(len(records), len(layers), layer.id)

        return records

    def _export_parallel(
        self,
        layers: Sequence[BoardLayer],
        filenames: list[str],
        assembler: OutputAssembler,
        max_workers: int,
        progress_callback: Callable[[int, int, str], None] | None,
    ) -> list[OutputRecord]:
        self.logger.info(
            "Starting parallel export",
            layer_count=len(layers),
            max_workers=max_workers,
        )

        records: list[OutputRecord] = []
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures: list[Future] = [
                executor.submit(self._export_layer, layer, filename, assembler)
                for layer, filename in zip(layers, filenames)
            ]

            # Collect in submission order so results follow input order
            for layer, future in zip(layers, futures):
                try:
                    record, duration_ms = future.result()
                except Exception as e:
                    self.export_logger.log_layer_error(layer.id, e, traceback.format_exc())
                    for pending in futures:
                        pending.cancel()
                    raise

                self._record_completion(record, duration_ms)
                records.append(record)
                if progress_callback is not None:
                    progress_callback(len(records), len(layers), layer.id)

        return records

    def _record_completion(self, record: OutputRecord, duration_ms: float) -> None:
        self.export_logger.log_layer_complete(
            layer_id=record.layer_id,
            filename=record.filename,
            exposures=self._exposure_count(),
            duration_ms=duration_ms,
        )

    def _exposure_count(self) -> int:
        calibration = self.options.calibration
        return calibration.steps if calibration is not None else 1

    def _export_layer(
        self,
        layer: BoardLayer,
        filename: str,
        assembler: OutputAssembler,
    ) -> tuple[OutputRecord, float]:
        """Render and encode a single layer.

        Returns:
            Tuple of (record, duration in milliseconds)
        """
        start_time = time.time()
        self.export_logger.log_layer_start(layer.id, layer.side.value)

        try:
            cells, preview = self.render_layer(layer)
            record = assembler.assemble(layer, filename, cells, preview)
        except PlatemaskError:
            raise
        except Exception as e:
            raise LayerExportError(layer.id, str(e)) from e

        return record, (time.time() - start_time) * 1000

    def render_layer(self, layer: BoardLayer) -> tuple[list[ExposureCell], Image.Image]:
        """Produce a layer's exposure cells and its preview.

        Args:
            layer: Layer to render

        Returns:
            Tuple of (exposure cells, working-orientation preview)

        Raises:
            MalformedMarkupError: If the markup cannot be used
            RasterizationError: If the rasterizer fails
        """
        markup = parse_markup(layer.markup)
        flip_horizontal, flip_vertical = self.profile.flips_for(layer.side)
        mirrored = apply_mirror(
            markup,
            flip_horizontal,
            flip_vertical,
            crisp_edges=self.settings.render.crisp_edges,
        )
        if flip_horizontal or flip_vertical:
            self.export_logger.log_layer_mirrored(
                layer.id,
                mirror_matrix(markup.view_box, flip_horizontal, flip_vertical).to_svg(),
            )

        board_size = self.compositor.board_size(markup)
        board = self._rasterize(layer, mirrored, board_size)

        anchor = self.compositor.anchor_for(
            self.options.anchor_corner,
            self.options.anchor_offset_mm,
            board_size,
        )
        self.export_logger.log_layer_placed(layer.id, board_size, anchor)

        canvas = self.compositor.compose(board, anchor, board_size, layer.inverted)
        cells = self._expose(layer, canvas)

        # The first capture is the full board before any calibration masking
        preview = self.compositor.preview(cells[0].raster)
        return cells, preview

    def _rasterize(
        self,
        layer: BoardLayer,
        markup: str,
        board_size: tuple[int, int],
    ) -> Image.Image:
        width, height = board_size
        try:
            return self.rasterizer.rasterize(markup, width, height)
        except Exception as e:
            raise RasterizationError(layer.id, str(e)) from e

    def _expose(self, layer: BoardLayer, canvas: PlateCanvas) -> list[ExposureCell]:
        calibration = self.options.calibration
        if calibration is not None:
            return CalibrationGridRenderer(calibration).render(canvas)

        exposure_time = self.options.exposure_times.get(layer.id)
        if exposure_time is None:
            raise MissingExposureTimeError(layer.id)
        return [ExposureCell(duration_s=exposure_time, raster=canvas.snapshot())]
