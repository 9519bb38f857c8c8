"""Logging utilities for Platemask."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class ExportStats:
    """Statistics from an export run."""

    layer_count: int = 0
    exposure_count: int = 0
    error_count: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    layer_timings_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate export duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_layer_time_ms(self) -> float | None:
        if not self.layer_timings_ms:
            return None
        return sum(self.layer_timings_ms) / len(self.layer_timings_ms)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging to the console and an optional file.

    Args:
        log_file: Path to log file (no file logging if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("platemask")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class ExportLogger:
    """Logger for tracking export progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ExportStats()

    def log_layer_start(self, layer_id: str, side: str) -> None:
        """Log start of layer export."""
        self._logger.debug("Exporting layer", layer=layer_id, side=side)

    def log_layer_mirrored(self, layer_id: str, transform: str) -> None:
        """Log the mirror applied to a layer's artwork."""
        self._logger.debug("Layer mirrored", layer=layer_id, transform=transform)

    def log_layer_placed(
        self,
        layer_id: str,
        board_size: tuple[int, int],
        anchor: tuple[float, float],
    ) -> None:
        """Log where a board landed on the plate."""
        self._logger.debug(
            "Board placed",
            layer=layer_id,
            board_px=list(board_size),
            anchor_px=[round(anchor[0], 1), round(anchor[1], 1)],
        )

    def log_layer_complete(
        self,
        layer_id: str,
        filename: str,
        exposures: int,
        duration_ms: float,
    ) -> None:
        """Log successful layer export."""
        self._logger.info(
            "Layer exported",
            layer=layer_id,
            file=filename,
            exposures=exposures,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.layer_count += 1
        self._stats.exposure_count += exposures
        self._stats.layer_timings_ms.append(duration_ms)

    def log_layer_error(
        self,
        layer_id: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log layer export error."""
        self._logger.error(
            "Layer export failed",
            layer=layer_id,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((layer_id, str(error)))

    @property
    def stats(self) -> ExportStats:
        """Get current export statistics."""
        return self._stats
