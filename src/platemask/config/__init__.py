"""Configuration management for platemask.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments, JSON printer profiles or defaults.

Key classes:
- PrinterProfile: Panel resolution, pixel pitch, rotation and mirror flags
- PlacementOptions: Anchor, offset, exposure times and calibration grid
- CalibrationSpec: Exposure calibration grid settings
- PlatemaskSettings: Main application settings
"""

from platemask.config.settings import (
    AnchorCorner,
    CalibrationSpec,
    LoggingConfig,
    PlacementOptions,
    PlatemaskSettings,
    PrinterProfile,
    ProcessingConfig,
    RenderConfig,
    get_default_settings,
    load_printer_profile,
)

__all__ = [
    "AnchorCorner",
    "CalibrationSpec",
    "LoggingConfig",
    "PlacementOptions",
    "PlatemaskSettings",
    "PrinterProfile",
    "ProcessingConfig",
    "RenderConfig",
    "get_default_settings",
    "load_printer_profile",
]
