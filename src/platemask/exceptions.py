"""Exception hierarchy for Platemask."""


class PlatemaskError(Exception):
    """Base exception for all Platemask errors."""

    pass


class MarkupError(PlatemaskError):
    """Errors related to layer artwork markup."""

    pass


class MalformedMarkupError(MarkupError):
    """Markup cannot be parsed or lacks size/view window attributes."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Malformed layer markup: {reason}")


class ConfigurationError(PlatemaskError):
    """Invalid export configuration."""

    pass


class DegenerateCalibrationError(ConfigurationError):
    """Calibration grid cannot produce a valid exposure schedule."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid calibration grid: {reason}")


class MissingExposureTimeError(ConfigurationError):
    """No exposure time was configured for a layer."""

    def __init__(self, layer_id: str) -> None:
        self.layer_id = layer_id
        super().__init__(f"No exposure time configured for layer '{layer_id}'")


class CollaboratorError(PlatemaskError):
    """Errors raised by the rasterizer or the file builder."""

    pass


class RasterizationError(CollaboratorError):
    """The rasterizer rejected a layer."""

    def __init__(self, layer_id: str, reason: str) -> None:
        self.layer_id = layer_id
        self.reason = reason
        super().__init__(f"Rasterization failed for layer '{layer_id}': {reason}")


class EncodingError(CollaboratorError):
    """The file builder rejected a layer."""

    def __init__(self, layer_id: str, reason: str) -> None:
        self.layer_id = layer_id
        self.reason = reason
        super().__init__(f"Encoding failed for layer '{layer_id}': {reason}")


class LayerExportError(PlatemaskError):
    """Export of a specific layer failed."""

    def __init__(self, layer_id: str, reason: str) -> None:
        self.layer_id = layer_id
        self.reason = reason
        super().__init__(f"Error exporting layer '{layer_id}': {reason}")
