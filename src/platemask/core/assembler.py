"""Output assembly for exported layers.

This module turns finished exposures into OutputRecords: it gives every
layer a unique output filename, hands the exposures to the file builder and
encodes the preview for display.
"""

from collections.abc import Sequence

from PIL import Image

from platemask.config import PrinterProfile
from platemask.domain import BoardLayer, ExposureCell, OutputRecord
from platemask.exceptions import EncodingError, PlatemaskError
from platemask.io.writer import FileBuilder, encode_png


class FilenameDeduplicator:
    """Issues unique output filenames within one export run.

    The source extension (text after the last dot) is replaced by the output
    format. The first use of a name keeps it; later uses insert ``_2``,
    ``_3``, ... before the extension. Names are issued in call order, so
    callers must resolve layers in input order.

    Example:
        names = FilenameDeduplicator("pwms")
        names.resolve("a.svg")  # "a.pwms"
        names.resolve("a.svg")  # "a_2.pwms"
    """

    def __init__(self, file_format: str) -> None:
        self.file_format = file_format
        self._counts: dict[str, int] = {}
        self._issued: set[str] = set()

    def resolve(self, filename: str) -> str:
        """Issue the output filename for a candidate name.

        Args:
            filename: Candidate filename, with or without an extension

        Returns:
            Filename not issued before in this run
        """
        stem = filename.rsplit(".", 1)[0] if "." in filename else filename

        count = self._counts.get(stem, 0)
        while True:
            count += 1
            candidate = stem if count == 1 else f"{stem}_{count}"
            output_name = f"{candidate}.{self.file_format}"
            if output_name not in self._issued:
                break

        self._counts[stem] = count
        self._issued.add(output_name)
        return output_name


class OutputAssembler:
    """Builds the OutputRecord for each exported layer.

    Example:
        assembler = OutputAssembler(profile, ZipArchiveBuilder())
        filename = assembler.resolve_filename(layer.filename)
        record = assembler.assemble(layer, filename, cells, preview)
    """

    def __init__(self, profile: PrinterProfile, file_builder: FileBuilder) -> None:
        self.profile = profile
        self.file_builder = file_builder
        self.filenames = FilenameDeduplicator(profile.file_format)

    def resolve_filename(self, filename: str) -> str:
        return self.filenames.resolve(filename)

    def preview_pixels(self, preview: Image.Image) -> bytes:
        """RGBA bytes of the preview scaled to the profile's preview size."""
        thumbnail = preview.convert("RGBA").resize(
            self.profile.preview_resolution,
            resample=Image.Resampling.LANCZOS,
        )
        return thumbnail.tobytes()

    def assemble(
        self,
        layer: BoardLayer,
        filename: str,
        cells: Sequence[ExposureCell],
        preview: Image.Image,
    ) -> OutputRecord:
        """Encode a layer's exposures and wrap them in an OutputRecord.

        Args:
            layer: Source layer
            filename: Output filename from resolve_filename()
            cells: Exposure cells in print order
            preview: Working-orientation preview image

        Returns:
            OutputRecord for the layer

        Raises:
            EncodingError: If the file builder fails
        """
        try:
            artifact = self.file_builder.build(
                list(cells),
                self.preview_pixels(preview),
                self.profile,
            )
        except PlatemaskError:
            raise
        except Exception as e:
            raise EncodingError(layer.id, str(e)) from e

        return OutputRecord(
            layer_id=layer.id,
            layer=layer,
            preview_png=encode_png(preview),
            filename=filename,
            artifact=artifact,
        )
