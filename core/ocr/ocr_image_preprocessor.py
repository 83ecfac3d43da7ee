"""
OCR Image Preprocessor Module

Prepares an image for text recognition: rotate, greyscale, mild contrast
boost, then encode to a lossless PNG buffer for the OCR engine.

Follows SRP: Only handles OCR input preparation.
"""

import logging
from typing import Optional

from core.image.raster_image import RasterImage


class OcrImagePreprocessor:
    """
    Builds the encoded buffer handed to an IOcrExtractor.

    The source image is cloned for each orientation, so one loaded image
    can be prepared for several angles.
    """

    DEFAULT_CONTRAST = 0.3

    def __init__(
        self,
        contrastAmount: float = DEFAULT_CONTRAST,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize OcrImagePreprocessor.

        Args:
            contrastAmount: Contrast boost in [-1, 1) applied after greyscale.
            logger: Logger instance for debug output.
        """
        self._contrastAmount = contrastAmount
        self._logger = logger or logging.getLogger(__name__)

    @property
    def contrastAmount(self) -> float:
        """Get contrast boost amount."""
        return self._contrastAmount

    def prepare(self, image: RasterImage, angle: int = 0) -> bytes:
        """
        Produce the OCR input buffer for one orientation.

        Args:
            image: Loaded image (not modified).
            angle: Clockwise rotation in degrees (multiple of 90).

        Returns:
            PNG-encoded bytes.
        """
        prepared = image.clone().rotate(angle).greyscale().contrast(self._contrastAmount)
        buffer = prepared.toBuffer(".png")

        self._logger.debug(
            f"Prepared OCR input: angle={angle}, size={prepared.width}x{prepared.height}, "
            f"{len(buffer)} bytes"
        )
        return buffer
