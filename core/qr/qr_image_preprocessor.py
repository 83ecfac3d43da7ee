"""
QR Image Preprocessor Module.

This module prepares images for QR code detection:
- Upscales small images so QR modules clear the decoder's resolution floor
- Produces the preprocessing variants tried by the multi-code scanner

Variants, in the order they are tried:
1. "original": unmodified
2. "greyscale_contrast": greyscale + medium contrast boost
3. "greyscale_normalized": greyscale + histogram stretch
4. "greyscale_high_contrast": greyscale + strong contrast + brightness lift

Every variant is built from its own clone, so the input is never mutated.

Follows the Single Responsibility Principle (SRP) from SOLID.
"""

import logging
from typing import Callable, Iterator, List, Optional, Tuple

from core.image.raster_image import RasterImage


class QrImagePreprocessor:
    """
    Image preprocessor for QR code detection.

    Upscaling rationale: decoders miss small codes, so any image with a
    side below targetMinSize is scaled up (bicubic) until both sides reach it.
    """

    # Default minimum side length before scanning
    DEFAULT_TARGET_MIN_SIZE = 800

    MEDIUM_CONTRAST = 0.5
    HIGH_CONTRAST = 0.8
    BRIGHTNESS_LIFT = 0.1

    def __init__(
        self,
        targetMinSize: int = DEFAULT_TARGET_MIN_SIZE,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize QrImagePreprocessor.

        Args:
            targetMinSize: Images with width or height below this are upscaled
                           so that both sides reach it (default: 800).
            logger: Logger instance for debug output.
        """
        self._targetMinSize = targetMinSize
        self._logger = logger or logging.getLogger(__name__)

        self._variants: List[Tuple[str, Callable[[RasterImage], RasterImage]]] = [
            ("original", lambda img: img),
            ("greyscale_contrast",
             lambda img: img.greyscale().contrast(self.MEDIUM_CONTRAST)),
            ("greyscale_normalized",
             lambda img: img.greyscale().normalize()),
            ("greyscale_high_contrast",
             lambda img: img.greyscale().contrast(self.HIGH_CONTRAST).brightness(self.BRIGHTNESS_LIFT)),
        ]

        self._logger.info(
            f"QrImagePreprocessor initialized "
            f"(targetMinSize={targetMinSize}px, variants={self.variantNames})"
        )

    @property
    def targetMinSize(self) -> int:
        """Get minimum side length used for upscaling."""
        return self._targetMinSize

    @property
    def variantNames(self) -> List[str]:
        """Names of the preprocessing variants, in the order they are tried."""
        return [name for name, _ in self._variants]

    def scaleFactorFor(self, width: int, height: int) -> float:
        """
        Scale factor upscale() applies to an image of the given size.

        Returns:
            float: 1.0 when both sides already reach targetMinSize
        """
        if width >= self._targetMinSize and height >= self._targetMinSize:
            return 1.0
        return max(self._targetMinSize / width, self._targetMinSize / height)

    def upscale(self, image: RasterImage) -> RasterImage:
        """
        Return a working copy of the image, upscaled if it is small.

        Args:
            image: Loaded input image (not modified).

        Returns:
            New RasterImage.
        """
        working = image.clone()

        w, h = working.size
        scaleFactor = self.scaleFactorFor(w, h)
        if scaleFactor != 1.0:
            working.scale(scaleFactor, bicubic=True)
            self._logger.debug(
                f"Upscale: {w}x{h} → {working.width}x{working.height} "
                f"({scaleFactor:.3f}x)"
            )

        return working

    def iterVariants(self, image: RasterImage) -> Iterator[Tuple[str, RasterImage]]:
        """
        Generate preprocessing variants of an image.

        Args:
            image: Working image (not modified).

        Yields:
            Tuple of (variantName, processedImage).
        """
        for name, apply in self._variants:
            yield name, apply(image.clone())
