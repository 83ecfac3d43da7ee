"""
ZXing QR Code Detector Implementation.

This module provides single-code QR detection using the zxing-cpp library.
zxing-cpp is a high-performance C++ implementation with Python bindings.

Follows the Single Responsibility Principle (SRP) from SOLID.
"""

import logging
from typing import Optional

import cv2
import numpy as np

from core.interfaces.qr_detector_interface import (
    IQrDetector,
    QrDetectionResult,
    QrLocation
)


class ZxingQrDetector(IQrDetector):
    """
    QR code detector using zxing-cpp library.

    Returns the first valid QR code zxing reports. When nothing is found
    in the image as given, the inverted image is tried as well
    (light modules on a dark background).
    """

    def __init__(
        self,
        tryRotate: bool = True,
        tryDownscale: bool = True,
        tryInvert: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize ZxingQrDetector.

        Args:
            tryRotate: Try rotated barcodes (90/270 degrees)
            tryDownscale: Try downscaled versions for better detection
            tryInvert: Retry on the inverted image when nothing is found
            logger: Logger instance for debug output
        """
        self._tryRotate = tryRotate
        self._tryDownscale = tryDownscale
        self._tryInvert = tryInvert
        self._logger = logger or logging.getLogger(__name__)
        self._zxingcpp = None

        self._logger.info(
            f"ZxingQrDetector initialized "
            f"(tryRotate={tryRotate}, tryDownscale={tryDownscale}, tryInvert={tryInvert})"
        )

    def _ensureZxing(self) -> None:
        """Lazily import zxing-cpp module."""
        if self._zxingcpp is None:
            try:
                import zxingcpp
                self._zxingcpp = zxingcpp
                self._logger.info("zxing-cpp module loaded successfully")
            except ImportError as e:
                self._logger.error(
                    f"Failed to import zxing-cpp. "
                    f"Please install: pip install zxing-cpp. Error: {e}"
                )
                raise

    def detect(self, image: np.ndarray) -> Optional[QrDetectionResult]:
        """
        Detect and decode one QR code in image.

        Args:
            image: Input image (BGR or grayscale)

        Returns:
            QrDetectionResult if a QR code was found, None otherwise
        """
        self._ensureZxing()

        if len(image.shape) == 3:
            grayImage = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
        else:
            grayImage = image

        result = self._readFirst(grayImage, inverted=False)
        if result is None and self._tryInvert:
            result = self._readFirst(cv2.bitwise_not(grayImage), inverted=True)

        if result is None:
            self._logger.debug("No QR code detected")
        return result

    def _readFirst(self, grayImage: np.ndarray, inverted: bool) -> Optional[QrDetectionResult]:
        """
        Run zxing on a grayscale image and convert the first valid code.

        Args:
            grayImage: Grayscale image
            inverted: Whether grayImage is the inverted input

        Returns:
            QrDetectionResult or None
        """
        # API: read_barcodes(image, formats, try_rotate, try_downscale, ...)
        barcodes = self._zxingcpp.read_barcodes(
            grayImage,
            formats=self._zxingcpp.BarcodeFormat.QRCode,
            try_rotate=self._tryRotate,
            try_downscale=self._tryDownscale
        )

        for barcode in barcodes or []:
            if not barcode.valid:
                continue

            position = barcode.position
            polygon = [
                (position.top_left.x, position.top_left.y),
                (position.top_right.x, position.top_right.y),
                (position.bottom_right.x, position.bottom_right.y),
                (position.bottom_left.x, position.bottom_left.y)
            ]

            xs = [p[0] for p in polygon]
            ys = [p[1] for p in polygon]
            rect = (min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))

            self._logger.debug(
                f"QR code detected at ({position.top_left.x}, {position.top_left.y})"
                f"{' [inverted]' if inverted else ''}: {barcode.text}"
            )

            return QrDetectionResult(
                text=barcode.text,
                location=QrLocation(position.top_left.x, position.top_left.y),
                polygon=polygon,
                rect=rect,
                inverted=inverted
            )

        return None
