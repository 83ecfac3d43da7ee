"""
Pyzbar QR Detector Implementation.

This module provides single-code QR detection using the pyzbar library
(requires the zbar system library).
Follows the Single Responsibility Principle (SRP) and
Dependency Inversion Principle (DIP) from SOLID.
"""

import logging
from typing import Optional, List

import cv2
import numpy as np
from pyzbar.pyzbar import decode, ZBarSymbol, Decoded

from core.interfaces.qr_detector_interface import (
    IQrDetector,
    QrDetectionResult,
    QrLocation
)


class PyzbarQrDetector(IQrDetector):
    """
    QR code detector using pyzbar library.

    zbar reports symbols in no particular order; the first one is used
    and its bounding rect's top-left is the code location.
    """

    def __init__(
        self,
        symbolTypes: Optional[List[ZBarSymbol]] = None,
        tryInvert: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize PyzbarQrDetector.

        Args:
            symbolTypes: List of barcode types to detect (default: QRCODE only)
            tryInvert: Retry on the inverted image when nothing is found
            logger: Logger instance for debug output
        """
        self._symbolTypes = symbolTypes or [ZBarSymbol.QRCODE]
        self._tryInvert = tryInvert
        self._logger = logger or logging.getLogger(__name__)

    def detect(self, image: np.ndarray) -> Optional[QrDetectionResult]:
        """
        Detect QR code in an image.

        Args:
            image: Input image (BGR or grayscale numpy array)

        Returns:
            QrDetectionResult if QR code found, None otherwise
        """
        # pyzbar only reads the first channel of a 3-channel array
        if len(image.shape) == 3:
            grayImage = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
        else:
            grayImage = image

        inverted = False
        results: List[Decoded] = decode(grayImage, symbols=self._symbolTypes)
        if not results and self._tryInvert:
            inverted = True
            results = decode(cv2.bitwise_not(grayImage), symbols=self._symbolTypes)

        if not results:
            self._logger.debug("No QR code detected in image")
            return None

        # Take the first QR code found
        qr = results[0]
        text = qr.data.decode('utf-8', errors='replace')

        self._logger.debug(
            f"QR code detected at ({qr.rect.left}, {qr.rect.top})"
            f"{' [inverted]' if inverted else ''}: {text}"
        )

        return QrDetectionResult(
            text=text,
            location=QrLocation(qr.rect.left, qr.rect.top),
            polygon=[(p.x, p.y) for p in qr.polygon],
            rect=(qr.rect.left, qr.rect.top, qr.rect.width, qr.rect.height),
            inverted=inverted
        )
