"""
QR Detector Factory Module.

Factory function for creating QR detector instances based on backend selection.
Supports ZXing-cpp and pyzbar backends.

Follows:
- OCP (Open/Closed Principle): Easy to extend with new backends
- DIP (Dependency Inversion): Returns IQrDetector interface
- Factory Pattern: Encapsulates object creation logic
"""

import logging
from typing import List

from core.interfaces.qr_detector_interface import IQrDetector


logger = logging.getLogger(__name__)


def createQrDetector(
    backend: str = "zxing",
    tryInvert: bool = True,
    # ZXing params (prefixed with 'zxing')
    zxingTryRotate: bool = True,
    zxingTryDownscale: bool = True
) -> IQrDetector:
    """
    Factory function to create QR detector based on backend.

    Supports:
    - "zxing": ZXing-cpp backend (fast, cross-platform)
    - "pyzbar": zbar backend (needs the libzbar system library)

    Args:
        backend: Backend name ("zxing" or "pyzbar").
        tryInvert: Retry on the inverted image when nothing is found.
        zxingTryRotate: (zxing) Try rotated barcodes (90/270 degrees).
        zxingTryDownscale: (zxing) Try downscaled versions for better detection.

    Returns:
        IQrDetector: QR detector instance implementing IQrDetector interface.

    Raises:
        ValueError: If backend is invalid or not supported.
        ImportError: If required library is not installed.

    Examples:
        >>> detector = createQrDetector(backend="zxing")
        >>> detector = createQrDetector(backend="pyzbar", tryInvert=False)
    """
    # Normalize backend name
    backend = backend.lower().strip()

    supportedBackends = getSupportedQrBackends()
    if backend not in supportedBackends:
        errorMsg = (
            f"Invalid QR backend: '{backend}'. "
            f"Supported backends: {supportedBackends}"
        )
        logger.error(errorMsg)
        raise ValueError(errorMsg)

    if backend == "pyzbar":
        return _createPyzbarDetector(tryInvert=tryInvert)

    return _createZxingDetector(
        tryInvert=tryInvert,
        zxingTryRotate=zxingTryRotate,
        zxingTryDownscale=zxingTryDownscale
    )


def _createZxingDetector(
    tryInvert: bool,
    zxingTryRotate: bool,
    zxingTryDownscale: bool
) -> IQrDetector:
    """
    Create ZXing QR detector instance.

    zxing-cpp itself is imported lazily on first detect().
    """
    from core.qr.zxing_qr_detector import ZxingQrDetector

    logger.info(
        f"Creating ZXing QR detector "
        f"(tryRotate={zxingTryRotate}, tryDownscale={zxingTryDownscale})"
    )

    return ZxingQrDetector(
        tryRotate=zxingTryRotate,
        tryDownscale=zxingTryDownscale,
        tryInvert=tryInvert
    )


def _createPyzbarDetector(tryInvert: bool) -> IQrDetector:
    """
    Create pyzbar QR detector instance.

    Raises:
        ImportError: If pyzbar or the zbar shared library is missing.
    """
    try:
        from core.qr.pyzbar_qr_detector import PyzbarQrDetector

        logger.info("Creating pyzbar QR detector")
        return PyzbarQrDetector(tryInvert=tryInvert)

    except ImportError as e:
        errorMsg = (
            "pyzbar/zbar dependency is missing. Install system library 'libzbar0' "
            "and run: pip install pyzbar"
        )
        logger.error(errorMsg)
        logger.error(f"Import error details: {e}")
        raise ImportError(errorMsg) from e


def getSupportedQrBackends() -> List[str]:
    """
    Get list of supported QR backend names.

    Returns:
        List[str]: List of backend names ["zxing", "pyzbar"].
    """
    return ["zxing", "pyzbar"]
