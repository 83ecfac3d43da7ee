"""QR Detection module."""

from core.qr.zxing_qr_detector import ZxingQrDetector
from core.qr.qr_detector_factory import (
    createQrDetector,
    getSupportedQrBackends
)
from core.qr.qr_image_preprocessor import QrImagePreprocessor
from core.qr.multi_qr_scanner import (
    MultiQrScanner,
    QrResult,
    RegionScanOutcome,
    isSimilarLocation
)

__all__ = [
    'ZxingQrDetector',
    'createQrDetector',
    'getSupportedQrBackends',
    'QrImagePreprocessor',
    'MultiQrScanner',
    'QrResult',
    'RegionScanOutcome',
    'isSimilarLocation'
]
