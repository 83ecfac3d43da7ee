# Core module for Image Link Analyzer
# Contains interfaces and implementations for QR scanning, OCR and URL extraction

from core.interfaces.qr_detector_interface import IQrDetector, QrDetectionResult, QrLocation
from core.interfaces.ocr_extractor_interface import IOcrExtractor, OcrResult, TextBlock
from core.interfaces.text_processor_interface import ITextProcessor
from core.image.raster_image import RasterImage, ImageLoadError

__all__ = [
    "IQrDetector",
    "QrDetectionResult",
    "QrLocation",
    "IOcrExtractor",
    "OcrResult",
    "TextBlock",
    "ITextProcessor",
    "RasterImage",
    "ImageLoadError",
]
