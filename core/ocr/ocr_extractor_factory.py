"""
OCR Extractor Factory Module.

Factory function for creating OCR extractor instances based on backend selection.
Supports Tesseract (pytesseract) and PaddleOCR backends.

Follows:
- OCP (Open/Closed Principle): Easy to extend with new backends
- DIP (Dependency Inversion): Returns IOcrExtractor interface
- Factory Pattern: Encapsulates object creation logic
"""

import logging
from typing import List, Optional

from core.interfaces.ocr_extractor_interface import IOcrExtractor


logger = logging.getLogger(__name__)


def createOcrExtractor(
    backend: str = "tesseract",
    # Tesseract params
    tesseractCmd: Optional[str] = None,
    # Paddle params (prefixed with 'paddle')
    paddleDevice: str = "cpu",
    paddleCpuThreads: int = 4
) -> IOcrExtractor:
    """
    Factory function to create OCR extractor based on backend.

    Supports:
    - "tesseract": Tesseract engine via pytesseract (default)
    - "paddle": PaddleOCR 3.x (optional extra)

    Args:
        backend: Backend name ("tesseract" or "paddle").
        tesseractCmd: (tesseract) Path to tesseract binary, auto-detected if None.
        paddleDevice: (paddle) Inference device ('cpu' or 'gpu').
        paddleCpuThreads: (paddle) Number of CPU threads.

    Returns:
        IOcrExtractor: OCR extractor instance.

    Raises:
        ValueError: If backend is invalid or not supported.
    """
    backend = backend.lower().strip()

    supportedBackends = getSupportedOcrBackends()
    if backend not in supportedBackends:
        errorMsg = (
            f"Invalid OCR backend: '{backend}'. "
            f"Supported backends: {supportedBackends}"
        )
        logger.error(errorMsg)
        raise ValueError(errorMsg)

    if backend == "paddle":
        # paddleocr itself is imported lazily on first extract()
        from core.ocr.paddle_ocr_extractor import PaddleOcrExtractor

        logger.info(f"Creating PaddleOCR extractor (device={paddleDevice})")
        return PaddleOcrExtractor(device=paddleDevice, cpuThreads=paddleCpuThreads)

    from core.ocr.tesseract_ocr_extractor import TesseractOcrExtractor

    logger.info("Creating Tesseract OCR extractor")
    return TesseractOcrExtractor(tesseractCmd=tesseractCmd)


def getSupportedOcrBackends() -> List[str]:
    """
    Get list of supported OCR backend names.

    Returns:
        List[str]: List of backend names ["tesseract", "paddle"].
    """
    return ["tesseract", "paddle"]
