"""
Tesseract OCR Extractor Implementation.

This module provides OCR text extraction using the Tesseract engine through
pytesseract. The image buffer is opened with Pillow and recognized with the
English model, keeping the spacing between words so URLs are not merged
with surrounding text.

Follows the Single Responsibility Principle (SRP) from SOLID.
"""

import logging
import os
import shutil
from io import BytesIO
from pathlib import Path
from typing import Optional

import pytesseract
from PIL import Image

from core.interfaces.ocr_extractor_interface import IOcrExtractor, OcrResult


class TesseractOcrExtractor(IOcrExtractor):
    """
    OCR text extractor using Tesseract.

    Tesseract output keeps the line breaks of the image, which the
    URL extractor relies on to re-join wrapped URLs.
    """

    # Single fixed language model
    LANGUAGE = 'eng'
    TESSERACT_CONFIG = '-c preserve_interword_spaces=1'

    COMMON_PATHS = [
        "/usr/bin/tesseract",
        "/usr/local/bin/tesseract",
        "/opt/homebrew/bin/tesseract",
        "/usr/local/opt/tesseract/bin/tesseract",
    ]

    def __init__(
        self,
        tesseractCmd: Optional[str] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize TesseractOcrExtractor.

        Args:
            tesseractCmd: Path to the tesseract binary. Auto-detected when None.
            logger: Logger instance for debug output
        """
        self._logger = logger or logging.getLogger(__name__)

        cmd = tesseractCmd or self._findTesseract()
        if cmd:
            pytesseract.pytesseract.tesseract_cmd = cmd
            self._logger.info(f"Using tesseract at {cmd}")
        else:
            self._logger.warning("tesseract binary not found on PATH; OCR calls will fail")

        self._logger.info(f"TesseractOcrExtractor initialized with lang={self.LANGUAGE}")

    @classmethod
    def _findTesseract(cls) -> Optional[str]:
        """Find tesseract binary on PATH or in common installation locations."""
        tesseractPath = shutil.which("tesseract")
        if tesseractPath:
            return tesseractPath

        for path in cls.COMMON_PATHS:
            if Path(path).exists() and os.access(path, os.X_OK):
                return path

        return None

    def extract(self, imageBytes: bytes) -> OcrResult:
        """
        Extract text from an encoded image using Tesseract.

        Args:
            imageBytes: Encoded image (PNG)

        Returns:
            OcrResult with recognized text. Engine errors (missing binary,
            unreadable buffer, Tesseract failure) give success=False.
        """
        try:
            with Image.open(BytesIO(imageBytes)) as image:
                text = pytesseract.image_to_string(
                    image,
                    lang=self.LANGUAGE,
                    config=self.TESSERACT_CONFIG
                )

        except pytesseract.TesseractError as e:
            self._logger.error(f"Tesseract failed: {e}")
            return OcrResult(success=False, errorMessage=str(e))

        except Exception as e:
            self._logger.error(f"Error during OCR extraction: {e}")
            return OcrResult(success=False, errorMessage=str(e))

        self._logger.info(f"OCR extracted {len(text)} characters")
        self._logger.debug(f"OCR text: {text!r}")

        return OcrResult(text=text, rawResult=text)
