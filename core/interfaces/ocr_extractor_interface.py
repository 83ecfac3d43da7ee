"""
OCR Extractor Interface Module.

This module defines the interface and data classes for OCR text extraction.
Follows the Interface Segregation Principle (ISP) from SOLID.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Any


@dataclass
class TextBlock:
    """
    A single text line extracted by OCR.

    Attributes:
        text: Extracted text content
        confidence: OCR confidence score (0-1)
        bbox: Bounding box as list of 4 corner points [[x,y], ...]
    """
    text: str
    confidence: float
    bbox: List[List[float]]


@dataclass
class OcrResult:
    """
    Result of OCR extraction.

    A failed recognition is reported through success/errorMessage
    with empty text, never as a raised exception.

    Attributes:
        text: Recognized text, one line per text line in the image
        textBlocks: Per-line blocks when the engine provides them
        success: Whether the engine completed
        errorMessage: Failure description if success is False
        rawResult: Raw result from OCR engine for debugging
    """
    text: str = ""
    textBlocks: List[TextBlock] = field(default_factory=list)
    success: bool = True
    errorMessage: str = ""
    rawResult: Any = None


class IOcrExtractor(ABC):
    """
    Interface for OCR text extractor.

    Implementations recognize text from an encoded (lossless) image
    buffer using a single fixed language model.
    """

    @abstractmethod
    def extract(self, imageBytes: bytes) -> OcrResult:
        """
        Extract text from an encoded image.

        Args:
            imageBytes: Encoded image file contents (e.g. PNG)

        Returns:
            OcrResult with recognized text
        """
        pass
