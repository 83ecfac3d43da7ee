"""
OCR Service Interface Module.

Defines the interface for OCR operations (Step 2 of the pipeline).
Responsible for recognizing on-screen text and turning it into URLs.

Follows:
- SRP: Only handles OCR operations
- DIP: Depends on IOcrExtractor abstraction from core layer
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List


@dataclass
class OcrServiceResult:
    """
    Result of the OCR service.

    Attributes:
        urls: URLs extracted from recognized text, first found first.
        texts: Raw recognized text per orientation tried.
        orientationsTried: Rotation angles that were run, in order.
        requestId: Request identifier for debug output.
        success: False when the image could not be loaded or every
                 recognition attempt failed. urls is empty in that case.
        errorMessage: Failure description if success is False.
        processingTimeMs: Time taken for OCR and URL extraction.
    """
    urls: List[str] = field(default_factory=list)
    texts: List[str] = field(default_factory=list)
    orientationsTried: List[int] = field(default_factory=list)
    requestId: str = ""
    success: bool = True
    errorMessage: str = ""
    processingTimeMs: float = 0.0


class IOcrService(ABC):
    """
    Interface for OCR operations (Step 2).

    Recognizes text in an image file and extracts URLs from it.
    Recognition failures never raise; they yield an empty URL list.
    """

    @abstractmethod
    def extractUrls(
        self,
        imagePath: str,
        requestId: str
    ) -> OcrServiceResult:
        """
        Recognize text in an image and extract URLs.

        Args:
            imagePath: Path to the image file.
            requestId: Request identifier for debug output.

        Returns:
            OcrServiceResult: Extracted URLs with metadata.
        """
        pass

    @abstractmethod
    def setEnabled(self, enabled: bool) -> None:
        """
        Enable or disable OCR.

        Args:
            enabled: True to enable OCR.
        """
        pass

    @abstractmethod
    def isEnabled(self) -> bool:
        """
        Check if OCR is enabled.

        Returns:
            bool: True if OCR is enabled.
        """
        pass
