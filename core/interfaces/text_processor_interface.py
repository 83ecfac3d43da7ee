"""
Text Processor Interface Module.

This module defines the interface for post-processing OCR text into
a list of URLs.
Follows the Interface Segregation Principle (ISP) from SOLID.
"""

from abc import ABC, abstractmethod
from typing import List


class ITextProcessor(ABC):
    """
    Interface for text post-processor.

    Implementations repair OCR artifacts and extract a deduplicated,
    insertion-ordered list of URLs from raw text.
    """

    @abstractmethod
    def extractUrls(self, text: str) -> List[str]:
        """
        Extract URLs from OCR text.

        Args:
            text: Raw OCR text (may contain line breaks)

        Returns:
            List of URLs, first found first
        """
        pass
