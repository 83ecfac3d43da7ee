"""
QR Detector Interface Module.

This module defines the interface and data classes for single-code QR decoding.
Follows the Interface Segregation Principle (ISP) from SOLID.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, List, Tuple
import numpy as np


@dataclass(frozen=True)
class QrLocation:
    """
    Top-left corner of a decoded QR code.

    Attributes:
        x: Horizontal position in pixels
        y: Vertical position in pixels
    """
    x: float
    y: float

    def translated(self, dx: float, dy: float) -> "QrLocation":
        """Return this location shifted by (dx, dy)."""
        return QrLocation(self.x + dx, self.y + dy)


@dataclass
class QrDetectionResult:
    """
    Result of one decode attempt.

    Coordinates are in the space of the image that was decoded
    (a crop or a scaled copy), not the original image.

    Attributes:
        text: Decoded payload (e.g., "https://example.com")
        location: Top-left corner of the code
        polygon: Four corners of QR code [(x,y), ...]
        rect: Bounding rectangle (left, top, width, height)
        inverted: True if the code was found with inverted polarity
    """
    text: str
    location: QrLocation
    polygon: List[Tuple[int, int]] = field(default_factory=list)
    rect: Tuple[int, int, int, int] = (0, 0, 0, 0)
    inverted: bool = False


class IQrDetector(ABC):
    """
    Interface for a single-code QR detector.

    Implementations return at most one code per call, even when the
    image holds several. Both normal and inverted polarity are tried.
    Decoder errors are raised to the caller.
    """

    @abstractmethod
    def detect(self, image: np.ndarray) -> Optional[QrDetectionResult]:
        """
        Detect QR code in an image.

        Args:
            image: Input image (BGR or grayscale numpy array)

        Returns:
            QrDetectionResult if QR code found, None otherwise
        """
        pass
