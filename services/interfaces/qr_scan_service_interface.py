"""
QR Scan Service Interface Module.

Defines the interface for multi-code QR scanning (Step 1 of the pipeline).
Responsible for finding every QR code in an input image.

Follows:
- SRP: Only handles QR scanning operations
- DIP: Depends on IQrDetector abstraction from core layer
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List

from core.image.raster_image import RasterImage
from core.qr.multi_qr_scanner import QrResult


@dataclass
class QrScanServiceResult:
    """
    Result of the QR scan service.

    Attributes:
        qrcodes: Accepted codes in discovery order.
        requestId: Request identifier for debug output.
        success: False only when scanning itself failed.
                 Finding no code is a success with an empty list.
        errorMessage: Failure description if success is False.
        processingTimeMs: Time taken for scanning.
    """
    qrcodes: List[QrResult] = field(default_factory=list)
    requestId: str = ""
    success: bool = True
    errorMessage: str = ""
    processingTimeMs: float = 0.0

    @property
    def values(self) -> List[str]:
        """Decoded payloads in order."""
        return [code.value for code in self.qrcodes]


class IQrScanService(ABC):
    """
    Interface for QR scan operations (Step 1).

    Finds all QR codes in an image, one entry per physical code.
    """

    @abstractmethod
    def scanQr(
        self,
        image: RasterImage,
        requestId: str
    ) -> QrScanServiceResult:
        """
        Scan an image for QR codes.

        Args:
            image: Loaded input image (not modified).
            requestId: Request identifier for debug output.

        Returns:
            QrScanServiceResult: Found codes with metadata.
        """
        pass

    @abstractmethod
    def setEnabled(self, enabled: bool) -> None:
        """
        Enable or disable QR scanning.

        Args:
            enabled: True to enable QR scanning.
        """
        pass

    @abstractmethod
    def isEnabled(self) -> bool:
        """
        Check if QR scanning is enabled.

        Returns:
            bool: True if QR scanning is enabled.
        """
        pass
