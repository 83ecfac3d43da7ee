"""
Result Merge Service Interface Module.

Defines the interface for merging QR and OCR results (Step 3 of the pipeline).

Follows:
- SRP: Only handles result merging
- ISP: Single-method interface
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List

from core.qr.multi_qr_scanner import QrResult


@dataclass
class AnalysisResult:
    """
    Final result of analyzing one image.

    Attributes:
        qrcodes: QR payloads in discovery order (repeats of the same
                 payload at different positions are kept).
        urls: OCR URLs not already returned as a URL-like QR payload.
    """
    qrcodes: List[str] = field(default_factory=list)
    urls: List[str] = field(default_factory=list)

    def toDict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {"qrcodes": list(self.qrcodes), "urls": list(self.urls)}


class IResultMergeService(ABC):
    """
    Interface for result merging (Step 3).

    Combines QR payloads and OCR URLs into one AnalysisResult.
    """

    @abstractmethod
    def merge(
        self,
        qrcodes: List[QrResult],
        ocrUrls: List[str],
        requestId: str = ""
    ) -> AnalysisResult:
        """
        Merge QR codes and OCR URLs.

        Args:
            qrcodes: Accepted QR codes from Step 1.
            ocrUrls: URLs from Step 2.
            requestId: Request identifier for logging.

        Returns:
            AnalysisResult: Merged result.
        """
        pass
