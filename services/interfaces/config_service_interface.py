"""
Config Service Interface Module.

Defines the read-only view of application_config.json used by the
pipeline orchestrator and the command-line host.

Sections:
- app: accepted input files
- debug: debug output switch and location
- s1_qr_scan: QR backend and multi-code scanner tuning
- s2_ocr: OCR backend, preprocessing and orientation retries

Follows:
- SRP: Only handles configuration management
- DIP: The orchestrator depends on this abstraction
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class IConfigService(ABC):
    """
    Interface for configuration access.

    Raw values are reachable with get() using dot notation
    ("s1_qr_scan.gridSize"). Typed getters apply the documented defaults.
    """

    @abstractmethod
    def loadConfig(self, configPath: str) -> bool:
        """
        Load configuration from a JSON file.

        Returns:
            bool: True if loaded successfully, False otherwise.
        """
        pass

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by dot-notation key.

        Args:
            key: e.g. "s2_ocr.backend".
            default: Returned when any part of the key is missing.
        """
        pass

    @abstractmethod
    def getServiceConfig(self, serviceName: str) -> Dict[str, Any]:
        """Get the whole section of one service ("s1_qr_scan", "s2_ocr")."""
        pass

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Input Files
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    @abstractmethod
    def getSupportedFormats(self) -> List[str]:
        """Accepted file extensions, lowercase with leading dot."""
        pass

    @abstractmethod
    def getMaxFileSizeMb(self) -> float:
        """Largest accepted input file in megabytes."""
        pass

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Debug
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    @abstractmethod
    def getDebugBasePath(self) -> str:
        pass

    @abstractmethod
    def isDebugEnabled(self) -> bool:
        pass

    @abstractmethod
    def setDebugEnabled(self, enabled: bool) -> None:
        """Override the debug switch for the lifetime of this instance."""
        pass

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # S1 QR Scan
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    @abstractmethod
    def isQrScanEnabled(self) -> bool:
        pass

    @abstractmethod
    def getQrBackend(self) -> str:
        """QR decode backend name, lowercase ("zxing" or "pyzbar")."""
        pass

    @abstractmethod
    def getQrUpscaleTargetSize(self) -> int:
        """Images with a side shorter than this are upscaled before scanning."""
        pass

    @abstractmethod
    def getQrSimilarityThreshold(self) -> float:
        """Per-axis pixel distance under which two hits are the same code."""
        pass

    @abstractmethod
    def getQrGridSize(self) -> int:
        pass

    @abstractmethod
    def getQrTargetCodeCount(self) -> int:
        """Number of codes after which scanning stops early."""
        pass

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # S2 OCR
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    @abstractmethod
    def isOcrEnabled(self) -> bool:
        pass

    @abstractmethod
    def getOcrBackend(self) -> str:
        """OCR backend name, lowercase ("tesseract" or "paddle")."""
        pass

    @abstractmethod
    def getTesseractCmd(self) -> Optional[str]:
        """Explicit tesseract binary, or None to search the usual locations."""
        pass

    @abstractmethod
    def getOcrContrastAmount(self) -> float:
        pass

    @abstractmethod
    def getOcrOrientations(self) -> List[int]:
        """
        Rotation angles OCR tries in order.

        Returns:
            [0] unless orientation retries are enabled.
        """
        pass
