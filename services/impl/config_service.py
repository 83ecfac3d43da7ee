"""
Config Service Implementation.

Centralized configuration management for the image link analyzer pipeline.
Loads configuration from application_config.json organized by service.

Follows:
- SRP: Only handles configuration management
- DIP: Provides configuration to other services via interface
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional


from services.interfaces.config_service_interface import IConfigService


logger = logging.getLogger(__name__)


class ConfigService(IConfigService):
    """
    Implementation of IConfigService.

    Loads and manages application configuration from application_config.json.
    Configuration is organized by service section (s1_qr_scan, s2_ocr).

    Getter defaults mirror the shipped config file, so a section may
    leave out keys it does not change.
    """

    def __init__(self, configPath: str = "config/application_config.json"):
        """
        Initialize ConfigService.

        Args:
            configPath: Path to the configuration file.

        Raises:
            RuntimeError: If the file is missing or not valid JSON.
        """
        self._config: Dict[str, Any] = {}
        self._configPath = Path(configPath)
        self._debugEnabled = False

        # Load config (required)
        if not self.loadConfig(configPath):
            raise RuntimeError(f"Failed to load configuration from: {configPath}")

    def loadConfig(self, configPath: str) -> bool:
        """Load configuration from JSON file."""
        try:
            path = Path(configPath)
            if not path.exists():
                logger.error(f"Config file not found: {configPath}")
                return False

            with open(path, 'r', encoding='utf-8') as f:
                config = json.load(f)

            if not isinstance(config, dict):
                logger.error(f"Config root must be a JSON object: {configPath}")
                return False

            self._config = config
            self._debugEnabled = self.get("debug.enabled", False)

            logger.info(f"Configuration loaded from: {path.absolute()}")
            return True

        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in config file: {e}")
            return False
        except OSError as e:
            logger.error(f"Failed to load config: {e}")
            return False

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Generic Config Access
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key with dot notation support.

        Examples:
            get("s1_qr_scan.backend") -> "zxing"
            get("s2_ocr.contrastAmount") -> 0.3
            get("debug.enabled") -> False
        """
        value = self._config
        for part in key.split('.'):
            if not isinstance(value, dict):
                return default
            value = value.get(part)
            if value is None:
                return default
        return value

    def getServiceConfig(self, serviceName: str) -> Dict[str, Any]:
        """
        Get all configuration for a specific service.

        Args:
            serviceName: Service name (e.g., "s1_qr_scan", "s2_ocr")

        Returns:
            Configuration dictionary for the service.
        """
        config = self._config.get(serviceName, {})
        return config if isinstance(config, dict) else {}

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Debug Settings
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def getDebugBasePath(self) -> str:
        """Get base path for debug output."""
        return self.get("debug.basePath", "output/debug")

    def isDebugEnabled(self) -> bool:
        """Check if debug mode is enabled."""
        return self._debugEnabled

    def setDebugEnabled(self, enabled: bool) -> None:
        """Enable or disable debug mode at runtime."""
        self._debugEnabled = enabled
        logger.info(f"Debug mode {'enabled' if enabled else 'disabled'}")

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # App Settings
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def getSupportedFormats(self) -> List[str]:
        """Get accepted image file extensions (lowercase, with dot)."""
        formats = self.get("app.supportedFormats", [".jpg", ".jpeg", ".png", ".heic", ".webp"])
        return [fmt.lower() for fmt in formats]

    def getMaxFileSizeMb(self) -> float:
        """Get maximum accepted image file size in megabytes."""
        return self.get("app.maxFileSizeMb", 10)

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # S1 QR Scan Settings
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def isQrScanEnabled(self) -> bool:
        """Check if QR scanning is enabled."""
        return self.get("s1_qr_scan.enabled", True)

    def getQrBackend(self) -> str:
        """
        Get QR decode backend (zxing or pyzbar).

        Returns:
            str: Backend name, default "zxing".
        """
        return self.get("s1_qr_scan.backend", "zxing").lower()

    def isQrTryRotate(self) -> bool:
        """Check if QR try rotate is enabled."""
        return self.get("s1_qr_scan.tryRotate", True)

    def isQrTryDownscale(self) -> bool:
        """Check if QR try downscale is enabled."""
        return self.get("s1_qr_scan.tryDownscale", True)

    def isQrTryInvert(self) -> bool:
        """Check if inverted-polarity retry is enabled."""
        return self.get("s1_qr_scan.tryInvert", True)

    def getQrUpscaleTargetSize(self) -> int:
        """Get minimum side length images are upscaled to before scanning."""
        return self.get("s1_qr_scan.upscaleTargetSize", 800)

    def getQrSimilarityThreshold(self) -> float:
        """Get per-axis pixel distance below which two hits are the same code."""
        return self.get("s1_qr_scan.similarityThreshold", 50)

    def getQrMinRegionSize(self) -> int:
        """Get minimum width/height of a scanned region."""
        return self.get("s1_qr_scan.minRegionSize", 50)

    def getQrHorizontalSections(self) -> int:
        """Get number of vertical strips scanned across the width."""
        return self.get("s1_qr_scan.horizontalSections", 3)

    def getQrGridSize(self) -> int:
        """Get grid dimension (grid is N x N cells)."""
        return self.get("s1_qr_scan.gridSize", 4)

    def getQrTargetCodeCount(self) -> int:
        """Get code count after which scanning stops early."""
        return self.get("s1_qr_scan.targetCodeCount", 2)

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # S2 OCR Settings
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def isOcrEnabled(self) -> bool:
        """Check if OCR is enabled."""
        return self.get("s2_ocr.enabled", True)

    def getOcrBackend(self) -> str:
        """
        Get OCR backend (tesseract or paddle).

        Returns:
            str: Backend name, default "tesseract".
        """
        return self.get("s2_ocr.backend", "tesseract").lower()

    def getTesseractCmd(self) -> Optional[str]:
        """Get explicit tesseract binary path (None = auto-detect)."""
        return self.get("s2_ocr.tesseractCmd")

    def getOcrContrastAmount(self) -> float:
        """Get contrast boost applied before OCR."""
        return self.get("s2_ocr.contrastAmount", 0.3)

    def isOcrTryOrientations(self) -> bool:
        """Check if OCR should retry rotated orientations."""
        return self.get("s2_ocr.tryOrientations", False)

    def getOcrOrientations(self) -> List[int]:
        """
        Get the rotation angles OCR tries, in order.

        Angles that are not multiples of 90 are dropped with a warning.

        Returns:
            [0] unless tryOrientations is enabled and at least one angle is valid.
        """
        if not self.isOcrTryOrientations():
            return [0]

        orientations = []
        for angle in self.get("s2_ocr.orientations", [0, 90, 180, 270]):
            if isinstance(angle, int) and not isinstance(angle, bool) and angle % 90 == 0:
                orientations.append(angle)
            else:
                logger.warning(f"Ignoring OCR orientation {angle!r}: not a multiple of 90")
        return orientations or [0]

    def getOcrDevice(self) -> str:
        """Get OCR device for the paddle backend (cpu/gpu)."""
        return self.get("s2_ocr.paddleDevice", "cpu")

    def getOcrCpuThreads(self) -> int:
        """Get number of CPU threads for the paddle backend."""
        return self.get("s2_ocr.paddleCpuThreads", 4)
