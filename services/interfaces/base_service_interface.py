"""
Base Service Interface Module.

Defines the base interface shared by the pipeline steps and the BaseService
helper they inherit from.

Debug output layout (only written while debug is enabled):
    <debugBasePath>/<serviceName>/<prefix>_<requestId>.png
    <debugBasePath>/<serviceName>/<prefix>_<requestId>.json

Follows:
- ISP (Interface Segregation Principle): Minimal base interface
- DIP (Dependency Inversion Principle): High-level modules depend on abstractions
"""

from abc import ABC, abstractmethod
from dataclasses import asdict, is_dataclass
from typing import Any, Dict, Optional, Union
from pathlib import Path
import logging
import json
import time

import cv2
import numpy as np

from core.image.raster_image import RasterImage


class IBaseService(ABC):
    """
    Base interface for all pipeline services.

    Every step has a name (used for its logger and debug directory) and
    a debug switch the orchestrator can flip for all steps at once.
    """

    @abstractmethod
    def getServiceName(self) -> str:
        """
        Get the service name for logging and debug output.

        Returns:
            str: Service name (e.g., "s1_qr_scan", "s2_ocr")
        """
        pass

    @abstractmethod
    def setDebugEnabled(self, enabled: bool) -> None:
        pass

    @abstractmethod
    def isDebugEnabled(self) -> bool:
        pass


def _jsonDefault(value: Any) -> Any:
    """Serialize dataclasses (e.g. QrResult) and paths in debug JSON."""
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    return str(value)


class BaseService(IBaseService):
    """
    Helper base class for pipeline steps.

    Owns the per-service logger, the debug directory, debug writers and
    timing helpers. Debug writers never raise: a failed write is logged
    and the analysis carries on.
    """

    def __init__(
        self,
        serviceName: str,
        debugBasePath: str = "output/debug",
        debugEnabled: bool = False
    ):
        """
        Initialize BaseService.

        Args:
            serviceName: Name of the service (e.g., "s1_qr_scan").
            debugBasePath: Root directory for debug output.
            debugEnabled: Whether debug output is written.
        """
        self._serviceName = serviceName
        self._debugPath = Path(debugBasePath) / serviceName
        self._debugEnabled = debugEnabled
        self._logger = logging.getLogger(serviceName)

        if debugEnabled:
            self._debugPath.mkdir(parents=True, exist_ok=True)

    def getServiceName(self) -> str:
        return self._serviceName

    def setDebugEnabled(self, enabled: bool) -> None:
        """Enable or disable debug output, creating the directory on enable."""
        self._debugEnabled = enabled
        if enabled:
            self._debugPath.mkdir(parents=True, exist_ok=True)
        self._logger.info(f"Debug {'enabled' if enabled else 'disabled'}")

    def isDebugEnabled(self) -> bool:
        return self._debugEnabled

    @property
    def debugPath(self) -> Path:
        """Directory this service writes debug output to."""
        return self._debugPath

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Debug Output
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def _debugFile(self, requestId: str, prefix: str, suffix: str) -> Path:
        name = f"{prefix}_{requestId}" if prefix else requestId
        return self._debugPath / f"{name}{suffix}"

    def _saveDebugImage(
        self,
        requestId: str,
        image: Union[RasterImage, np.ndarray, None],
        prefix: str = ""
    ) -> Optional[str]:
        """
        Save a debug image as PNG.

        Args:
            requestId: Request identifier for naming.
            image: RasterImage or raw uint8 buffer.
            prefix: Optional prefix for filename (e.g. the variant name).

        Returns:
            Saved file path, or None if debug is disabled or the write failed.
        """
        if not self._debugEnabled or image is None:
            return None

        filepath = self._debugFile(requestId, prefix, ".png")
        try:
            if isinstance(image, RasterImage):
                encoded = image.toBuffer(".png")
            else:
                ok, buffer = cv2.imencode(".png", image)
                if not ok:
                    raise ValueError("PNG encoding failed")
                encoded = buffer.tobytes()

            # imencode + write_bytes handles non-ASCII paths, unlike cv2.imwrite
            filepath.write_bytes(encoded)
            self._logger.debug(f"Saved debug image: {filepath}")
            return str(filepath)

        except (OSError, ValueError, cv2.error) as e:
            self._logger.warning(f"Failed to save debug image {filepath.name}: {e}")
            return None

    def _saveDebugJson(self, requestId: str, data: Dict, prefix: str = "") -> Optional[str]:
        """
        Save debug data as pretty-printed UTF-8 JSON.

        Dataclass values are expanded to dicts.

        Returns:
            Saved file path, or None if debug is disabled or the write failed.
        """
        if not self._debugEnabled:
            return None

        filepath = self._debugFile(requestId, prefix, ".json")
        try:
            with open(filepath, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False, default=_jsonDefault)
            self._logger.debug(f"Saved debug JSON: {filepath}")
            return str(filepath)
        except (OSError, TypeError) as e:
            self._logger.warning(f"Failed to save debug JSON {filepath.name}: {e}")
            return None

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Timing
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    @staticmethod
    def _startTimer() -> float:
        """Start a monotonic timer for _measureTime()."""
        return time.perf_counter()

    @staticmethod
    def _measureTime(startTime: float) -> float:
        """Milliseconds elapsed since a _startTimer() value."""
        return (time.perf_counter() - startTime) * 1000

    def _logTiming(self, requestId: str, processingTimeMs: float) -> None:
        self._logger.info(f"[{requestId}] {self._serviceName} took {processingTimeMs:.2f}ms")
