import sys
from pathlib import Path
from typing import Dict, List, Optional

import cv2
import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.interfaces.ocr_extractor_interface import IOcrExtractor, OcrResult
from core.interfaces.qr_detector_interface import (
    IQrDetector,
    QrDetectionResult,
    QrLocation
)


DARK_LIMIT = 60


class MarkerDetector(IQrDetector):
    """
    Stand-in for a single-code decoder.

    Every dark square in the image is a "code". Like a real single-shot
    decoder it reports only one per call: the first dark pixel in
    row-major order. The payload is looked up by the pixel's grey value.
    """

    def __init__(self, payloads: Optional[Dict[int, str]] = None):
        self.payloads = payloads or {}
        self.calls = 0

    def detect(self, image: np.ndarray) -> Optional[QrDetectionResult]:
        self.calls += 1
        gray = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY) if image.ndim == 3 else image

        dark = np.argwhere(gray < DARK_LIMIT)
        if dark.size == 0:
            return None

        y, x = (int(v) for v in dark[0])
        value = int(gray[y, x])
        text = self.payloads.get(value, f"code-{value}")
        return QrDetectionResult(text=text, location=QrLocation(x, y))


class FakeOcrExtractor(IOcrExtractor):
    """Returns canned text per call, in order; repeats the last one."""

    def __init__(self, texts: List[str], fail: bool = False):
        self.texts = texts
        self.fail = fail
        self.calls: List[bytes] = []

    def extract(self, imageBytes: bytes) -> OcrResult:
        self.calls.append(imageBytes)
        if self.fail:
            return OcrResult(success=False, errorMessage="engine crashed")
        index = min(len(self.calls) - 1, len(self.texts) - 1)
        return OcrResult(text=self.texts[index] if self.texts else "")


def makeCanvas(width: int = 1200, height: int = 900) -> np.ndarray:
    """White BGR canvas."""
    return np.full((height, width, 3), 255, dtype=np.uint8)


def drawMarker(canvas: np.ndarray, x: int, y: int, value: int = 0, size: int = 60) -> np.ndarray:
    """Paint a dark square with top-left corner (x, y)."""
    canvas[y:y + size, x:x + size] = value
    return canvas


@pytest.fixture
def markerDetector():
    return MarkerDetector()


@pytest.fixture
def writeImage(tmp_path):
    """Write a BGR array to a PNG file and return its path."""
    def _write(array: np.ndarray, name: str = "image.png") -> str:
        path = tmp_path / name
        assert cv2.imwrite(str(path), array)
        return str(path)
    return _write


@pytest.fixture
def configFile(tmp_path):
    """Write a config file with debug output under tmp_path."""
    import json

    def _write(overrides: Optional[Dict] = None) -> str:
        config = {
            "app": {"supportedFormats": [".png", ".jpg"], "maxFileSizeMb": 10},
            "debug": {"enabled": False, "basePath": str(tmp_path / "debug")},
            "s1_qr_scan": {"backend": "zxing"},
            "s2_ocr": {"backend": "tesseract"}
        }
        for section, values in (overrides or {}).items():
            config.setdefault(section, {}).update(values)

        path = tmp_path / "application_config.json"
        path.write_text(json.dumps(config), encoding="utf-8")
        return str(path)
    return _write


def makeQrImage(payload: str, size: int = 400, border: int = 40) -> np.ndarray:
    """Real QR code, upscaled with hard edges and a white quiet zone (BGR)."""
    code = cv2.QRCodeEncoder.create().encode(payload)
    code = cv2.resize(code, (size, size), interpolation=cv2.INTER_NEAREST)
    code = cv2.copyMakeBorder(code, border, border, border, border, cv2.BORDER_CONSTANT, value=255)
    return cv2.cvtColor(code, cv2.COLOR_GRAY2BGR)


class RaisingOcrExtractor(IOcrExtractor):
    """Breaks its result contract by raising; optionally only on the first call."""

    def __init__(self, firstCallOnly: bool = False, text: str = ""):
        self.firstCallOnly = firstCallOnly
        self.text = text
        self.calls = 0

    def extract(self, imageBytes: bytes) -> OcrResult:
        self.calls += 1
        if not self.firstCallOnly or self.calls == 1:
            raise RuntimeError("recognizer blew up")
        return OcrResult(text=self.text)
