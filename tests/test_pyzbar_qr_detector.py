"""
Tests for the pyzbar QR detector backend
"""

from types import SimpleNamespace

import cv2
import numpy as np
import pytest

pytest.importorskip("pyzbar.pyzbar")

from core.qr import pyzbar_qr_detector
from core.qr.pyzbar_qr_detector import PyzbarQrDetector

from conftest import makeCanvas, makeQrImage


def fakeDecoded(text: str, left: int = 12, top: int = 34):
    """Object shaped like pyzbar's Decoded namedtuple."""
    return SimpleNamespace(
        data=text.encode("utf-8"),
        rect=SimpleNamespace(left=left, top=top, width=100, height=100),
        polygon=[
            SimpleNamespace(x=left, y=top),
            SimpleNamespace(x=left + 100, y=top),
            SimpleNamespace(x=left + 100, y=top + 100),
            SimpleNamespace(x=left, y=top + 100),
        ]
    )


class RecordingDecode:
    """Stand-in for pyzbar.decode returning canned results per call."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.images = []

    def __call__(self, image, symbols=None):
        self.images.append(image.copy())
        return self.responses[len(self.images) - 1]


class TestPyzbarQrDetector:
    """Decoding with zbar"""

    def test_decodes_generated_code(self):
        result = PyzbarQrDetector().detect(makeQrImage("https://zbar.example/a"))

        assert result is not None
        assert result.text == "https://zbar.example/a"
        assert not result.inverted
        assert len(result.polygon) >= 4

    def test_decodes_inverted_code(self):
        inverted = cv2.bitwise_not(makeQrImage("INVERTED"))

        result = PyzbarQrDetector().detect(inverted)

        assert result is not None
        assert result.text == "INVERTED"

    def test_accepts_greyscale_input(self):
        gray = cv2.cvtColor(makeQrImage("grey"), cv2.COLOR_BGR2GRAY)

        result = PyzbarQrDetector().detect(gray)

        assert result is not None
        assert result.text == "grey"

    def test_blank_image(self):
        assert PyzbarQrDetector().detect(makeCanvas(200, 200)) is None

    def test_inverted_retry_after_empty_pass(self, monkeypatch):
        fake = RecordingDecode([], [fakeDecoded("second pass")])
        monkeypatch.setattr(pyzbar_qr_detector, "decode", fake)
        gray = np.full((50, 50), 200, dtype=np.uint8)

        result = PyzbarQrDetector().detect(gray)

        assert result.text == "second pass"
        assert result.inverted
        assert result.rect == (12, 34, 100, 100)
        assert result.location.x == 12 and result.location.y == 34
        assert len(fake.images) == 2
        assert int(fake.images[0][0, 0]) == 200
        assert int(fake.images[1][0, 0]) == 55

    def test_no_retry_when_disabled(self, monkeypatch):
        fake = RecordingDecode([], [fakeDecoded("never")])
        monkeypatch.setattr(pyzbar_qr_detector, "decode", fake)

        result = PyzbarQrDetector(tryInvert=False).detect(makeCanvas(50, 50))

        assert result is None
        assert len(fake.images) == 1

    def test_first_symbol_wins(self, monkeypatch):
        fake = RecordingDecode([fakeDecoded("first", 5, 6), fakeDecoded("second", 300, 300)])
        monkeypatch.setattr(pyzbar_qr_detector, "decode", fake)

        result = PyzbarQrDetector().detect(makeCanvas(50, 50))

        assert result.text == "first"
        assert not result.inverted
        assert result.polygon == [(5, 6), (105, 6), (105, 106), (5, 106)]
