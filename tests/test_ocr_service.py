"""
Tests for the OCR stage: preprocessing, extractors and S2OcrService
"""

import io

import cv2
import numpy as np
import pytest
import pytesseract
from PIL import Image

from core.image.raster_image import RasterImage
from core.ocr.ocr_extractor_factory import createOcrExtractor, getSupportedOcrBackends
from core.ocr.ocr_image_preprocessor import OcrImagePreprocessor
from core.ocr.paddle_ocr_extractor import PaddleOcrExtractor
from core.ocr.tesseract_ocr_extractor import TesseractOcrExtractor
from services.impl.s2_ocr_service import S2OcrService

from conftest import FakeOcrExtractor, RaisingOcrExtractor, makeCanvas


def makeService(extractor, tmp_path, **kwargs) -> S2OcrService:
    return S2OcrService(
        ocrExtractor=extractor,
        debugBasePath=str(tmp_path / "debug"),
        **kwargs
    )


class TestOcrImagePreprocessor:
    """OCR input preparation"""

    def test_outputs_greyscale_png(self):
        image = RasterImage(makeCanvas(40, 20))
        buffer = OcrImagePreprocessor().prepare(image)

        decoded = Image.open(io.BytesIO(buffer))
        assert decoded.format == "PNG"
        assert decoded.mode == "L"
        assert decoded.size == (40, 20)

    def test_rotation_applied_to_copy(self):
        image = RasterImage(makeCanvas(40, 20))
        buffer = OcrImagePreprocessor().prepare(image, angle=90)

        assert Image.open(io.BytesIO(buffer)).size == (20, 40)
        assert image.size == (40, 20)
        assert not image.isGreyscale


class TestTesseractOcrExtractor:
    """pytesseract wrapper"""

    def test_passes_language_and_spacing_config(self, monkeypatch):
        captured = {}

        def fakeImageToString(image, lang=None, config=None):
            captured.update(lang=lang, config=config, size=image.size)
            return "visit https://example.com\n"

        monkeypatch.setattr(pytesseract, "image_to_string", fakeImageToString)
        buffer = RasterImage(makeCanvas(30, 10)).toBuffer()

        result = TesseractOcrExtractor(tesseractCmd="tesseract").extract(buffer)

        assert result.success
        assert result.text == "visit https://example.com\n"
        assert captured == {
            "lang": "eng",
            "config": "-c preserve_interword_spaces=1",
            "size": (30, 10),
        }

    def test_engine_error_becomes_failed_result(self, monkeypatch):
        def boom(image, lang=None, config=None):
            raise pytesseract.TesseractError(1, "engine exploded")

        monkeypatch.setattr(pytesseract, "image_to_string", boom)
        buffer = RasterImage(makeCanvas(30, 10)).toBuffer()

        result = TesseractOcrExtractor(tesseractCmd="tesseract").extract(buffer)

        assert not result.success
        assert result.text == ""
        assert result.errorMessage

    def test_undecodable_buffer_becomes_failed_result(self):
        result = TesseractOcrExtractor(tesseractCmd="tesseract").extract(b"garbage")
        assert not result.success


class FakePaddleEngine:
    """Returns a canned PaddleOCR 3.x predict() result."""

    def __init__(self, rawResult):
        self.rawResult = rawResult
        self.images = []

    def predict(self, image):
        self.images.append(image)
        return self.rawResult


def box(x: int, y: int, w: int = 150, h: int = 20) -> np.ndarray:
    return np.array([[x, y], [x + w, y], [x + w, y + h], [x, y + h]])


class TestPaddleOcrExtractor:
    """PaddleOCR result parsing (engine replaced by a canned result)"""

    def makeExtractor(self, rawResult) -> PaddleOcrExtractor:
        extractor = PaddleOcrExtractor()
        extractor._ocrEngine = FakePaddleEngine(rawResult)
        return extractor

    def test_lines_joined_in_reading_order(self):
        rawResult = [{
            "rec_texts": ["example.com/path", "Visit https://www.", "right column"],
            "rec_scores": [0.91, 0.97, 0.88],
            "dt_polys": [box(10, 60), box(10, 20), box(300, 58)],
        }]
        extractor = self.makeExtractor(rawResult)

        result = extractor.extract(RasterImage(makeCanvas(400, 100)).toBuffer())

        assert result.success
        assert result.text == "Visit https://www.\nexample.com/path\nright column"
        assert [block.confidence for block in result.textBlocks] == [0.97, 0.91, 0.88]
        assert result.textBlocks[0].bbox == box(10, 20).tolist()

    def test_same_row_sorted_left_to_right(self):
        rawResult = [{
            "rec_texts": ["b", "a"],
            "rec_scores": [0.9, 0.9],
            "dt_polys": [box(200, 40), box(10, 40)],
        }]

        result = self.makeExtractor(rawResult).extract(RasterImage(makeCanvas(400, 100)).toBuffer())

        assert result.text == "a\nb"

    def test_empty_result(self):
        result = self.makeExtractor([]).extract(RasterImage(makeCanvas(40, 40)).toBuffer())

        assert result.success
        assert result.text == ""
        assert result.textBlocks == []

    def test_engine_error_becomes_failed_result(self):
        class BrokenEngine:
            def predict(self, image):
                raise RuntimeError("paddle down")

        extractor = PaddleOcrExtractor()
        extractor._ocrEngine = BrokenEngine()

        result = extractor.extract(RasterImage(makeCanvas(40, 40)).toBuffer())

        assert not result.success
        assert "paddle down" in result.errorMessage

    def test_undecodable_buffer(self):
        result = self.makeExtractor([]).extract(b"not an image")

        assert not result.success


class TestOcrExtractorFactory:
    """Backend selection"""

    def test_supported_backends(self):
        assert getSupportedOcrBackends() == ["tesseract", "paddle"]

    def test_default_is_tesseract(self):
        assert isinstance(createOcrExtractor(tesseractCmd="tesseract"), TesseractOcrExtractor)

    def test_invalid_backend(self):
        with pytest.raises(ValueError):
            createOcrExtractor("easyocr")


class TestS2OcrService:
    """OCR service behaviour"""

    def test_extracts_urls(self, tmp_path, writeImage):
        path = writeImage(makeCanvas(100, 50))
        extractor = FakeOcrExtractor(["Visit www.example.com or example.org"])

        result = makeService(extractor, tmp_path).extractUrls(path, "req_1")

        assert result.success
        assert result.urls == ["https://www.example.com", "https://example.org"]
        assert result.orientationsTried == [0]
        assert len(extractor.calls) == 1

    def test_stops_at_first_orientation_with_urls(self, tmp_path, writeImage):
        path = writeImage(makeCanvas(100, 50))
        extractor = FakeOcrExtractor(["garbled", "https://found.example/x", "https://late.example"])

        result = makeService(
            extractor, tmp_path, orientations=[0, 90, 180, 270]
        ).extractUrls(path, "req_2")

        assert result.urls == ["https://found.example/x"]
        assert result.orientationsTried == [0, 90]

    def test_all_orientations_without_urls(self, tmp_path, writeImage):
        path = writeImage(makeCanvas(100, 50))
        extractor = FakeOcrExtractor(["nothing here"])

        result = makeService(
            extractor, tmp_path, orientations=[0, 90, 180, 270]
        ).extractUrls(path, "req_3")

        assert result.success
        assert result.urls == []
        assert result.orientationsTried == [0, 90, 180, 270]

    def test_recognition_failure_gives_empty_list(self, tmp_path, writeImage):
        path = writeImage(makeCanvas(100, 50))

        result = makeService(FakeOcrExtractor([], fail=True), tmp_path).extractUrls(path, "req_4")

        assert not result.success
        assert result.urls == []
        assert "engine crashed" in result.errorMessage

    def test_raising_extractor_gives_empty_list(self, tmp_path, writeImage):
        path = writeImage(makeCanvas(100, 50))

        result = makeService(RaisingOcrExtractor(), tmp_path).extractUrls(path, "req_4b")

        assert not result.success
        assert result.urls == []
        assert "recognizer blew up" in result.errorMessage

    def test_raising_orientation_falls_through_to_next(self, tmp_path, writeImage):
        path = writeImage(makeCanvas(100, 50))
        extractor = RaisingOcrExtractor(firstCallOnly=True, text="https://second.example")

        result = makeService(
            extractor, tmp_path, orientations=[0, 90]
        ).extractUrls(path, "req_4c")

        assert result.success
        assert result.urls == ["https://second.example"]
        assert result.orientationsTried == [0, 90]

    def test_invalid_angle_is_skipped(self, tmp_path, writeImage):
        path = writeImage(makeCanvas(100, 50))
        extractor = FakeOcrExtractor(["https://upright.example"])

        result = makeService(
            extractor, tmp_path, orientations=[45, 0]
        ).extractUrls(path, "req_4d")

        assert result.success
        assert result.urls == ["https://upright.example"]
        assert result.orientationsTried == [45, 0]
        assert len(extractor.calls) == 1

    def test_unreadable_image_gives_empty_list(self, tmp_path):
        broken = tmp_path / "broken.png"
        broken.write_bytes(b"\x00\x01")

        result = makeService(FakeOcrExtractor(["https://x.example"]), tmp_path).extractUrls(
            str(broken), "req_5"
        )

        assert not result.success
        assert result.urls == []

    def test_disabled(self, tmp_path, writeImage):
        extractor = FakeOcrExtractor(["https://x.example"])
        service = makeService(extractor, tmp_path, enabled=False)

        result = service.extractUrls(writeImage(makeCanvas(10, 10)), "req_6")

        assert result.urls == []
        assert extractor.calls == []

    def test_extractor_receives_contrast_adjusted_greyscale(self, tmp_path, writeImage):
        canvas = makeCanvas(10, 10)
        canvas[:] = 137
        extractor = FakeOcrExtractor(["-"])

        makeService(extractor, tmp_path, contrastAmount=0.5).extractUrls(writeImage(canvas), "req_7")

        decoded = cv2.imdecode(np.frombuffer(extractor.calls[0], dtype=np.uint8), cv2.IMREAD_UNCHANGED)
        assert decoded.ndim == 2
        assert int(decoded[0, 0]) == 157

    def test_debug_json_written(self, tmp_path, writeImage):
        service = makeService(FakeOcrExtractor(["https://a.example"]), tmp_path, debugEnabled=True)

        service.extractUrls(writeImage(makeCanvas(10, 10)), "req_8")

        assert (service.debugPath / "ocr_req_8.json").exists()
