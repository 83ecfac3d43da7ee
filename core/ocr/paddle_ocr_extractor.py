"""
PaddleOCR Extractor Implementation.

This module provides OCR text extraction using PaddleOCR library.
CPU-only mode is used for broader compatibility.
Follows the Single Responsibility Principle (SRP) from SOLID.

Note: Compatible with PaddleOCR 3.x API.
"""

import logging
from typing import List, Optional

import cv2
import numpy as np

from core.interfaces.ocr_extractor_interface import (
    IOcrExtractor,
    OcrResult,
    TextBlock
)


class PaddleOcrExtractor(IOcrExtractor):
    """
    OCR text extractor using PaddleOCR.

    Recognized lines are sorted top-to-bottom, then left-to-right, and
    joined with newlines so wrapped URLs keep their line structure.

    Compatible with PaddleOCR 3.x API.
    """

    # Single fixed language model
    LANGUAGE = 'en'

    def __init__(
        self,
        textDetThresh: float = 0.3,
        textDetBoxThresh: float = 0.5,
        textRecScoreThresh: float = 0.5,
        textDetLimitSideLen: int = 960,
        cpuThreads: int = 4,
        device: str = 'cpu',
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize PaddleOcrExtractor.

        Args:
            textDetThresh: Text detection threshold
            textDetBoxThresh: Text detection box threshold
            textRecScoreThresh: Text recognition score threshold
            textDetLimitSideLen: Side length limit for image resize
            cpuThreads: Number of CPU threads
            device: Device for inference ('cpu' or 'gpu')
            logger: Logger instance for debug output
        """
        self._logger = logger or logging.getLogger(__name__)
        self._ocrEngine = None

        # Store config for lazy initialization
        # PaddleOCR 3.x API parameters
        self._config = {
            'lang': self.LANGUAGE,
            'use_doc_orientation_classify': False,
            'use_doc_unwarping': False,
            'use_textline_orientation': False,
            'text_det_thresh': textDetThresh,
            'text_det_box_thresh': textDetBoxThresh,
            'text_rec_score_thresh': textRecScoreThresh,
            'text_det_limit_side_len': textDetLimitSideLen,
            'cpu_threads': cpuThreads,
            'device': device
        }

        self._logger.info(
            f"PaddleOcrExtractor initialized with lang={self.LANGUAGE}, device={device}, "
            f"limit_side_len={textDetLimitSideLen}"
        )

    def _ensureOcrEngine(self) -> None:
        """Lazily initialize PaddleOCR engine on first use."""
        if self._ocrEngine is None:
            try:
                from paddleocr import PaddleOCR
                self._ocrEngine = PaddleOCR(**self._config)
                self._logger.info("PaddleOCR engine initialized successfully")
            except ImportError as e:
                self._logger.error(
                    f"Failed to import PaddleOCR. "
                    f"Please install: pip install paddlepaddle paddleocr. Error: {e}"
                )
                raise

    def extract(self, imageBytes: bytes) -> OcrResult:
        """
        Extract text from an encoded image using PaddleOCR.

        Args:
            imageBytes: Encoded image (PNG)

        Returns:
            OcrResult with the joined text and per-line text blocks.
            Engine errors give success=False and empty text.
        """
        rawResult = None

        try:
            self._ensureOcrEngine()

            image = cv2.imdecode(np.frombuffer(imageBytes, dtype=np.uint8), cv2.IMREAD_COLOR)
            if image is None:
                raise ValueError("Could not decode image buffer")

            # Run OCR - PaddleOCR 3.x uses predict() method
            rawResult = self._ocrEngine.predict(image)
            textBlocks = self._parseResult(rawResult)

        except Exception as e:
            self._logger.error(f"Error during OCR extraction: {e}")
            return OcrResult(success=False, errorMessage=str(e), rawResult=rawResult)

        text = "\n".join(block.text for block in textBlocks)
        self._logger.info(f"OCR extracted {len(textBlocks)} text blocks")

        return OcrResult(text=text, textBlocks=textBlocks, rawResult=rawResult)

    def _parseResult(self, rawResult) -> List[TextBlock]:
        """
        Convert PaddleOCR 3.x output into reading-order text blocks.

        Args:
            rawResult: Output of PaddleOCR.predict()

        Returns:
            Text blocks sorted by top edge, then left edge
        """
        textBlocks: List[TextBlock] = []

        if not rawResult:
            self._logger.debug("OCR returned no results")
            return textBlocks

        for res in rawResult:
            # Access structured output
            recTexts = res.get('rec_texts', [])
            recScores = res.get('rec_scores', [])
            dtPolys = res.get('dt_polys', [])

            for i, text in enumerate(recTexts):
                confidence = recScores[i] if i < len(recScores) else 0.0
                bbox = dtPolys[i].tolist() if i < len(dtPolys) else []

                textBlocks.append(TextBlock(
                    text=str(text),
                    confidence=float(confidence),
                    bbox=bbox
                ))

                self._logger.debug(
                    f"OCR detected: '{text}' (confidence: {confidence:.3f})"
                )

        textBlocks.sort(key=self._readingOrderKey)
        return textBlocks

    @staticmethod
    def _readingOrderKey(block: TextBlock):
        """Sort key: (top y, left x) of the block's polygon."""
        if not block.bbox:
            return (0.0, 0.0)
        return (
            min(point[1] for point in block.bbox),
            min(point[0] for point in block.bbox)
        )
