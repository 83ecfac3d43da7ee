"""
Multi QR Scanner Module.

A single-code decoder returns at most one QR code per call. This module
finds several codes in one image by decoding the full frame, then
horizontal strips, then a grid of cells, for each preprocessing variant.
Repeated hits of the same physical code are removed by location.

Scan procedure per variant:
1. Full frame
2. Horizontal strips (thirds by default)
3. Grid cells (4x4 by default), only while fewer than targetCodeCount codes were found

Variants stop as soon as targetCodeCount codes are accumulated.

Follows the Single Responsibility Principle (SRP) from SOLID.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Tuple

from core.image.raster_image import RasterImage
from core.interfaces.qr_detector_interface import (
    IQrDetector,
    QrDetectionResult,
    QrLocation
)
from core.processor.url_text_processor import isURL
from core.qr.qr_image_preprocessor import QrImagePreprocessor


logger = logging.getLogger(__name__)


@dataclass
class QrResult:
    """
    One accepted QR code.

    Attributes:
        value: Decoded payload, untrimmed
        isURL: Whether the payload looks like a URL
    """
    value: str
    isURL: bool


@dataclass
class RegionScanOutcome:
    """
    Outcome of decoding one region.

    success=False means the crop or the decoder failed; the scan moves on.
    success=True with code=None means the region was read but held no code.

    Attributes:
        success: Whether cropping and decoding ran without error
        code: Decoded code, coordinates relative to the region
        errorMessage: Failure detail when success is False
    """
    success: bool
    code: Optional[QrDetectionResult] = None
    errorMessage: str = ""


def isSimilarLocation(
    loc1: QrLocation,
    loc2: QrLocation,
    threshold: float = 50
) -> bool:
    """
    Check whether two code locations belong to the same physical code.

    Args:
        loc1: First top-left corner
        loc2: Second top-left corner
        threshold: Maximum distance per axis (exclusive)

    Returns:
        True if both |dx| and |dy| are below threshold
    """
    return abs(loc1.x - loc2.x) < threshold and abs(loc1.y - loc2.y) < threshold


class MultiQrScanner:
    """
    Finds every QR code in an image using a single-code detector.

    Found locations are kept in the coordinate space of the upscaled
    working image for the duration of one scan() call.
    """

    def __init__(
        self,
        detector: IQrDetector,
        preprocessor: Optional[QrImagePreprocessor] = None,
        similarityThreshold: float = 50,
        minRegionSize: int = 50,
        horizontalSections: int = 3,
        gridSize: int = 4,
        targetCodeCount: int = 2,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize MultiQrScanner.

        Args:
            detector: Single-code QR detector
            preprocessor: Upscaler and variant generator (default: QrImagePreprocessor())
            similarityThreshold: Per-axis distance below which two hits are the same code
            minRegionSize: Regions narrower or shorter than this are skipped
            horizontalSections: Number of vertical strips across the width
            gridSize: Grid is gridSize x gridSize cells
            targetCodeCount: Stop once this many codes were found
            logger: Logger instance for debug output
        """
        self._detector = detector
        self._preprocessor = preprocessor or QrImagePreprocessor()
        self._similarityThreshold = similarityThreshold
        self._minRegionSize = minRegionSize
        self._horizontalSections = horizontalSections
        self._gridSize = gridSize
        self._targetCodeCount = targetCodeCount
        self._logger = logger or logging.getLogger(__name__)

        self._logger.info(
            f"MultiQrScanner initialized (sections={horizontalSections}, "
            f"grid={gridSize}x{gridSize}, threshold={similarityThreshold}, "
            f"target={targetCodeCount})"
        )

    @property
    def preprocessor(self) -> QrImagePreprocessor:
        """Get the image preprocessor."""
        return self._preprocessor

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Scanning
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def scan(
        self,
        image: RasterImage,
        onVariant: Optional[Callable[[str, RasterImage], None]] = None
    ) -> List[QrResult]:
        """
        Scan an image for all QR codes.

        Args:
            image: Loaded image (not modified)
            onVariant: Optional callback receiving each (variantName, variantImage),
                       e.g. for saving debug images

        Returns:
            List of QrResult in discovery order
        """
        working = self._preprocessor.upscale(image)

        qrcodes: List[QrResult] = []
        foundLocations: List[QrLocation] = []

        for variantName, variant in self._preprocessor.iterVariants(working):
            if onVariant is not None:
                onVariant(variantName, variant)

            countBefore = len(qrcodes)

            # 1. Full frame
            outcome = self._scanRegion(variant, None)
            self._accept(outcome, (0, 0), qrcodes, foundLocations)

            # 2. Horizontal strips
            for region in self._iterStrips(variant.width, variant.height):
                outcome = self._scanRegion(variant, region)
                self._accept(outcome, region[:2], qrcodes, foundLocations)

            # 3. Grid, only when the strips were not enough
            if len(qrcodes) < self._targetCodeCount:
                for region in self._iterCells(variant.width, variant.height):
                    outcome = self._scanRegion(variant, region)
                    self._accept(outcome, region[:2], qrcodes, foundLocations)

            self._logger.debug(
                f"Variant '{variantName}': {len(qrcodes) - countBefore} new, "
                f"{len(qrcodes)} total"
            )

            if len(qrcodes) >= self._targetCodeCount:
                break

        self._logger.info(f"Found {len(qrcodes)} QR code(s)")
        return qrcodes

    def _iterStrips(self, width: int, height: int) -> Iterator[Tuple[int, int, int, int]]:
        """Yield (x, y, w, h) of full-height strips that are wide enough."""
        stripWidth = width // self._horizontalSections

        for i in range(self._horizontalSections):
            x = i * stripWidth
            w = min(stripWidth, width - x)
            if w < self._minRegionSize:
                continue
            yield (x, 0, w, height)

    def _iterCells(self, width: int, height: int) -> Iterator[Tuple[int, int, int, int]]:
        """Yield (x, y, w, h) of grid cells in row-major order."""
        cellWidth = width // self._gridSize
        cellHeight = height // self._gridSize

        if cellWidth < self._minRegionSize or cellHeight < self._minRegionSize:
            return

        for row in range(self._gridSize):
            for col in range(self._gridSize):
                yield (col * cellWidth, row * cellHeight, cellWidth, cellHeight)

    def _scanRegion(
        self,
        variant: RasterImage,
        region: Optional[Tuple[int, int, int, int]]
    ) -> RegionScanOutcome:
        """
        Decode one region of a variant on its own clone.

        Args:
            variant: Preprocessed image (not modified)
            region: (x, y, w, h) to crop, or None for the full frame

        Returns:
            RegionScanOutcome; errors are captured, never raised
        """
        try:
            if region is None:
                pixels = variant.pixelData
            else:
                pixels = variant.clone().crop(*region).pixelData

            return RegionScanOutcome(success=True, code=self._detector.detect(pixels))

        except Exception as e:
            return RegionScanOutcome(success=False, errorMessage=f"region {region or 'full'}: {e}")

    def _accept(
        self,
        outcome: RegionScanOutcome,
        offset: Tuple[int, int],
        qrcodes: List[QrResult],
        foundLocations: List[QrLocation]
    ) -> bool:
        """
        Add a decoded code unless it is empty or a repeat of a known location.

        Args:
            outcome: Region scan outcome
            offset: (x, y) of the region within the working image
            qrcodes: Accumulated results (appended to)
            foundLocations: Accepted locations (appended to)

        Returns:
            True if the code was added
        """
        if not outcome.success:
            self._logger.debug(f"Skipped failed {outcome.errorMessage}")
            return False

        if outcome.code is None:
            return False

        code = outcome.code
        if not code.text or not code.text.strip():
            return False

        location = code.location.translated(offset[0], offset[1])
        for known in foundLocations:
            if isSimilarLocation(location, known, self._similarityThreshold):
                return False

        foundLocations.append(location)
        qrcodes.append(QrResult(value=code.text, isURL=isURL(code.text)))

        self._logger.debug(f"Accepted QR code at ({location.x}, {location.y}): {code.text}")
        return True
