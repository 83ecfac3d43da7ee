"""
S1 QR Scan Service Implementation.

Step 1 of the pipeline: multi-code QR scanning.
Creates the QR detector from core layer using factory pattern and wraps it
in a MultiQrScanner.

Follows:
- SRP: Only handles QR scanning operations
- DIP: Depends on IQrDetector abstraction (interface)
- Factory Pattern: Uses createQrDetector() for backend selection
"""

from typing import Optional

from core.image.raster_image import RasterImage
from core.interfaces.qr_detector_interface import IQrDetector
from core.qr import createQrDetector, MultiQrScanner, QrImagePreprocessor
from services.interfaces.qr_scan_service_interface import (
    IQrScanService,
    QrScanServiceResult
)
from services.interfaces.base_service_interface import BaseService


class S1QrScanService(IQrScanService, BaseService):
    """
    Step 1: QR Scan Service Implementation.

    Finds every QR code in an image. The detector backend (zxing-cpp or
    pyzbar) is selected via factory; a detector can also be injected.
    """

    SERVICE_NAME = "s1_qr_scan"

    def __init__(
        self,
        # Basic settings
        enabled: bool = True,

        # Backend selection
        backend: str = "zxing",
        tryInvert: bool = True,

        # ZXing params (prefixed with 'zxing')
        zxingTryRotate: bool = True,
        zxingTryDownscale: bool = True,

        # Scanner params
        upscaleTargetSize: int = 800,
        similarityThreshold: float = 50,
        minRegionSize: int = 50,
        horizontalSections: int = 3,
        gridSize: int = 4,
        targetCodeCount: int = 2,

        # Debug settings
        debugBasePath: str = "output/debug",
        debugEnabled: bool = False,

        # Injected detector (overrides backend)
        qrDetector: Optional[IQrDetector] = None
    ):
        """
        Initialize S1QrScanService.

        Args:
            enabled: Whether QR scanning is enabled.
            backend: QR decode backend ("zxing" or "pyzbar").
            tryInvert: Retry on inverted images (light-on-dark codes).
            zxingTryRotate: (ZXing) Try rotated barcodes (90/270 degrees).
            zxingTryDownscale: (ZXing) Try downscaled versions for better detection.
            upscaleTargetSize: Minimum side length images are upscaled to.
            similarityThreshold: Per-axis distance below which hits are the same code.
            minRegionSize: Regions smaller than this are skipped.
            horizontalSections: Number of vertical strips.
            gridSize: Grid dimension (N x N).
            targetCodeCount: Stop once this many codes are found.
            debugBasePath: Base path for debug output.
            debugEnabled: Whether to save debug output.
            qrDetector: Detector to use instead of creating one from backend.
        """
        BaseService.__init__(
            self,
            serviceName=self.SERVICE_NAME,
            debugBasePath=debugBasePath,
            debugEnabled=debugEnabled
        )

        if qrDetector is None:
            qrDetector = createQrDetector(
                backend=backend,
                tryInvert=tryInvert,
                zxingTryRotate=zxingTryRotate,
                zxingTryDownscale=zxingTryDownscale
            )
            self._backend = backend
        else:
            self._backend = type(qrDetector).__name__

        self._scanner = MultiQrScanner(
            detector=qrDetector,
            preprocessor=QrImagePreprocessor(targetMinSize=upscaleTargetSize),
            similarityThreshold=similarityThreshold,
            minRegionSize=minRegionSize,
            horizontalSections=horizontalSections,
            gridSize=gridSize,
            targetCodeCount=targetCodeCount
        )

        self._enabled = enabled

        self._logger.info(
            f"S1QrScanService initialized "
            f"(backend={self._backend}, upscale={upscaleTargetSize}px, "
            f"grid={gridSize}x{gridSize}, target={targetCodeCount})"
        )

    def scanQr(
        self,
        image: RasterImage,
        requestId: str
    ) -> QrScanServiceResult:
        """
        Scan an image for all QR codes.

        Timing covers upscaling, preprocessing and all decode passes.

        Args:
            image: Loaded input image (not modified).
            requestId: Request identifier.

        Returns:
            QrScanServiceResult with the accepted codes.
        """
        startTime = self._startTimer()

        if not self._enabled:
            self._logger.debug(f"[{requestId}] QR scanning disabled")
            return QrScanServiceResult(
                requestId=requestId,
                processingTimeMs=self._measureTime(startTime)
            )

        if image is None:
            self._logger.warning(f"[{requestId}] No image provided for QR scanning")
            return QrScanServiceResult(
                requestId=requestId,
                success=False,
                errorMessage="No image provided",
                processingTimeMs=self._measureTime(startTime)
            )

        try:
            onVariant = None
            if self._debugEnabled:
                onVariant = lambda name, variant: self._saveDebugImage(
                    requestId, variant, prefix=name
                )

            qrcodes = self._scanner.scan(image, onVariant=onVariant)

        except Exception as e:
            self._logger.error(f"[{requestId}] QR scanning failed: {e}")
            return QrScanServiceResult(
                requestId=requestId,
                success=False,
                errorMessage=str(e),
                processingTimeMs=self._measureTime(startTime)
            )

        processingTimeMs = self._measureTime(startTime)

        self._saveDebugOutput(requestId, qrcodes, image)

        self._logTiming(requestId, processingTimeMs)
        self._logger.info(
            f"[{requestId}] {len(qrcodes)} QR code(s) found "
            f"(scale={self._scanner.preprocessor.scaleFactorFor(*image.size):.2f}, "
            f"time={processingTimeMs:.2f}ms)"
        )

        return QrScanServiceResult(
            qrcodes=qrcodes,
            requestId=requestId,
            processingTimeMs=processingTimeMs
        )

    def setEnabled(self, enabled: bool) -> None:
        """Enable or disable QR scanning."""
        self._enabled = enabled
        self._logger.info(f"QR scanning {'enabled' if enabled else 'disabled'}")

    def isEnabled(self) -> bool:
        """Check if QR scanning is enabled."""
        return self._enabled

    def getBackend(self) -> str:
        """Get current QR decode backend."""
        return self._backend

    def _saveDebugOutput(self, requestId: str, qrcodes, image: RasterImage) -> None:
        """Save debug output for QR scan step."""
        if not self._debugEnabled:
            return

        data = {
            "requestId": requestId,
            "backend": self._backend,
            "imageSize": list(image.size),
            "scaleFactor": self._scanner.preprocessor.scaleFactorFor(*image.size),
            "qrcodes": [
                {"value": code.value, "isURL": code.isURL}
                for code in qrcodes
            ]
        }
        self._saveDebugJson(requestId, data, "qr")
