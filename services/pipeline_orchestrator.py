"""
Pipeline Orchestrator Module.

Orchestrates the 3-step image analysis pipeline.
Creates ConfigService and initializes all services with proper parameters.

Pipeline Steps:
1. S1 QR Scan: Find every QR code in the image
2. S2 OCR: Recognize text and extract URLs
3. S3 Result Merge: Combine both, dropping URLs already found as QR codes

S1 and S2 are independent; the async entry point in
services.image_analyzer runs them concurrently.

Follows:
- SRP: Only handles pipeline orchestration
- DIP: Services receive parameters, not dependencies
- OCP: Easy to add new services
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from core.image.raster_image import RasterImage, ImageLoadError
from core.interfaces.ocr_extractor_interface import IOcrExtractor
from core.interfaces.qr_detector_interface import IQrDetector
from services.errors import ImageAnalysisError
from services.impl.config_service import ConfigService
from services.impl.s1_qr_scan_service import S1QrScanService
from services.impl.s2_ocr_service import S2OcrService
from services.impl.s3_result_merge_service import S3ResultMergeService
from services.interfaces.qr_scan_service_interface import QrScanServiceResult
from services.interfaces.ocr_service_interface import OcrServiceResult
from services.interfaces.result_merge_service_interface import AnalysisResult


DEFAULT_CONFIG_PATH = str(
    Path(__file__).resolve().parent.parent / "config" / "application_config.json"
)


def newRequestId() -> str:
    """Create a timestamp-based identifier for one analysis request."""
    now = datetime.now()
    timestamp = now.strftime("%Y%m%d_%H%M%S") + f"_{now.microsecond // 1000:03d}"
    return f"req_{timestamp}"


class PipelineOrchestrator:
    """
    Orchestrates the complete image analysis pipeline.

    Responsibilities:
    - Initialize ConfigService
    - Create all pipeline services with parameters from config
    - Run the steps and map unrecoverable failures to ImageAnalysisError
    - Provide access to individual services
    """

    def __init__(
        self,
        configPath: str = DEFAULT_CONFIG_PATH,
        qrDetector: Optional[IQrDetector] = None,
        ocrExtractor: Optional[IOcrExtractor] = None
    ):
        """
        Initialize the pipeline orchestrator.

        Args:
            configPath: Path to the application configuration file.
            qrDetector: Optional detector replacing the configured QR backend.
            ocrExtractor: Optional extractor replacing the configured OCR backend.
        """
        self._logger = logging.getLogger(__name__)

        # Step 1: Initialize ConfigService (reads from JSON)
        self._configService = ConfigService(configPath)
        self._logger.info("ConfigService initialized")

        debugBasePath = self._configService.getDebugBasePath()
        debugEnabled = self._configService.isDebugEnabled()

        # Step 2: Initialize all services with parameters from config
        self._initializeServices(debugBasePath, debugEnabled, qrDetector, ocrExtractor)

        self._logger.info("PipelineOrchestrator initialized successfully")

    def _initializeServices(
        self,
        debugBasePath: str,
        debugEnabled: bool,
        qrDetector: Optional[IQrDetector],
        ocrExtractor: Optional[IOcrExtractor]
    ) -> None:
        """
        Initialize all pipeline services with parameters from config.

        Following DIP: Services receive parameters, not IConfigService.
        Each service creates its core components internally.
        """
        # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
        # S1 QR Scan Service
        # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
        self._s1QrScanService = S1QrScanService(
            enabled=self._configService.isQrScanEnabled(),
            backend=self._configService.getQrBackend(),
            tryInvert=self._configService.isQrTryInvert(),
            zxingTryRotate=self._configService.isQrTryRotate(),
            zxingTryDownscale=self._configService.isQrTryDownscale(),
            upscaleTargetSize=self._configService.getQrUpscaleTargetSize(),
            similarityThreshold=self._configService.getQrSimilarityThreshold(),
            minRegionSize=self._configService.getQrMinRegionSize(),
            horizontalSections=self._configService.getQrHorizontalSections(),
            gridSize=self._configService.getQrGridSize(),
            targetCodeCount=self._configService.getQrTargetCodeCount(),
            debugBasePath=debugBasePath,
            debugEnabled=debugEnabled,
            qrDetector=qrDetector
        )
        self._logger.info("S1QrScanService initialized")

        # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
        # S2 OCR Service
        # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
        self._s2OcrService = S2OcrService(
            enabled=self._configService.isOcrEnabled(),
            backend=self._configService.getOcrBackend(),
            tesseractCmd=self._configService.getTesseractCmd(),
            contrastAmount=self._configService.getOcrContrastAmount(),
            orientations=self._configService.getOcrOrientations(),
            paddleDevice=self._configService.getOcrDevice(),
            paddleCpuThreads=self._configService.getOcrCpuThreads(),
            debugBasePath=debugBasePath,
            debugEnabled=debugEnabled,
            ocrExtractor=ocrExtractor
        )
        self._logger.info("S2OcrService initialized")

        # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
        # S3 Result Merge Service
        # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
        self._s3ResultMergeService = S3ResultMergeService(
            debugBasePath=debugBasePath,
            debugEnabled=debugEnabled
        )
        self._logger.info("S3ResultMergeService initialized")

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Pipeline Steps
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def scanQrCodes(self, imagePath: str, requestId: str) -> QrScanServiceResult:
        """
        Load the image and run Step 1.

        Raises:
            ImageAnalysisError: If the image cannot be loaded or scanning fails.
        """
        try:
            image = RasterImage.load(imagePath)
        except ImageLoadError as e:
            self._logger.error(f"[{requestId}] {e}")
            raise ImageAnalysisError(str(e)) from e

        result = self._s1QrScanService.scanQr(image, requestId)
        if not result.success:
            raise ImageAnalysisError(result.errorMessage)
        return result

    def extractUrls(self, imagePath: str, requestId: str) -> OcrServiceResult:
        """Run Step 2. Never raises for recognition failures."""
        return self._s2OcrService.extractUrls(imagePath, requestId)

    def mergeResults(
        self,
        qrResult: QrScanServiceResult,
        ocrResult: OcrServiceResult,
        requestId: str
    ) -> AnalysisResult:
        """Run Step 3 and save timing when debug is enabled."""
        result = self._s3ResultMergeService.merge(qrResult.qrcodes, ocrResult.urls, requestId)

        self.savePipelineTiming(requestId, {
            "s1_qr_scan": qrResult.processingTimeMs,
            "s2_ocr": ocrResult.processingTimeMs
        })
        return result

    def analyzeImage(self, imagePath: str, requestId: Optional[str] = None) -> AnalysisResult:
        """
        Analyze one image synchronously (S1, then S2, then S3).

        Args:
            imagePath: Path to the image file.
            requestId: Identifier for logs and debug output (generated if None).

        Returns:
            AnalysisResult with QR payloads and OCR URLs.

        Raises:
            ImageAnalysisError: If the image cannot be analyzed.
        """
        requestId = requestId or newRequestId()
        self._logger.info(f"[{requestId}] Analyzing {imagePath}")

        qrResult = self.scanQrCodes(imagePath, requestId)
        ocrResult = self.extractUrls(imagePath, requestId)
        return self.mergeResults(qrResult, ocrResult, requestId)

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Service Access
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    @property
    def configService(self) -> ConfigService:
        """Get the config service."""
        return self._configService

    @property
    def qrScanService(self) -> S1QrScanService:
        """Get the S1 QR scan service."""
        return self._s1QrScanService

    @property
    def ocrService(self) -> S2OcrService:
        """Get the S2 OCR service."""
        return self._s2OcrService

    @property
    def resultMergeService(self) -> S3ResultMergeService:
        """Get the S3 result merge service."""
        return self._s3ResultMergeService

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Debug Control
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def setDebugEnabled(self, enabled: bool) -> None:
        """
        Enable or disable debug mode for all services.

        Args:
            enabled: True to enable debug output for all services.
        """
        self._configService.setDebugEnabled(enabled)

        self._s1QrScanService.setDebugEnabled(enabled)
        self._s2OcrService.setDebugEnabled(enabled)
        self._s3ResultMergeService.setDebugEnabled(enabled)

        self._logger.info(f"Debug mode {'enabled' if enabled else 'disabled'} for all services")

    def isDebugEnabled(self) -> bool:
        """Check if debug mode is enabled."""
        return self._configService.isDebugEnabled()

    def getDebugBasePath(self) -> str:
        """Get the debug base path from config."""
        return self._configService.getDebugBasePath()

    def savePipelineTiming(
        self,
        requestId: str,
        timing: Dict[str, float]
    ) -> Optional[str]:
        """
        Save pipeline timing information to JSON file.

        Only saves when debug is enabled. Timing is saved to
        output/debug/timing/timing_{requestId}.json.

        Args:
            requestId: Request identifier (same as other debug outputs).
            timing: Dictionary with step names and their timing in ms.

        Returns:
            Saved file path, or None if debug disabled or failed.
        """
        if not self.isDebugEnabled():
            return None

        try:
            timingPath = Path(self.getDebugBasePath()) / "timing"
            timingPath.mkdir(parents=True, exist_ok=True)

            timingData = {
                "requestId": requestId,
                "timestamp": datetime.now().isoformat(),
                "timing_ms": timing,
                "summary": {
                    "total_ms": round(sum(timing.values()), 2)
                }
            }

            filepath = timingPath / f"timing_{requestId}.json"
            with open(filepath, 'w', encoding='utf-8') as f:
                json.dump(timingData, f, indent=2, ensure_ascii=False)

            self._logger.debug(f"Pipeline timing saved: {filepath}")
            return str(filepath)

        except OSError as e:
            self._logger.error(f"Failed to save pipeline timing: {e}")
            return None
