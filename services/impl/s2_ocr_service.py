"""
S2 OCR Service Implementation.

Step 2 of the pipeline: OCR text recognition and URL extraction.
Creates the OCR extractor from core layer using factory pattern.

Follows:
- SRP: Only handles OCR operations
- DIP: Depends on IOcrExtractor and ITextProcessor abstractions
- Factory Pattern: Uses createOcrExtractor() for backend selection
"""

from typing import Dict, List, Optional

from core.image.raster_image import RasterImage, ImageLoadError
from core.interfaces.ocr_extractor_interface import IOcrExtractor
from core.interfaces.text_processor_interface import ITextProcessor
from core.ocr.ocr_extractor_factory import createOcrExtractor
from core.ocr.ocr_image_preprocessor import OcrImagePreprocessor
from core.processor.url_text_processor import UrlTextProcessor
from services.interfaces.ocr_service_interface import (
    IOcrService,
    OcrServiceResult
)
from services.interfaces.base_service_interface import BaseService


class S2OcrService(IOcrService, BaseService):
    """
    Step 2: OCR Service Implementation.

    Loads the image, prepares it (greyscale + contrast), recognizes text
    and extracts URLs. With several orientations configured, the first
    orientation that yields a URL wins.
    """

    SERVICE_NAME = "s2_ocr"

    def __init__(
        self,
        enabled: bool = True,
        backend: str = "tesseract",
        tesseractCmd: Optional[str] = None,
        contrastAmount: float = 0.3,
        orientations: Optional[List[int]] = None,
        paddleDevice: str = "cpu",
        paddleCpuThreads: int = 4,
        debugBasePath: str = "output/debug",
        debugEnabled: bool = False,
        ocrExtractor: Optional[IOcrExtractor] = None,
        textProcessor: Optional[ITextProcessor] = None
    ):
        """
        Initialize S2OcrService.

        Args:
            enabled: Whether OCR is enabled.
            backend: OCR backend ("tesseract" or "paddle").
            tesseractCmd: (tesseract) Path to the tesseract binary.
            contrastAmount: Contrast boost applied before recognition.
            orientations: Rotation angles to try in order (default: [0]).
            paddleDevice: (paddle) Inference device.
            paddleCpuThreads: (paddle) Number of CPU threads.
            debugBasePath: Base path for debug output.
            debugEnabled: Whether to save debug output.
            ocrExtractor: Extractor to use instead of creating one from backend.
            textProcessor: URL extractor (default: UrlTextProcessor).
        """
        BaseService.__init__(
            self,
            serviceName=self.SERVICE_NAME,
            debugBasePath=debugBasePath,
            debugEnabled=debugEnabled
        )

        if ocrExtractor is None:
            ocrExtractor = createOcrExtractor(
                backend=backend,
                tesseractCmd=tesseractCmd,
                paddleDevice=paddleDevice,
                paddleCpuThreads=paddleCpuThreads
            )
            self._backend = backend
        else:
            self._backend = type(ocrExtractor).__name__

        self._ocrExtractor: IOcrExtractor = ocrExtractor
        self._textProcessor: ITextProcessor = textProcessor or UrlTextProcessor()
        self._preprocessor = OcrImagePreprocessor(contrastAmount=contrastAmount)
        self._orientations = list(orientations) if orientations else [0]
        self._enabled = enabled

        self._logger.info(
            f"S2OcrService initialized "
            f"(backend={self._backend}, contrast={contrastAmount}, "
            f"orientations={self._orientations})"
        )

    def extractUrls(
        self,
        imagePath: str,
        requestId: str
    ) -> OcrServiceResult:
        """
        Recognize text in an image file and extract URLs.

        Args:
            imagePath: Path to the image file.
            requestId: Request identifier.

        Returns:
            OcrServiceResult with URLs. Load and recognition failures are
            logged and reported with success=False and no URLs.
        """
        startTime = self._startTimer()

        if not self._enabled:
            self._logger.debug(f"[{requestId}] OCR disabled")
            return OcrServiceResult(
                requestId=requestId,
                processingTimeMs=self._measureTime(startTime)
            )

        try:
            image = RasterImage.load(imagePath)
        except ImageLoadError as e:
            self._logger.error(f"[{requestId}] OCR could not load image: {e}")
            return OcrServiceResult(
                requestId=requestId,
                success=False,
                errorMessage=str(e),
                processingTimeMs=self._measureTime(startTime)
            )

        urls: Dict[str, None] = {}
        texts: List[str] = []
        tried: List[int] = []
        errors: List[str] = []

        for angle in self._orientations:
            tried.append(angle)

            try:
                imageBytes = self._preprocessor.prepare(image, angle)
                ocrResult = self._ocrExtractor.extract(imageBytes)
            except Exception as e:
                self._logger.warning(f"[{requestId}] OCR raised at {angle}°: {e}")
                errors.append(str(e))
                continue

            if not ocrResult.success:
                self._logger.warning(
                    f"[{requestId}] OCR failed at {angle}°: {ocrResult.errorMessage}"
                )
                errors.append(ocrResult.errorMessage)
                continue

            texts.append(ocrResult.text)
            for url in self._textProcessor.extractUrls(ocrResult.text):
                urls.setdefault(url, None)

            if urls:
                self._logger.debug(f"[{requestId}] URLs found at {angle}°, stopping")
                break

        processingTimeMs = self._measureTime(startTime)

        # Every attempt failed
        if errors and not texts:
            return OcrServiceResult(
                orientationsTried=tried,
                requestId=requestId,
                success=False,
                errorMessage="; ".join(errors),
                processingTimeMs=processingTimeMs
            )

        result = OcrServiceResult(
            urls=list(urls),
            texts=texts,
            orientationsTried=tried,
            requestId=requestId,
            processingTimeMs=processingTimeMs
        )

        self._saveDebugJson(requestId, {
            "requestId": requestId,
            "backend": self._backend,
            "orientationsTried": tried,
            "texts": texts,
            "urls": result.urls
        }, "ocr")

        self._logTiming(requestId, processingTimeMs)
        self._logger.info(
            f"[{requestId}] {len(result.urls)} URL(s) from OCR "
            f"(orientations={tried}, time={processingTimeMs:.2f}ms)"
        )

        return result

    def setEnabled(self, enabled: bool) -> None:
        """Enable or disable OCR."""
        self._enabled = enabled
        self._logger.info(f"OCR {'enabled' if enabled else 'disabled'}")

    def isEnabled(self) -> bool:
        """Check if OCR is enabled."""
        return self._enabled

    def getBackend(self) -> str:
        """Get current OCR backend."""
        return self._backend
