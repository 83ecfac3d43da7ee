"""
Image Analyzer Module.

Public entry points of the pipeline:
- analyzeImage(): coroutine returning QR payloads and OCR URLs of an image
- extractURLsFromText(): URL extraction from plain text
- isURL(): URL-likeness check

QR scanning and OCR are blocking and independent, so analyzeImage()
runs them on worker threads at the same time and merges once both finish.
"""

import asyncio
import logging
from typing import Dict, Optional

from core.processor.url_text_processor import extractURLsFromText, isURL
from services.errors import ImageAnalysisError
from services.interfaces.result_merge_service_interface import AnalysisResult
from services.pipeline_orchestrator import (
    DEFAULT_CONFIG_PATH,
    PipelineOrchestrator,
    newRequestId
)


logger = logging.getLogger(__name__)

# One orchestrator per config file; OCR engines are expensive to start
_orchestrators: Dict[str, PipelineOrchestrator] = {}


def getOrchestrator(configPath: Optional[str] = None) -> PipelineOrchestrator:
    """
    Get the shared orchestrator for a config file, creating it on first use.

    Args:
        configPath: Path to the configuration file (default: bundled config).

    Returns:
        PipelineOrchestrator
    """
    configPath = configPath or DEFAULT_CONFIG_PATH
    if configPath not in _orchestrators:
        _orchestrators[configPath] = PipelineOrchestrator(configPath)
    return _orchestrators[configPath]


async def analyzeImage(
    imagePath: str,
    configPath: Optional[str] = None,
    orchestrator: Optional[PipelineOrchestrator] = None
) -> AnalysisResult:
    """
    Analyze an image for QR codes and on-screen URLs.

    Args:
        imagePath: Path to the image file.
        configPath: Configuration file (ignored when orchestrator is given).
        orchestrator: Pipeline to use instead of the shared one.

    Returns:
        AnalysisResult: {qrcodes, urls}; urls never repeats a URL-like QR payload.

    Raises:
        ImageAnalysisError: "Failed to analyze image: <cause>" when the image
            cannot be read or scanning fails.
    """
    requestId = newRequestId()
    logger.info(f"[{requestId}] Analyzing {imagePath}")

    # Config, backend and merge failures surface as ImageAnalysisError too
    try:
        orchestrator = orchestrator or getOrchestrator(configPath)

        qrResult, ocrResult = await asyncio.gather(
            asyncio.to_thread(orchestrator.scanQrCodes, imagePath, requestId),
            asyncio.to_thread(orchestrator.extractUrls, imagePath, requestId)
        )

        return orchestrator.mergeResults(qrResult, ocrResult, requestId)

    except ImageAnalysisError:
        raise
    except Exception as e:
        logger.error(f"[{requestId}] Analysis failed: {e}")
        raise ImageAnalysisError(str(e)) from e


__all__ = [
    'analyzeImage',
    'extractURLsFromText',
    'isURL',
    'getOrchestrator',
]
