"""
Services Interfaces Package.

Exports all service interfaces for the image analysis pipeline.
"""

from services.interfaces.base_service_interface import (
    IBaseService,
    BaseService
)

from services.interfaces.config_service_interface import IConfigService

from services.interfaces.qr_scan_service_interface import (
    QrScanServiceResult,
    IQrScanService
)

from services.interfaces.ocr_service_interface import (
    OcrServiceResult,
    IOcrService
)

from services.interfaces.result_merge_service_interface import (
    AnalysisResult,
    IResultMergeService
)


__all__ = [
    # Base
    "IBaseService",
    "BaseService",
    # Config
    "IConfigService",
    # Step 1: QR Scan
    "QrScanServiceResult",
    "IQrScanService",
    # Step 2: OCR
    "OcrServiceResult",
    "IOcrService",
    # Step 3: Result Merge
    "AnalysisResult",
    "IResultMergeService",
]
