"""
Services Implementation Package.

Exports all service implementations for the image analysis pipeline.
"""

from services.impl.config_service import ConfigService
from services.impl.s1_qr_scan_service import S1QrScanService
from services.impl.s2_ocr_service import S2OcrService
from services.impl.s3_result_merge_service import S3ResultMergeService


__all__ = [
    "ConfigService",
    "S1QrScanService",
    "S2OcrService",
    "S3ResultMergeService",
]
