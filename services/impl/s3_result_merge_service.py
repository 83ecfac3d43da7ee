"""
S3 Result Merge Service Implementation.

Step 3 of the pipeline: combine QR payloads and OCR URLs.
A URL that was both printed and encoded in a QR code is reported once,
as a QR code.

Follows:
- SRP: Only handles result merging
"""

from typing import List

from core.qr.multi_qr_scanner import QrResult
from services.interfaces.result_merge_service_interface import (
    IResultMergeService,
    AnalysisResult
)
from services.interfaces.base_service_interface import BaseService


class S3ResultMergeService(IResultMergeService, BaseService):
    """Step 3: Result Merge Service Implementation."""

    SERVICE_NAME = "s3_result_merge"

    def __init__(
        self,
        debugBasePath: str = "output/debug",
        debugEnabled: bool = False
    ):
        BaseService.__init__(
            self,
            serviceName=self.SERVICE_NAME,
            debugBasePath=debugBasePath,
            debugEnabled=debugEnabled
        )

    def merge(
        self,
        qrcodes: List[QrResult],
        ocrUrls: List[str],
        requestId: str = ""
    ) -> AnalysisResult:
        """
        Merge QR codes and OCR URLs.

        Only QR payloads classified as URLs are removed from the OCR list,
        and only on exact match.
        """
        qrUrls = {code.value for code in qrcodes if code.isURL}
        urls = [url for url in ocrUrls if url not in qrUrls]

        removed = len(ocrUrls) - len(urls)
        if removed:
            self._logger.debug(f"[{requestId}] Dropped {removed} OCR URL(s) already in QR codes")

        result = AnalysisResult(
            qrcodes=[code.value for code in qrcodes],
            urls=urls
        )

        self._saveDebugJson(requestId, result.toDict(), "result")
        return result
