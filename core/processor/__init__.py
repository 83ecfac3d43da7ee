"""Text Processor module."""

from core.processor.url_text_processor import (
    UrlTextProcessor,
    extractURLsFromText,
    isURL
)

__all__ = ['UrlTextProcessor', 'extractURLsFromText', 'isURL']
