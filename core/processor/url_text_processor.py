"""
URL Text Processor Implementation.

This module turns noisy OCR text into a list of URLs by:
1. Repairing characters OCR commonly misreads (dashes, ligatures)
2. Stitching URLs that were wrapped across two lines
3. Extracting complete http(s) URLs with punctuation cleanup
4. Extracting bare domains (www.example.com, example.org/path)

Each stage is a plain function so it can be tested on its own;
UrlTextProcessor chains them.

Follows the Single Responsibility Principle (SRP) from SOLID.
"""

import re
import logging
from typing import Dict, List, Optional

from core.interfaces.text_processor_interface import ITextProcessor


logger = logging.getLogger(__name__)


# Character repairs, applied in order
CHARACTER_REPAIRS = [
    ('—', '-'),   # em-dash
    ('–', '-'),   # en-dash
    ('ﬁ', 'fi'),  # ligature fi
    ('ﬂ', 'fl'),  # ligature fl
]
MULTI_DASH_PATTERN = re.compile(r'-{2,}')

# A line ending in an unterminated URL fragment
WRAPPED_URL_PATTERN = re.compile(r'https?://\S*[^.\s,;:!?)\]}>]$')
# Leading URL-path characters of the following line
CONTINUATION_PATTERN = re.compile(r'^[a-zA-Z0-9_\-/.#?&=]+')
URL_START_PATTERN = re.compile(r'^https?://')

COMPLETE_URL_PATTERN = re.compile(r'https?://[^\s<>"{}|\\^`\[\]]+', re.IGNORECASE)
PARTIAL_URL_PATTERN = re.compile(
    r'(?:www\.)?(?:[a-zA-Z0-9-]+\.)+[a-zA-Z]{2,}(?:/[^\s<>"{}|\\^`\[\]]*)?',
    re.IGNORECASE
)
HOST_PATTERN = re.compile(r'https?://([^/]+)', re.IGNORECASE)

# Hosts ending like a filename are OCR'd file names, not links
FILE_EXTENSION_HOST_PATTERN = re.compile(
    r'\.(txt|doc|pdf|jpg|png|xlsx|docx|pptx|zip|rar)$',
    re.IGNORECASE
)

BARE_DOMAIN_PATTERN = re.compile(r'^(?:www\.)?[a-zA-Z0-9-]+\.[a-zA-Z]{2,}')

TRAILING_PUNCTUATION = '.,;:!?'
TRAILING_PUNCTUATION_WITH_PAREN = '.,;:!?)'


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Predicates
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def isURL(value: str) -> bool:
    """
    Check whether a string looks like a URL.

    True for anything starting with http:// or https://, and for strings
    that begin like a bare domain (optional "www.", a label, a dot and
    two or more letters).

    Args:
        value: String to check (e.g. a QR payload)

    Returns:
        True if the string is URL-like
    """
    if not value:
        return False
    return (
        value.startswith('http://')
        or value.startswith('https://')
        or BARE_DOMAIN_PATTERN.match(value) is not None
    )


def hasFileExtensionHost(url: str) -> bool:
    """Check whether the host of a URL ends in a document/image file extension."""
    match = HOST_PATTERN.match(url)
    host = match.group(1) if match else url.split('/', 1)[0]
    return FILE_EXTENSION_HOST_PATTERN.search(host) is not None


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Stages
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def repairCharacters(text: str) -> str:
    """
    Fix common OCR character substitutions.

    Em/en dashes become hyphens, fi/fl ligatures are expanded and
    runs of hyphens are collapsed to one.
    """
    for source, replacement in CHARACTER_REPAIRS:
        text = text.replace(source, replacement)
    return MULTI_DASH_PATTERN.sub('-', text)


def stitchWrappedLines(text: str) -> str:
    """
    Join URLs that OCR split across two lines.

    For a line ending in an unterminated URL fragment followed by a line
    starting with URL-path characters (and not with a new http(s)://),
    the continuation is appended to the fragment and removed from the
    next line. Lines are rewritten in place, so the output has the same
    number of lines as the input.

    Example:
        "see https://example.com/path-to-sp\\nlit-content more"
        -> "see https://example.com/path-to-split-content\\n more"
    """
    lines = re.split(r'\r?\n', text)

    for i in range(len(lines) - 1):
        currentLine = lines[i].strip()
        nextLine = lines[i + 1].strip()

        fragmentMatch = WRAPPED_URL_PATTERN.search(currentLine)
        if not fragmentMatch:
            continue

        continuationMatch = CONTINUATION_PATTERN.match(nextLine)
        if not continuationMatch or URL_START_PATTERN.match(nextLine):
            continue

        fragment = fragmentMatch.group(0)
        continuation = continuationMatch.group(0)
        joinedUrl = fragment + continuation

        lines[i] = currentLine.replace(fragment, joinedUrl, 1)
        lines[i + 1] = nextLine.replace(continuation, '', 1)

        logger.debug(f"Joined wrapped URL: {joinedUrl}")

    return '\n'.join(lines)


def stripTrailingPunctuation(candidate: str) -> str:
    """
    Remove one trailing punctuation character.

    A closing parenthesis is only removed when the candidate has more
    ")" than "(", so "wiki/Foo_(bar)" keeps its balanced paren.
    """
    if not candidate:
        return candidate

    if candidate.count(')') > candidate.count('('):
        removable = TRAILING_PUNCTUATION_WITH_PAREN
    else:
        removable = TRAILING_PUNCTUATION

    if candidate[-1] in removable:
        return candidate[:-1]
    return candidate


def extractCompleteUrls(text: str, urls: Dict[str, None]) -> Dict[str, None]:
    """
    Add every http(s) URL in the text to the ordered URL set.

    Args:
        text: Repaired, stitched text
        urls: Ordered set (dict keys) to add to

    Returns:
        The same ordered set
    """
    for match in COMPLETE_URL_PATTERN.finditer(text):
        cleanUrl = stripTrailingPunctuation(match.group(0))

        if hasFileExtensionHost(cleanUrl):
            logger.debug(f"Rejected filename-like URL: {cleanUrl}")
            continue

        urls.setdefault(cleanUrl, None)

    return urls


def extractPartialUrls(text: str, urls: Dict[str, None]) -> Dict[str, None]:
    """
    Add bare domains (www.example.com, example.org/path) as https:// URLs.

    Matches already contained in a URL of the set are skipped.

    Args:
        text: Repaired, stitched text
        urls: Ordered set (dict keys) already holding complete URLs

    Returns:
        The same ordered set
    """
    for match in PARTIAL_URL_PATTERN.finditer(text):
        candidate = match.group(0)

        if any(candidate in existing for existing in urls):
            continue

        cleanMatch = stripTrailingPunctuation(candidate)
        if hasFileExtensionHost(cleanMatch):
            logger.debug(f"Rejected filename-like domain: {cleanMatch}")
            continue

        url = cleanMatch if cleanMatch.startswith('http') else f"https://{cleanMatch}"
        urls.setdefault(url, None)

    return urls


def extractURLsFromText(text: str) -> List[str]:
    """
    Extract URLs from OCR text.

    Args:
        text: Raw OCR text

    Returns:
        Deduplicated list of URLs in the order they were found
    """
    if not text:
        return []

    cleanedText = stitchWrappedLines(repairCharacters(text))

    urls: Dict[str, None] = {}
    extractCompleteUrls(cleanedText, urls)
    extractPartialUrls(cleanedText, urls)

    return list(urls)


class UrlTextProcessor(ITextProcessor):
    """
    Post-processes OCR text into URLs.

    Thin object wrapper around extractURLsFromText() so services can
    depend on the ITextProcessor abstraction.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize UrlTextProcessor.

        Args:
            logger: Logger instance for debug output
        """
        self._logger = logger or logging.getLogger(__name__)

    def extractUrls(self, text: str) -> List[str]:
        """
        Extract URLs from OCR text.

        Args:
            text: Raw OCR text

        Returns:
            List of URLs, first found first
        """
        urls = extractURLsFromText(text)
        self._logger.debug(f"Extracted {len(urls)} URLs from {len(text or '')} chars of text")
        return urls
