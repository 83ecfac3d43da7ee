"""
Image Link Analyzer

Command-line entry point: finds QR codes and on-screen URLs in one image
and prints them as JSON.

Architecture:
- PipelineOrchestrator: Reads config and creates all services with parameters
- Services: Receive parameters, create core components internally
- analyzeImage(): Runs QR scanning and OCR concurrently, merges the results

Usage:
    python main.py screenshot.png
    python main.py photo.jpg --config config/application_config.json --debug
"""

import sys
import os
import json
import asyncio
import logging
import argparse
from pathlib import Path
from typing import List, Optional

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, PROJECT_ROOT)

from services.errors import ImageAnalysisError
from services.image_analyzer import analyzeImage
from services.pipeline_orchestrator import DEFAULT_CONFIG_PATH, PipelineOrchestrator


logger = logging.getLogger(__name__)


def setupLogging(debugMode: bool = False) -> None:
    """
    Setup application logging.

    Logs go to stderr so stdout carries only the JSON result.

    Args:
        debugMode: If True, set log level to DEBUG.
    """
    level = logging.DEBUG if debugMode else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )


def validateImageFile(
    imagePath: str,
    supportedFormats: List[str],
    maxFileSizeMb: float
) -> Path:
    """
    Check that a path points to an accepted image file.

    Args:
        imagePath: Path given by the user.
        supportedFormats: Accepted extensions, lowercase with dot.
        maxFileSizeMb: Maximum file size in megabytes.

    Returns:
        Path of the file.

    Raises:
        ValueError: If the file is missing, has an unsupported extension
            or is too large.
    """
    path = Path(imagePath)

    if not path.is_file():
        raise ValueError(f"File not found: {imagePath}")

    if path.suffix.lower() not in supportedFormats:
        raise ValueError(
            f"Unsupported file type '{path.suffix}'. "
            f"Supported: {', '.join(supportedFormats)}"
        )

    sizeMb = path.stat().st_size / (1024 * 1024)
    if sizeMb > maxFileSizeMb:
        raise ValueError(f"File too large: {sizeMb:.1f}MB (max {maxFileSizeMb}MB)")

    return path


def parseArgs(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Find QR codes and URLs in an image"
    )
    parser.add_argument("image", help="Path to the image file")
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help="Path to the application configuration file"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging and debug output files"
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Process exit code (0 on success, 1 on any failure).
    """
    args = parseArgs(argv)

    debugMode = args.debug or os.environ.get("DEBUG", "").lower() == "true"
    setupLogging(debugMode=debugMode)

    try:
        orchestrator = PipelineOrchestrator(args.config)
        if args.debug:
            orchestrator.setDebugEnabled(True)

        configService = orchestrator.configService
        imagePath = validateImageFile(
            args.image,
            configService.getSupportedFormats(),
            configService.getMaxFileSizeMb()
        )

        result = asyncio.run(analyzeImage(str(imagePath), orchestrator=orchestrator))

    except ValueError as e:
        logger.error(str(e))
        return 1
    except (ImageAnalysisError, RuntimeError, ImportError) as e:
        logger.error(f"Analysis failed: {e}")
        return 1

    print(json.dumps(result.toDict(), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
