"""
Raster Image Module.

Mutable wrapper around an OpenCV image buffer (numpy uint8 array).
Provides the primitives used by the QR scanning and OCR preprocessing
pipelines: load, clone, scale, crop, greyscale, contrast, brightness,
normalize, rotate and encode-to-bytes.

Mutating operations work in place and return the same instance so calls
can be chained. Use clone() to branch into an independent copy.

Follows the Single Responsibility Principle (SRP) from SOLID.
"""

import logging
from pathlib import Path
from typing import Tuple, Union

import cv2
import numpy as np


logger = logging.getLogger(__name__)


class ImageLoadError(RuntimeError):
    """Raised when an image file cannot be read or decoded."""


class RasterImage:
    """
    Owned raster buffer with chainable processing operations.

    The buffer is either BGR (H, W, 3) or grayscale (H, W), dtype uint8.
    """

    # Clockwise rotations supported by rotate()
    ROTATION_CODES = {
        90: cv2.ROTATE_90_CLOCKWISE,
        180: cv2.ROTATE_180,
        270: cv2.ROTATE_90_COUNTERCLOCKWISE,
    }

    def __init__(self, data: np.ndarray):
        """
        Initialize RasterImage.

        Args:
            data: Image buffer (BGR or grayscale, uint8). Ownership is
                  taken, the array is not copied.
        """
        if data is None or data.size == 0:
            raise ValueError("Image buffer is None or empty")
        if data.ndim not in (2, 3):
            raise ValueError(f"Unsupported image shape: {data.shape}")
        if data.dtype != np.uint8:
            data = np.clip(data, 0, 255).astype(np.uint8)
        self._data = data

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Construction
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    @classmethod
    def load(cls, path: Union[str, Path]) -> "RasterImage":
        """
        Load an image file from disk.

        Args:
            path: Path to the image file.

        Returns:
            RasterImage with a BGR buffer.

        Raises:
            ImageLoadError: If the file is missing or cannot be decoded.
        """
        imagePath = Path(path)
        if not imagePath.is_file():
            raise ImageLoadError(f"Image file not found: {imagePath}")

        # np.fromfile + imdecode handles non-ASCII paths, unlike cv2.imread
        try:
            raw = np.fromfile(str(imagePath), dtype=np.uint8)
        except OSError as e:
            raise ImageLoadError(f"Could not read image file {imagePath}: {e}") from e

        data = cv2.imdecode(raw, cv2.IMREAD_COLOR) if raw.size else None
        if data is None:
            raise ImageLoadError(f"Could not decode image file: {imagePath}")

        logger.debug(f"Loaded image {imagePath.name}: {data.shape[1]}x{data.shape[0]}")
        return cls(data)

    @classmethod
    def fromArray(cls, array: np.ndarray) -> "RasterImage":
        """Create a RasterImage from a copy of an existing array."""
        return cls(np.array(array, copy=True))

    def clone(self) -> "RasterImage":
        """Return an independent copy of this image."""
        return RasterImage(self._data.copy())

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Properties
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    @property
    def width(self) -> int:
        return int(self._data.shape[1])

    @property
    def height(self) -> int:
        return int(self._data.shape[0])

    @property
    def size(self) -> Tuple[int, int]:
        """Image size as (width, height)."""
        return self.width, self.height

    @property
    def isGreyscale(self) -> bool:
        return self._data.ndim == 2

    @property
    def pixelData(self) -> np.ndarray:
        """Underlying uint8 buffer (not a copy)."""
        return self._data

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Geometry
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def scale(self, factor: float, bicubic: bool = True) -> "RasterImage":
        """
        Uniformly scale the image.

        Args:
            factor: Scale factor (> 0).
            bicubic: Use bicubic interpolation, otherwise bilinear.

        Returns:
            self
        """
        if factor <= 0:
            raise ValueError(f"Scale factor must be positive, got {factor}")

        newW = max(1, int(round(self.width * factor)))
        newH = max(1, int(round(self.height * factor)))
        interpolation = cv2.INTER_CUBIC if bicubic else cv2.INTER_LINEAR
        self._data = cv2.resize(self._data, (newW, newH), interpolation=interpolation)
        return self

    def crop(self, x: int, y: int, width: int, height: int) -> "RasterImage":
        """
        Crop to a rectangular sub-region.

        Args:
            x: Left edge.
            y: Top edge.
            width: Region width.
            height: Region height.

        Returns:
            self

        Raises:
            ValueError: If the region is empty or outside the image bounds.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid crop size {width}x{height}")
        if x < 0 or y < 0 or x + width > self.width or y + height > self.height:
            raise ValueError(
                f"Crop region ({x}, {y}, {width}, {height}) outside image "
                f"{self.width}x{self.height}"
            )
        self._data = self._data[y:y + height, x:x + width].copy()
        return self

    def rotate(self, degrees: int) -> "RasterImage":
        """
        Rotate clockwise by a multiple of 90 degrees.

        Args:
            degrees: Rotation angle (0, 90, 180, 270, or equivalent).

        Returns:
            self
        """
        angle = int(degrees) % 360
        if angle == 0:
            return self
        if angle not in self.ROTATION_CODES:
            raise ValueError(f"Rotation must be a multiple of 90 degrees, got {degrees}")
        self._data = cv2.rotate(self._data, self.ROTATION_CODES[angle])
        return self

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Tone adjustments
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def greyscale(self) -> "RasterImage":
        """Convert to a single-channel grayscale buffer."""
        if not self.isGreyscale:
            self._data = cv2.cvtColor(self._data, cv2.COLOR_BGR2GRAY)
        return self

    def contrast(self, amount: float) -> "RasterImage":
        """
        Adjust contrast around mid-grey.

        Args:
            amount: Contrast change in [-1, 1). Positive values increase
                    contrast, 0 leaves the image unchanged.

        Returns:
            self
        """
        if not -1.0 <= amount < 1.0:
            raise ValueError(f"Contrast amount must be in [-1, 1), got {amount}")

        factor = (amount + 1.0) / (1.0 - amount)
        adjusted = np.floor(factor * (self._data.astype(np.float32) - 127.0) + 127.0)
        self._data = np.clip(adjusted, 0, 255).astype(np.uint8)
        return self

    def brightness(self, amount: float) -> "RasterImage":
        """
        Adjust brightness.

        Args:
            amount: Brightness change in [-1, 1]. Positive values move
                    pixels towards white, negative values towards black.

        Returns:
            self
        """
        if not -1.0 <= amount <= 1.0:
            raise ValueError(f"Brightness amount must be in [-1, 1], got {amount}")

        pixels = self._data.astype(np.float32)
        if amount < 0:
            adjusted = pixels * (1.0 + amount)
        else:
            adjusted = pixels + (255.0 - pixels) * amount
        self._data = np.clip(np.rint(adjusted), 0, 255).astype(np.uint8)
        return self

    def normalize(self) -> "RasterImage":
        """Stretch each channel so its darkest pixel is 0 and brightest is 255."""
        pixels = self._data.astype(np.float32)
        axes = (0, 1)
        low = pixels.min(axis=axes, keepdims=True)
        high = pixels.max(axis=axes, keepdims=True)
        span = high - low

        # Flat channels are left as they are
        safeSpan = np.where(span > 0, span, 1.0)
        stretched = np.where(span > 0, (pixels - low) * 255.0 / safeSpan, pixels)
        self._data = np.clip(np.rint(stretched), 0, 255).astype(np.uint8)
        return self

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Encoding
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def toBuffer(self, imageFormat: str = ".png") -> bytes:
        """
        Encode the image into an in-memory file.

        Args:
            imageFormat: OpenCV extension, e.g. ".png" (lossless, default).

        Returns:
            Encoded image bytes.
        """
        if not imageFormat.startswith("."):
            imageFormat = f".{imageFormat}"
        success, buffer = cv2.imencode(imageFormat, self._data)
        if not success:
            raise ValueError(f"Failed to encode image as {imageFormat}")
        return buffer.tobytes()

    def __repr__(self) -> str:
        channels = 1 if self.isGreyscale else self._data.shape[2]
        return f"RasterImage({self.width}x{self.height}, channels={channels})"
