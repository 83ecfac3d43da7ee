"""Raster image primitives."""

from core.image.raster_image import RasterImage, ImageLoadError

__all__ = [
    'RasterImage',
    'ImageLoadError',
]
