"""
Image processing module for framekit.
"""
from .processor import ImageProcessor, parse_aspect_ratio
from .cropper import FrameCropper, CellNormalizer
from .resizer import AspectRatioResizer

__all__ = [
    'ImageProcessor',
    'parse_aspect_ratio',
    'FrameCropper',
    'CellNormalizer',
    'AspectRatioResizer',
]
