"""
Raster decode/crop/resize operations backed by Pillow.
Implements the raster collaborator contract used by the cropper and resizer.
"""
from pathlib import Path
from typing import Tuple, Union
from PIL import Image, ImageOps
from PIL.ImageFile import ImageFile
import numpy as np
import logging

from ..core.interfaces import CellBoundary, IRasterCollaborator

logger = logging.getLogger(__name__)

ImageFile.LOAD_TRUNCATED_IMAGES = True
Image.MAX_IMAGE_PIXELS = 1_000_000_000


def parse_aspect_ratio(value: str) -> Tuple[int, int]:
    """Parse 'W:H' (e.g. '9:16') into a positive integer pair."""
    try:
        width_text, height_text = value.split(":")
        width, height = int(width_text), int(height_text)
    except (AttributeError, ValueError):
        raise ValueError(f"Invalid aspect ratio '{value}', expected W:H such as 9:16")
    if width <= 0 or height <= 0:
        raise ValueError(f"Aspect ratio terms must be positive, got '{value}'")
    return width, height


class ImageProcessor(IRasterCollaborator):
    """Decodes, crops, letterboxes and saves raster images."""

    SUPPORTED_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.bmp', '.tiff', '.tif', '.webp'}

    def __init__(self, default_quality: int = 90, progressive: bool = True):
        self.default_quality = default_quality
        self.progressive = progressive

    def open(self, image_path: Path) -> Image.Image:
        """Decode an image fully into memory as RGB, honouring EXIF orientation."""
        image_path = Path(image_path)
        if not image_path.exists():
            raise FileNotFoundError(f"Image not found: {image_path}")
        if not self.is_valid_image(image_path):
            raise ValueError(f"Unsupported image file: {image_path}")

        with Image.open(image_path) as img:
            img.load()
            fixed = ImageOps.exif_transpose(img)
            return fixed.convert("RGB")

    def load_grayscale(self, source: Union[Path, Image.Image]) -> np.ndarray:
        """Return an 8-bit grayscale sample (height x width) of an image or path."""
        if isinstance(source, Image.Image):
            return np.asarray(source.convert("L"), dtype=np.uint8)
        return np.asarray(self.open(source).convert("L"), dtype=np.uint8)

    def crop(self, image: Image.Image, cell: CellBoundary) -> Image.Image:
        """Extract one cell rectangle."""
        right = cell.x + cell.width
        bottom = cell.y + cell.height
        if cell.x < 0 or cell.y < 0 or right > image.width or bottom > image.height:
            raise ValueError(
                f"Cell {cell.box} outside image bounds {image.width}x{image.height}"
            )
        return image.crop(cell.box)

    def letterbox(
        self,
        image: Image.Image,
        size: Tuple[int, int],
        fill: Tuple[int, int, int] = (0, 0, 0)
    ) -> Image.Image:
        """Scale image to fit inside size keeping aspect ratio, centre it on fill."""
        target_w, target_h = size
        w, h = image.size

        scale = min(target_w / w, target_h / h)
        new_w = min(target_w, max(1, int(round(w * scale))))
        new_h = min(target_h, max(1, int(round(h * scale))))

        if (new_w, new_h) != (w, h):
            image = image.resize((new_w, new_h), Image.Resampling.LANCZOS)

        canvas = Image.new("RGB", (target_w, target_h), fill)
        canvas.paste(image.convert("RGB"), ((target_w - new_w) // 2, (target_h - new_h) // 2))
        return canvas

    def fit_aspect(
        self,
        image: Image.Image,
        aspect_ratio: Tuple[int, int],
        mode: str = "crop",
        fill: Tuple[int, int, int] = (0, 0, 0)
    ) -> Image.Image:
        """
        Reshape an image to an aspect ratio without scaling its content.

        Args:
            image: Source image
            aspect_ratio: (width, height) ratio terms
            mode: 'crop' trims the centre, 'pad' letterboxes with fill

        Returns:
            Image whose width/height matches the ratio (to the nearest pixel)
        """
        if mode not in ("crop", "pad"):
            raise ValueError(f"Unknown aspect mode '{mode}', expected 'crop' or 'pad'")

        ratio = aspect_ratio[0] / aspect_ratio[1]
        w, h = image.size
        current = w / h

        if abs(current - ratio) < 1e-3:
            return image

        if mode == "crop":
            if current > ratio:
                new_w = max(1, int(round(h * ratio)))
                left = (w - new_w) // 2
                return image.crop((left, 0, left + new_w, h))
            new_h = max(1, int(round(w / ratio)))
            top = (h - new_h) // 2
            return image.crop((0, top, w, top + new_h))

        if current > ratio:
            size = (w, max(1, int(round(w / ratio))))
        else:
            size = (max(1, int(round(h * ratio))), h)
        return self.letterbox(image, size, fill)

    def save(self, img: Image.Image, output_path: Path) -> Path:
        """Save a frame; JPEG output is flattened onto white first."""
        output_path = Path(output_path)
        if output_path.suffix.lower() not in (".jpg", ".jpeg"):
            img.save(output_path)
            return output_path

        if img.mode in ("RGBA", "LA"):
            flat = Image.new("RGB", img.size, (255, 255, 255))
            flat.paste(img.convert("RGB"), mask=img.getchannel("A"))
            img = flat
        elif img.mode != "RGB":
            img = img.convert("RGB")

        img.save(
            output_path,
            format="JPEG",
            quality=self.default_quality,
            optimize=True,
            progressive=self.progressive
        )
        return output_path

    @classmethod
    def is_valid_image(cls, path: Path) -> bool:
        path = Path(path)
        return path.is_file() and path.suffix.lower() in cls.SUPPORTED_EXTENSIONS
