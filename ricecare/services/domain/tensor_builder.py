"""
Domain service: Leaf image to model input tensor.

Decodes an already-cropped leaf photo and produces the channel-planar,
ImageNet-normalized float tensor the classifier graph expects.
"""
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from ricecare.config import settings
from ricecare.domain.exceptions import DecodeError

logger = logging.getLogger(__name__)

CHANNEL_MEAN = np.array([0.485, 0.456, 0.406], dtype=np.float32)
CHANNEL_STD = np.array([0.229, 0.224, 0.225], dtype=np.float32)


@dataclass(frozen=True)
class NormalizedTensor:
    """Flat planar (R, G, B) buffer plus its logical NCHW shape."""
    data: np.ndarray
    shape: tuple[int, int, int, int]

    def as_array(self) -> np.ndarray:
        """Return the buffer viewed as a [1, 3, H, W] array."""
        return self.data.reshape(self.shape)


def build_from_pixels(pixels: np.ndarray) -> NormalizedTensor:
    """
    Normalize an H x W x C uint8 pixel buffer into a planar tensor.

    Only the first three channels are read; an alpha channel is ignored.
    Pixel ``i`` (row-major) of channel ``c`` lands at ``c * H * W + i``.

    Args:
        pixels: Array of shape (H, W, 3) or (H, W, 4), 8 bits per channel

    Returns:
        NormalizedTensor of logical shape (1, 3, H, W)
    """
    if pixels.ndim != 3 or pixels.shape[2] < 3:
        raise ValueError(f"Expected an HxWx3 or HxWx4 pixel array, got {pixels.shape}")

    height, width = pixels.shape[:2]
    rgb = pixels[:, :, :3].astype(np.float32) / 255.0
    normalized = (rgb - CHANNEL_MEAN) / CHANNEL_STD

    # HWC -> CHW, one contiguous plane per channel
    planar = np.ascontiguousarray(normalized.transpose(2, 0, 1), dtype=np.float32)

    return NormalizedTensor(
        data=planar.reshape(-1),
        shape=(1, 3, height, width),
    )


class TensorBuilder:
    """
    Turns encoded leaf photos into normalized model input.

    Resizing is the caller's job: the decoded image is used as-is, so a
    wrongly sized photo produces a tensor the model will reject at run time.
    """

    def __init__(
        self,
        allowed_formats: Optional[Iterable[str]] = None,
        expected_size: Optional[int] = None,
    ):
        formats = allowed_formats if allowed_formats is not None else settings.image_formats
        self.allowed_formats = frozenset(f.upper() for f in formats)
        self.expected_size = expected_size or settings.image_size

    def build(self, image_bytes: bytes) -> NormalizedTensor:
        """
        Decode image bytes and normalize them.

        Raises:
            DecodeError: If the bytes are not a decodable image of an accepted format
        """
        pixels = self._decode(image_bytes)
        height, width = pixels.shape[:2]
        if (height, width) != (self.expected_size, self.expected_size):
            logger.warning(
                f"Leaf image is {width}x{height}, model expects "
                f"{self.expected_size}x{self.expected_size}"
            )
        tensor = build_from_pixels(pixels)
        logger.debug(f"Built tensor with shape {tensor.shape}")
        return tensor

    def build_from_path(self, path: Union[str, Path]) -> NormalizedTensor:
        """Read an image file from disk and normalize it."""
        try:
            image_bytes = Path(path).read_bytes()
        except OSError as e:
            raise DecodeError(f"Cannot read image file {path}: {e}") from e
        return self.build(image_bytes)

    def _decode(self, image_bytes: bytes) -> np.ndarray:
        if not image_bytes:
            raise DecodeError("Image payload is empty")

        try:
            with Image.open(io.BytesIO(image_bytes)) as img:
                image_format = (img.format or "").upper()
                if image_format not in self.allowed_formats:
                    raise DecodeError(
                        f"Unsupported image format '{img.format}', "
                        f"expected one of {sorted(self.allowed_formats)}"
                    )
                return np.asarray(img.convert("RGB"), dtype=np.uint8)
        except (
            UnidentifiedImageError,
            Image.DecompressionBombError,
            OSError,
            SyntaxError,
            EOFError,
        ) as e:
            raise DecodeError(f"Invalid image data: {e}") from e
