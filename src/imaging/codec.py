"""Image codec: bounded downscaling and JPEG re-encoding with Pillow.

Phone photographs of labels are often several megabytes. Before OCR they are
reduced to at most 1920x1920 px, and before emailing to at most 1200x1200 px.
Aspect ratio is always preserved and images are never enlarged.

Example:
    >>> codec = ImageCodec()
    >>> small = codec.compress(photo_bytes, max_width=1920, max_height=1920, quality=70)
"""

import io
import logging

from PIL import Image, ImageOps, UnidentifiedImageError

from src.common.errors import ImageCodecError

logger = logging.getLogger(__name__)


class ImageCodec:
    """Pillow-backed image codec.

    Args:
        optimize: Ask the JPEG encoder for an extra optimization pass.
    """

    def __init__(self, optimize: bool = True):
        self.optimize = optimize

    def compress(
        self,
        data: bytes,
        max_width: int,
        max_height: int,
        quality: int,
    ) -> bytes:
        """Downscale an image to fit a bounding box and re-encode as JPEG.

        EXIF orientation is applied first so portrait phone photos keep their
        orientation after the metadata is dropped.

        Args:
            data: Encoded input image.
            max_width: Maximum output width in pixels.
            max_height: Maximum output height in pixels.
            quality: JPEG quality (1-95).

        Returns:
            JPEG-encoded bytes.

        Raises:
            ValueError: If bounds or quality are out of range.
            ImageCodecError: If the image cannot be decoded or encoded.
        """
        if max_width <= 0 or max_height <= 0:
            raise ValueError(f"Bounds must be positive, got {max_width}x{max_height}")
        if not 1 <= quality <= 95:
            raise ValueError(f"JPEG quality must be in [1, 95], got {quality}")

        try:
            with Image.open(io.BytesIO(data)) as img:
                img = ImageOps.exif_transpose(img)
                original_size = img.size

                if img.mode != "RGB":
                    img = img.convert("RGB")

                # thumbnail() keeps aspect ratio and never upscales
                img.thumbnail((max_width, max_height), Image.Resampling.LANCZOS)

                output = io.BytesIO()
                img.save(output, format="JPEG", quality=quality, optimize=self.optimize)
        except (UnidentifiedImageError, OSError, ValueError) as e:
            raise ImageCodecError(f"Image compression failed: {e}") from e

        compressed = output.getvalue()
        logger.debug(
            f"Compressed {original_size[0]}x{original_size[1]} -> {img.size[0]}x{img.size[1]}: "
            f"{round(len(data) / 1024)}KB -> {round(len(compressed) / 1024)}KB"
        )
        return compressed

    def compress_or_original(
        self,
        data: bytes,
        max_width: int,
        max_height: int,
        quality: int,
    ) -> bytes:
        """Compress an image, falling back to the original bytes on failure.

        Args:
            data: Encoded input image.
            max_width: Maximum output width in pixels.
            max_height: Maximum output height in pixels.
            quality: JPEG quality (1-95).

        Returns:
            JPEG-encoded bytes, or ``data`` unchanged if compression failed.
        """
        try:
            return self.compress(data, max_width, max_height, quality)
        except ImageCodecError as e:
            logger.warning(f"{e}; forwarding original bytes")
            return data
