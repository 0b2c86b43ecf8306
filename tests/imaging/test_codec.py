"""Unit tests for the Pillow image codec."""

import io

import pytest
from PIL import Image

from src.common.errors import ImageCodecError
from src.imaging.codec import ImageCodec


def image_size(data):
    """Decode image bytes and return (width, height, format)."""
    with Image.open(io.BytesIO(data)) as img:
        return img.size[0], img.size[1], img.format


class TestCompress:
    """Test bounded downscaling and JPEG re-encoding."""

    def test_downscales_landscape(self, make_jpeg):
        """Test a wide image is bounded by width and keeps its aspect ratio."""
        result = ImageCodec().compress(make_jpeg(3000, 2000), 1920, 1920, 70)
        assert image_size(result) == (1920, 1280, "JPEG")

    def test_downscales_portrait(self, make_jpeg):
        """Test a tall image is bounded by height."""
        result = ImageCodec().compress(make_jpeg(1000, 2400), 1200, 1200, 60)
        assert image_size(result) == (500, 1200, "JPEG")

    def test_never_upscales(self, make_jpeg):
        """Test small images keep their dimensions."""
        result = ImageCodec().compress(make_jpeg(640, 480), 1920, 1920, 70)
        assert image_size(result)[:2] == (640, 480)

    def test_png_with_alpha_becomes_jpeg(self):
        """Test RGBA input is converted to RGB JPEG."""
        output = io.BytesIO()
        Image.new("RGBA", (50, 50), (0, 0, 255, 128)).save(output, format="PNG")

        result = ImageCodec().compress(output.getvalue(), 100, 100, 80)

        assert image_size(result) == (50, 50, "JPEG")

    def test_undecodable_input(self):
        """Test garbage bytes raise ImageCodecError."""
        with pytest.raises(ImageCodecError):
            ImageCodec().compress(b"definitely not an image", 100, 100, 70)

    @pytest.mark.parametrize(
        "width, height, quality",
        [(0, 100, 70), (100, -1, 70), (100, 100, 0), (100, 100, 96)],
    )
    def test_invalid_arguments(self, make_jpeg, width, height, quality):
        """Test bounds and quality are validated."""
        with pytest.raises(ValueError):
            ImageCodec().compress(make_jpeg(), width, height, quality)


class TestCompressOrOriginal:
    """Test the fallback variant."""

    def test_returns_compressed(self, make_jpeg):
        """Test a decodable image is compressed."""
        data = make_jpeg(3000, 2000)
        result = ImageCodec().compress_or_original(data, 1200, 1200, 60)
        assert image_size(result)[:2] == (1200, 800)

    def test_returns_original_on_failure(self):
        """Test the original bytes are returned when decoding fails."""
        data = b"definitely not an image"
        assert ImageCodec().compress_or_original(data, 1200, 1200, 60) is data
