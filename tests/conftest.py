"""
Pytest Configuration and Shared Fixtures

This file contains pytest configuration and fixtures that are available
to all test modules.
"""

import asyncio
import io

import pytest


@pytest.fixture
def make_jpeg():
    """Fixture providing a factory for solid-color JPEG payloads."""
    from PIL import Image

    def _make(width=64, height=32, color=(200, 30, 30), quality=90):
        image = Image.new("RGB", (width, height), color)
        output = io.BytesIO()
        image.save(output, format="JPEG", quality=quality)
        return output.getvalue()

    return _make


@pytest.fixture
def make_image_ref():
    """Fixture providing a factory for ImageRef handles with opaque payloads."""
    from src.common.types import ImageRef

    def _make(name="label.jpg", data=None):
        return ImageRef(data=data if data is not None else f"payload:{name}".encode(), filename=name)

    return _make


@pytest.fixture
def make_item(make_image_ref):
    """Fixture providing a factory for IntakeItem instances."""
    from src.intake.types import IntakeItem

    def _make(code=None, name=None):
        return IntakeItem(image_ref=make_image_ref(name or f"{code or 'none'}.jpg"), code=code)

    return _make


@pytest.fixture
def fake_ocr():
    """Fixture providing a scripted OCR engine factory.

    Each script entry answers one ``recognize`` call, in order:
    a list of strings (text blocks), an exception instance (raised),
    or a float (sleep that many seconds, then return no blocks).
    """
    from src.extraction.types import RecognizedTextBlock
    from src.ocr.engine import OCREngine

    class FakeOCREngine(OCREngine):
        name = "fake"

        def __init__(self, script):
            self.script = list(script)
            self.payloads = []

        async def recognize(self, image):
            self.payloads.append(image)
            answer = self.script.pop(0)
            if isinstance(answer, BaseException):
                raise answer
            if isinstance(answer, float):
                await asyncio.sleep(answer)
                return []
            return [RecognizedTextBlock(text) for text in answer]

    return FakeOCREngine
