"""
Common type definitions for the label code intake pipeline.

This module provides Pydantic-based type definitions for data that crosses
module boundaries: the image handle carried from upload through OCR, intake
and email attachment.
"""

from pathlib import Path
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Upper bound on the accumulated intake list for one session
MAX_ITEMS = 30

# Length of a valid label code
CODE_LENGTH = 22

_CONTENT_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
    ".bmp": "image/bmp",
    ".gif": "image/gif",
    ".heic": "image/heic",
}


class ImageRef(BaseModel):
    """
    Immutable handle to one user-supplied image.

    The intake pipeline never inspects the pixels itself; it only forwards the
    payload to the image codec and OCR collaborators and keeps the handle in
    the intake list so the original photograph can be attached to the email.

    Attributes:
        data: Raw encoded image bytes (JPEG, PNG, ...).
        filename: Display name of the image (used in messages and attachments).
        content_type: MIME type of ``data``.

    Example:
        >>> ref = ImageRef.from_path(Path("label.jpg"))
        >>> print(ref.filename, ref.size_bytes)  # label.jpg 734512
    """

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(..., description="Encoded image payload")
    filename: str = Field(default="image.jpg", description="Display filename")
    content_type: str = Field(default="image/jpeg", description="MIME type")

    @field_validator("data")
    @classmethod
    def _validate_data(cls, v: bytes) -> bytes:
        """
        Validate that the payload is not empty.

        Args:
            v: Image bytes to validate.

        Returns:
            Validated bytes.

        Raises:
            ValueError: If payload is empty.
        """
        if len(v) == 0:
            raise ValueError("Image payload is empty")
        return v

    @property
    def size_bytes(self) -> int:
        """Get payload size in bytes."""
        return len(self.data)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "ImageRef":
        """
        Create ImageRef by reading an image file from disk.

        Args:
            path: Path to the image file.

        Returns:
            ImageRef with the file's bytes, name and guessed content type.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Image file not found: {path}")

        content_type = _CONTENT_TYPES.get(path.suffix.lower(), "application/octet-stream")
        return cls(data=path.read_bytes(), filename=path.name, content_type=content_type)

    def __repr__(self) -> str:
        """String representation without dumping the payload."""
        return (
            f"ImageRef(filename={self.filename!r}, content_type={self.content_type!r}, "
            f"size_bytes={self.size_bytes})"
        )

    __str__ = __repr__
