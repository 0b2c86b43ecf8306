"""Image collaborators: Pillow codec and summary QR renderer."""

from .codec import ImageCodec
from .qr import QRCodeRenderer, build_qr_payload

__all__ = ["ImageCodec", "QRCodeRenderer", "build_qr_payload"]
