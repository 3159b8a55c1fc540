"""Home Guard Hardware Adapters"""

from .image_service import (
    ImageService,
    YOLOImageService,
    FakeImageService,
    decode_image,
)

__all__ = [
    'ImageService',
    'YOLOImageService',
    'FakeImageService',
    'decode_image',
]
