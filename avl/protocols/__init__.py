"""
AVL frame decoders
"""
from typing import Optional

from config import settings
from avl.schemas import Frame
from .base import BaseFrameDecoder, FrameInput
from .codec8 import AVLFrameDecoder

# Default decoder, strictness taken from settings
frame_decoder = AVLFrameDecoder(strict_io_count=settings.STRICT_IO_COUNT)


def get_decoder(strict_io_count: Optional[bool] = None) -> AVLFrameDecoder:
    """Return the default decoder, or a new one when strictness is overridden"""
    if strict_io_count is None or strict_io_count == frame_decoder.strict_io_count:
        return frame_decoder
    return AVLFrameDecoder(strict_io_count=strict_io_count)


def decode_frame(data: FrameInput, strict_io_count: Optional[bool] = None) -> Frame:
    """Decode an AVL frame from bytes or a hex string"""
    return get_decoder(strict_io_count).decode(data)


__all__ = [
    'BaseFrameDecoder',
    'AVLFrameDecoder',
    'frame_decoder',
    'get_decoder',
    'decode_frame',
]
