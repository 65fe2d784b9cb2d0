"""
Decoder for Teltonika-style AVL data frames
"""
from avl.errors import DecodeError, TruncatedError, TimestampOutOfRangeError, IoCountMismatchError
from avl.schemas import DecodeWarning, Frame, GPSFix, IOElement, IOSection, Record
from avl.protocols import AVLFrameDecoder, decode_frame

__all__ = [
    'AVLFrameDecoder',
    'decode_frame',
    'DecodeError',
    'TruncatedError',
    'TimestampOutOfRangeError',
    'IoCountMismatchError',
    'DecodeWarning',
    'Frame',
    'GPSFix',
    'IOElement',
    'IOSection',
    'Record',
]
