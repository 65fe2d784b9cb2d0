"""
Base decoder for binary AVL frames
"""
from abc import ABC, abstractmethod
from typing import Union

from avl.schemas import Frame

FrameInput = Union[bytes, bytearray, memoryview, str]

_HEX_DIGITS = set('0123456789abcdefABCDEF')


class BaseFrameDecoder(ABC):
    """Base class for AVL frame decoders"""

    def __init__(self, strict_io_count: bool = False):
        self.strict_io_count = strict_io_count

    @abstractmethod
    def decode(self, data: FrameInput) -> Frame:
        """Decode a raw frame"""
        pass

    def to_bytes(self, data: FrameInput) -> bytes:
        """
        Normalise decoder input to bytes.
        Strings are read as hex, whitespace ignored.
        """
        if isinstance(data, (bytes, bytearray, memoryview)):
            return bytes(data)
        if isinstance(data, str):
            cleaned = ''.join(data.split())
            if not all(c in _HEX_DIGITS for c in cleaned):
                raise ValueError("Frame string is not hex encoded")
            return bytes.fromhex(cleaned)
        raise TypeError(f"Cannot decode frame from {type(data).__name__}")
