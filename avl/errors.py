"""
Decode errors for AVL frames
"""
from typing import Any, Dict, Optional


class DecodeError(Exception):
    """Base class for fatal frame decode failures.

    ``frame`` holds the records decoded before the failure, or None when
    the frame header itself could not be read.
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None, frame=None):
        self.message = message
        self.context = context or {}
        self.frame = frame
        super().__init__(self.message)


class TruncatedError(DecodeError):
    """Buffer ran out before a required field could be read"""

    def __init__(self, at: int, needed: int, available: int, field: str = None):
        self.at = at
        self.needed = needed
        self.available = available
        self.field = field
        where = f" reading {field}" if field else ""
        super().__init__(
            f"Truncated frame{where} at offset {at}: needed {needed} bytes, {available} available",
            {'at': at, 'needed': needed, 'available': available, 'field': field},
        )


class TimestampOutOfRangeError(DecodeError):
    """Epoch milliseconds do not fit in a datetime"""

    def __init__(self, at: int, value_ms: int):
        self.at = at
        self.value_ms = value_ms
        super().__init__(
            f"Timestamp {value_ms} ms at offset {at} is outside the datetime range",
            {'at': at, 'value_ms': value_ms},
        )


class IoCountMismatchError(DecodeError):
    """Declared IO total disagrees with the tier counts (strict mode only)"""

    def __init__(self, at: int, declared: int, actual: int):
        self.at = at
        self.declared = declared
        self.actual = actual
        super().__init__(
            f"IO section at offset {at} declares {declared} elements, tiers hold {actual}",
            {'at': at, 'declared': declared, 'actual': actual},
        )
