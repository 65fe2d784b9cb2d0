"""
Element decoders for Codec 8 AVL records
Each decoder owns one contiguous window of the frame and never reads past it
"""
import struct
from typing import Optional, Tuple
from datetime import datetime, timedelta, timezone

from avl.errors import TruncatedError, TimestampOutOfRangeError
from avl.schemas import DecodeWarning, GPSFix, IOElement, IOSection

TIMESTAMP_SIZE = 8
PRIORITY_SIZE = 1
GPS_ELEMENT_SIZE = 15

# Value widths in the order the tiers appear on the wire
IO_TIER_WIDTHS = (1, 2, 4, 8)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
MAX_TIMESTAMP_MS = (datetime.max.replace(tzinfo=timezone.utc) - _EPOCH) // timedelta(milliseconds=1)

_GPS_FORMAT = '>iiHHBH'
_VALUE_FORMATS = {1: '>B', 2: '>H', 4: '>I', 8: '>Q'}


def require(buffer: bytes, cursor: int, needed: int, field: str = None):
    """Raise TruncatedError unless ``needed`` bytes are available at ``cursor``"""
    available = max(len(buffer) - cursor, 0)
    if needed > available:
        raise TruncatedError(at=cursor, needed=needed, available=available, field=field)


def read_byte(buffer: bytes, cursor: int, field: str = None) -> int:
    require(buffer, cursor, 1, field)
    return buffer[cursor]


def parse_timestamp(window: bytes, offset: int = 0) -> datetime:
    """
    Decode an 8-byte big-endian millisecond epoch into an aware UTC datetime.
    Raises TimestampOutOfRangeError past datetime.max, never saturates.
    """
    if len(window) != TIMESTAMP_SIZE:
        raise ValueError(f"Timestamp window must be {TIMESTAMP_SIZE} bytes, got {len(window)}")

    value_ms = struct.unpack('>Q', window)[0]
    if value_ms > MAX_TIMESTAMP_MS:
        raise TimestampOutOfRangeError(at=offset, value_ms=value_ms)

    return _EPOCH + timedelta(milliseconds=value_ms)


def parse_gps_element(window: bytes) -> GPSFix:
    """Decode the fixed 15-byte GPS window"""
    if len(window) != GPS_ELEMENT_SIZE:
        raise ValueError(f"GPS window must be {GPS_ELEMENT_SIZE} bytes, got {len(window)}")

    longitude, latitude, altitude, angle, satellites, speed = struct.unpack(_GPS_FORMAT, window)
    return GPSFix(
        longitude=longitude,
        latitude=latitude,
        altitude=altitude,
        angle=angle,
        satellites=satellites,
        speed=speed,
    )


def parse_io_tier(buffer: bytes, start: int, width: int) -> Tuple[Tuple[IOElement, ...], int]:
    """
    Decode one IO tier: a 1-byte count followed by (1-byte id, value) groups.
    Args:
        buffer: Whole frame buffer
        start: Offset of the tier's count byte
        width: Value width in bytes (1, 2, 4 or 8)
    Returns:
        (elements in buffer order, bytes consumed)
    """
    value_format = _VALUE_FORMATS.get(width)
    if value_format is None:
        raise ValueError(f"Unsupported IO value width: {width}")

    count = read_byte(buffer, start, f"{width}-byte IO count")
    cursor = start + 1

    elements = []
    for _ in range(count):
        io_id = read_byte(buffer, cursor, f"{width}-byte IO id")
        cursor += 1
        require(buffer, cursor, width, f"{width}-byte IO value")
        value = struct.unpack(value_format, buffer[cursor:cursor + width])[0]
        cursor += width
        elements.append(IOElement(io_id=io_id, value=value))

    return tuple(elements), cursor - start


def parse_io_element(buffer: bytes, start: int) -> Tuple[IOSection, int]:
    """
    Decode the IO section of a record starting at ``start``.
    Tiers carry no tag, so they are read strictly in 1/2/4/8 order.
    Returns (section, bytes consumed)
    """
    event_io_id = read_byte(buffer, start, "event IO id")
    total_io_count = read_byte(buffer, start + 1, "total IO count")
    cursor = start + 2

    tiers = []
    for width in IO_TIER_WIDTHS:
        elements, consumed = parse_io_tier(buffer, cursor, width)
        tiers.append(elements)
        cursor += consumed

    section = IOSection(
        event_io_id=event_io_id,
        total_io_count=total_io_count,
        one_byte_io=tiers[0],
        two_byte_io=tiers[1],
        four_byte_io=tiers[2],
        eight_byte_io=tiers[3],
    )
    return section, cursor - start


def check_io_count(section: IOSection, offset: int) -> Optional[DecodeWarning]:
    """Compare the declared IO total with the tier counts"""
    actual = section.element_count
    if actual == section.total_io_count:
        return None

    return DecodeWarning(
        kind='io_count_mismatch',
        offset=offset,
        expected=section.total_io_count,
        actual=actual,
        message=f"IO section declares {section.total_io_count} elements, tiers hold {actual}",
    )
