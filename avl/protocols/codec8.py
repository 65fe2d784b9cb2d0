"""
Codec 8 AVL frame decoder
Walks the data field record by record with a single running cursor
"""
import logging
from typing import List, Optional, Tuple

from avl.errors import DecodeError, IoCountMismatchError, TruncatedError
from avl.schemas import DecodeWarning, Frame, Record
from .base import BaseFrameDecoder, FrameInput
from .elements import (
    GPS_ELEMENT_SIZE,
    PRIORITY_SIZE,
    TIMESTAMP_SIZE,
    check_io_count,
    parse_gps_element,
    parse_io_element,
    parse_timestamp,
    read_byte,
    require,
)

logger = logging.getLogger(__name__)

HEADER_SIZE = 2


class AVLFrameDecoder(BaseFrameDecoder):
    """
    Decoder for the AVL data field:
    codec id, record count, records, optional closing record count.

    Holds no per-frame state, one instance can be shared across threads.
    """

    def decode(self, data: FrameInput) -> Frame:
        """
        Decode a frame.
        Raises DecodeError subclasses; ``error.frame`` holds the records
        completed before the failure.
        """
        buffer = self.to_bytes(data)

        if len(buffer) < HEADER_SIZE:
            raise TruncatedError(at=0, needed=HEADER_SIZE, available=len(buffer), field="frame header")

        codec_id = buffer[0]
        record_count = buffer[1]
        cursor = HEADER_SIZE

        logger.debug(f"Decoding frame: codec 0x{codec_id:02x}, {record_count} records, {len(buffer)} bytes")

        records: List[Record] = []
        for index in range(record_count):
            try:
                record, consumed = self._parse_record(buffer, cursor)
            except DecodeError as e:
                logger.warning(f"Record {index} failed after {len(records)} complete records: {e}")
                partial = Frame(
                    codec_id=codec_id,
                    record_count=record_count,
                    records=tuple(records),
                    bytes_consumed=cursor,
                    buffer_length=len(buffer),
                )
                e.frame = partial
                raise

            records.append(record)
            cursor += consumed

        closing_count, cursor, warnings = self._parse_trailer(buffer, cursor, record_count)

        frame = Frame(
            codec_id=codec_id,
            record_count=record_count,
            records=tuple(records),
            closing_record_count=closing_count,
            bytes_consumed=cursor,
            buffer_length=len(buffer),
            warnings=tuple(warnings),
        )

        if not frame.complete:
            logger.warning(f"Frame consumed {cursor} of {len(buffer)} bytes")

        return frame

    def _parse_record(self, buffer: bytes, start: int) -> Tuple[Record, int]:
        """Parse one record at ``start``, returns (record, bytes consumed)"""
        cursor = start

        # Timestamp (8 bytes)
        require(buffer, cursor, TIMESTAMP_SIZE, "timestamp")
        window = buffer[cursor:cursor + TIMESTAMP_SIZE]
        timestamp = parse_timestamp(window, cursor)
        timestamp_ms = int.from_bytes(window, 'big')
        cursor += TIMESTAMP_SIZE

        # Priority (1 byte)
        priority = read_byte(buffer, cursor, "priority")
        cursor += PRIORITY_SIZE

        # GPS element (15 bytes)
        require(buffer, cursor, GPS_ELEMENT_SIZE, "GPS element")
        gps = parse_gps_element(buffer[cursor:cursor + GPS_ELEMENT_SIZE])
        cursor += GPS_ELEMENT_SIZE

        # IO element (self-sized)
        io_start = cursor
        io, consumed = parse_io_element(buffer, io_start)
        cursor += consumed

        warnings = []
        mismatch = check_io_count(io, io_start)
        if mismatch:
            if self.strict_io_count:
                raise IoCountMismatchError(at=io_start, declared=mismatch.expected, actual=mismatch.actual)
            logger.warning(mismatch.message)
            warnings.append(mismatch)

        record = Record(
            timestamp=timestamp,
            timestamp_ms=timestamp_ms,
            priority=priority,
            gps=gps,
            io=io,
            warnings=tuple(warnings),
        )
        return record, cursor - start

    def _parse_trailer(self, buffer: bytes, cursor: int,
                       record_count: int) -> Tuple[Optional[int], int, List[DecodeWarning]]:
        """
        Handle bytes left after the last record.
        A single byte is the closing record count, anything longer is reported untouched.
        """
        remaining = len(buffer) - cursor
        if remaining == 0:
            return None, cursor, []

        if remaining == 1:
            closing_count = buffer[cursor]
            warnings = []
            if closing_count != record_count:
                warning = DecodeWarning(
                    kind='closing_count_mismatch',
                    offset=cursor,
                    expected=record_count,
                    actual=closing_count,
                    message=f"Closing record count {closing_count} does not match header count {record_count}",
                )
                logger.warning(warning.message)
                warnings.append(warning)
            return closing_count, cursor + 1, warnings

        warning = DecodeWarning(
            kind='trailing_bytes',
            offset=cursor,
            actual=remaining,
            message=f"{remaining} unexpected bytes after the last record",
        )
        logger.warning(warning.message)
        return None, cursor, [warning]
