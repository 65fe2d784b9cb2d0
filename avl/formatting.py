"""
Text and JSON rendering of decoded frames
"""
from typing import List

from avl.schemas import Frame, IOSection, Record


def _format_tier(name: str, elements) -> str:
    pairs = ', '.join(f"{e.io_id}={e.value}" for e in elements)
    return f"    {name}: {pairs if pairs else '-'}"


def _format_io(io: IOSection) -> List[str]:
    lines = [f"  IO: event={io.event_io_id} total={io.total_io_count}"]
    lines.append(_format_tier("1-byte", io.one_byte_io))
    lines.append(_format_tier("2-byte", io.two_byte_io))
    lines.append(_format_tier("4-byte", io.four_byte_io))
    lines.append(_format_tier("8-byte", io.eight_byte_io))
    return lines


def format_record(record: Record, index: int) -> str:
    """Format one record for display"""
    gps = record.gps
    lines = []
    lines.append(f"Record {index}:")
    lines.append(f"  Timestamp: {record.timestamp.isoformat().replace('+00:00', 'Z')} ({record.timestamp_ms} ms)")
    lines.append(f"  Priority: {record.priority}")
    lines.append(f"  Location: {gps.latitude_degrees:.7f}, {gps.longitude_degrees:.7f}")
    lines.append(f"  Altitude: {gps.altitude} m")
    lines.append(f"  Angle: {gps.angle}°")
    lines.append(f"  Satellites: {gps.satellites}")
    lines.append(f"  Speed: {gps.speed} km/h")
    lines.extend(_format_io(record.io))
    for warning in record.warnings:
        lines.append(f"  Warning: {warning.message}")
    return '\n'.join(lines)


def format_frame(frame: Frame) -> str:
    """Format a decoded frame for display"""
    lines = []
    lines.append(f"Codec: 0x{frame.codec_id:02x}")
    lines.append(f"Records: {len(frame.records)}/{frame.record_count}")
    if frame.closing_record_count is not None:
        lines.append(f"Closing count: {frame.closing_record_count}")
    lines.append(f"Consumed: {frame.bytes_consumed}/{frame.buffer_length} bytes")
    lines.append(f"Complete: {frame.complete}")

    for index, record in enumerate(frame.records):
        lines.append(format_record(record, index))

    for warning in frame.warnings:
        lines.append(f"Warning: {warning.message}")

    return '\n'.join(lines)


def frame_to_json(frame: Frame, indent: int = 2) -> str:
    return frame.model_dump_json(indent=indent)
