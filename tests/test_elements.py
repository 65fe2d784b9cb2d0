from datetime import datetime, timezone

import pytest

from avl.errors import TimestampOutOfRangeError, TruncatedError
from avl.protocols.elements import (
    MAX_TIMESTAMP_MS,
    check_io_count,
    parse_gps_element,
    parse_io_element,
    parse_io_tier,
    parse_timestamp,
)
from framing import FIRST_TIMESTAMP_MS, pack_gps, pack_io, pack_tier


def test_timestamp_decodes_big_endian_millis():
    ts = parse_timestamp(FIRST_TIMESTAMP_MS.to_bytes(8, 'big'))
    assert ts.tzinfo == timezone.utc
    assert ts == datetime.fromtimestamp(FIRST_TIMESTAMP_MS // 1000, tz=timezone.utc).replace(
        microsecond=(FIRST_TIMESTAMP_MS % 1000) * 1000)


def test_timestamp_zero_is_epoch():
    assert parse_timestamp(bytes(8)) == datetime(1970, 1, 1, tzinfo=timezone.utc)


def test_timestamp_at_datetime_max():
    ts = parse_timestamp(MAX_TIMESTAMP_MS.to_bytes(8, 'big'))
    assert ts.year == 9999
    assert ts.microsecond == 999000


def test_timestamp_out_of_range_fails():
    with pytest.raises(TimestampOutOfRangeError) as exc:
        parse_timestamp((MAX_TIMESTAMP_MS + 1).to_bytes(8, 'big'), offset=42)
    assert exc.value.at == 42
    assert exc.value.value_ms == MAX_TIMESTAMP_MS + 1


def test_timestamp_rejects_wrong_window():
    with pytest.raises(ValueError):
        parse_timestamp(bytes(7))


def test_gps_fields_in_order():
    gps = parse_gps_element(pack_gps(longitude=1, latitude=2, altitude=3, angle=4, satellites=5, speed=6))
    assert (gps.longitude, gps.latitude, gps.altitude, gps.angle, gps.satellites, gps.speed) == (1, 2, 3, 4, 5, 6)


def test_gps_coordinates_are_signed():
    gps = parse_gps_element(pack_gps(longitude=-252999248, latitude=-1))
    assert gps.longitude == -252999248
    assert gps.latitude == -1
    assert gps.longitude_degrees == pytest.approx(-25.2999248)


def test_gps_rejects_wrong_window():
    with pytest.raises(ValueError):
        parse_gps_element(bytes(14))


def test_tier_preserves_order():
    elements, consumed = parse_io_tier(pack_tier(1, [(1, 10), (2, 20)]), 0, 1)
    assert [(e.io_id, e.value) for e in elements] == [(1, 10), (2, 20)]
    assert consumed == 5


def test_tier_keeps_duplicate_ids():
    elements, _ = parse_io_tier(pack_tier(2, [(7, 1), (7, 2), (7, 1)]), 0, 2)
    assert [(e.io_id, e.value) for e in elements] == [(7, 1), (7, 2), (7, 1)]


def test_empty_tier_consumes_count_byte_only():
    elements, consumed = parse_io_tier(b'\x00\xff\xff', 0, 8)
    assert elements == ()
    assert consumed == 1


@pytest.mark.parametrize("width", [1, 2, 4, 8])
def test_tier_value_widths(width):
    value = (1 << (8 * width)) - 1
    buffer = b'\xaa' + pack_tier(width, [(9, value)])
    elements, consumed = parse_io_tier(buffer, 1, width)
    assert elements[0].value == value
    assert consumed == 1 + 1 + width


def test_tier_rejects_unknown_width():
    with pytest.raises(ValueError):
        parse_io_tier(b'\x00', 0, 3)


def test_tier_truncated_value_reports_offset():
    buffer = pack_tier(4, [(70, 349)])[:-1]
    with pytest.raises(TruncatedError) as exc:
        parse_io_tier(buffer, 0, 4)
    assert exc.value.at == 2
    assert exc.value.needed == 4
    assert exc.value.available == 3


def test_io_section_reads_tiers_in_fixed_order():
    buffer = b'\x00' * 3 + pack_io(event_io_id=5, one=[(1, 1)], two=[(2, 2)], four=[(3, 3)], eight=[(4, 4)])
    section, consumed = parse_io_element(buffer, 3)
    assert section.event_io_id == 5
    assert section.total_io_count == 4
    assert [e.io_id for e in section.one_byte_io] == [1]
    assert [e.io_id for e in section.two_byte_io] == [2]
    assert [e.io_id for e in section.four_byte_io] == [3]
    assert [e.io_id for e in section.eight_byte_io] == [4]
    assert [e.io_id for e in section.elements] == [1, 2, 3, 4]
    assert consumed == len(buffer) - 3


def test_io_section_with_all_tiers_empty():
    section, consumed = parse_io_element(pack_io(), 0)
    assert section.element_count == 0
    assert consumed == 6


def test_io_section_truncated_at_tier_count():
    buffer = pack_io(one=[(1, 1)])[:-1]
    with pytest.raises(TruncatedError) as exc:
        parse_io_element(buffer, 0)
    assert exc.value.at == len(buffer)
    assert exc.value.needed == 1


def test_check_io_count_matches():
    section, _ = parse_io_element(pack_io(one=[(1, 1)], four=[(2, 2)]), 0)
    assert check_io_count(section, 0) is None


def test_check_io_count_mismatch():
    section, _ = parse_io_element(pack_io(one=[(1, 1)], total=3), 0)
    warning = check_io_count(section, 17)
    assert warning.kind == 'io_count_mismatch'
    assert warning.offset == 17
    assert warning.expected == 3
    assert warning.actual == 1


def test_section_tier_lookup():
    section, _ = parse_io_element(pack_io(one=[(1, 1)], two=[(2, 2)], four=[(3, 3)], eight=[(4, 4)]), 0)
    assert section.tier(1) == section.one_byte_io
    assert section.tier(2) == section.two_byte_io
    assert section.tier(4) == section.four_byte_io
    assert section.tier(8) == section.eight_byte_io
    assert [section.tier(width)[0].io_id for width in (1, 2, 4, 8)] == [1, 2, 3, 4]
    with pytest.raises(ValueError):
        section.tier(3)
