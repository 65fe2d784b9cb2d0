from datetime import datetime
from typing import Optional, Literal, Tuple
from pydantic import BaseModel, ConfigDict


COORDINATE_SCALE = 10_000_000


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class DecodeWarning(FrozenModel):
    """Non-fatal anomaly found while decoding"""
    kind: Literal['io_count_mismatch', 'trailing_bytes', 'closing_count_mismatch']
    offset: int
    expected: Optional[int] = None
    actual: Optional[int] = None
    message: str = ""


class GPSFix(FrozenModel):
    # Raw values as transmitted
    longitude: int
    latitude: int
    altitude: int
    angle: int
    satellites: int
    speed: int  # km/h

    @property
    def longitude_degrees(self) -> float:
        return self.longitude / COORDINATE_SCALE

    @property
    def latitude_degrees(self) -> float:
        return self.latitude / COORDINATE_SCALE


class IOElement(FrozenModel):
    io_id: int
    value: int


class IOSection(FrozenModel):
    event_io_id: int  # 0 = periodic record
    total_io_count: int
    one_byte_io: Tuple[IOElement, ...] = ()
    two_byte_io: Tuple[IOElement, ...] = ()
    four_byte_io: Tuple[IOElement, ...] = ()
    eight_byte_io: Tuple[IOElement, ...] = ()

    def tier(self, width: int) -> Tuple[IOElement, ...]:
        """Return the elements of the tier holding ``width``-byte values"""
        tiers = {
            1: self.one_byte_io,
            2: self.two_byte_io,
            4: self.four_byte_io,
            8: self.eight_byte_io,
        }
        if width not in tiers:
            raise ValueError(f"No IO tier for {width}-byte values")
        return tiers[width]

    @property
    def element_count(self) -> int:
        return (len(self.one_byte_io) + len(self.two_byte_io)
                + len(self.four_byte_io) + len(self.eight_byte_io))

    @property
    def elements(self) -> Tuple[IOElement, ...]:
        """All pairs, tier by tier, in buffer order"""
        return self.one_byte_io + self.two_byte_io + self.four_byte_io + self.eight_byte_io


class Record(FrozenModel):
    timestamp: datetime
    timestamp_ms: int
    priority: int
    gps: GPSFix
    io: IOSection
    warnings: Tuple[DecodeWarning, ...] = ()


class Frame(FrozenModel):
    codec_id: int
    record_count: int
    records: Tuple[Record, ...] = ()
    closing_record_count: Optional[int] = None
    bytes_consumed: int
    buffer_length: int
    warnings: Tuple[DecodeWarning, ...] = ()

    @property
    def complete(self) -> bool:
        """True when every declared record was decoded and no bytes were left over"""
        return (len(self.records) == self.record_count
                and self.bytes_consumed == self.buffer_length)

    @property
    def all_warnings(self) -> Tuple[DecodeWarning, ...]:
        collected = []
        for record in self.records:
            collected.extend(record.warnings)
        collected.extend(self.warnings)
        return tuple(collected)
