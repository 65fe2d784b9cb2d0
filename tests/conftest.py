import pytest

from avl.samples import SAMPLE_FRAME
from framing import pack_frame, pack_io, pack_record


@pytest.fixture
def sample_frame():
    return SAMPLE_FRAME


@pytest.fixture
def single_record_frame():
    record = pack_record(io=pack_io(event_io_id=1, one=[(1, 10), (2, 20)], two=[(66, 12000)],
                                    four=[(70, 349)], eight=[(78, 2 ** 40)]))
    return pack_frame(record)
