import pytest

from atomsave.diagnostics import Diagnostics


# two records: "a" with payload 01 02 03 04 and "b" empty
TWO_RECORDS = (
    b'\x01\x00\x00\x00' + b'a\x00' + b'\x04\x00\x00\x00' + b'\x01\x02\x03\x04' +
    b'\x01\x00\x00\x00' + b'b\x00' + b'\x00\x00\x00\x00'
)


@pytest.fixture
def diagnostics():
    return Diagnostics()


@pytest.fixture
def two_records():
    return TWO_RECORDS
