import pytest

from atomsave import codec
from atomsave.exceptions import MalformedTextException


def test_decode_ascii(diagnostics):
    assert codec.decode(b'{"money":100}', diagnostics) == '{"money":100}'
    assert diagnostics.warnings == []


def test_decode_multibyte(diagnostics):
    assert codec.decode(b'\xc3\xa8', diagnostics) == 'è'
    assert codec.decode(b'\xd0\x96', diagnostics) == 'Ж'
    assert codec.decode(b'\xe2\x82\xac', diagnostics) == '€'
    assert codec.decode(b'\xf0\x9f\x98\x80', diagnostics) == '\U0001f600'


def test_decode_warns_for_each_non_ascii_char(diagnostics):
    """Non ASCII characters are legit but they must be reported."""
    text = codec.decode('café Мир'.encode('utf-8'), diagnostics)

    assert text == 'café Мир'
    assert len(diagnostics.warnings) == 4


@pytest.mark.parametrize('data', [
    b'\x80',              # continuation byte as lead
    b'\xbf',
    b'\xf8\x80\x80\x80',  # no entry in the table
    b'\xff',
    b'abc\xc3',           # truncated
    b'\xe2\x82',
    b'\xc3\x28',          # wrong continuation byte
    b'\xe2\x28\xa1',
    b'\xf7\xbf\xbf\xbf',  # over U+10FFFF
])
def test_decode_malformed(data, diagnostics):
    with pytest.raises(MalformedTextException):
        codec.decode(data, diagnostics)


def test_decode_malformed_offset():
    with pytest.raises(MalformedTextException) as e:
        codec.decode(b'ab\xe2\x28\xa1')

    assert e.value.offset == 3


def test_encode_ascii(diagnostics):
    assert codec.encode('kebab', diagnostics) == b'kebab'
    assert diagnostics.count == 0


def test_encode_like_utf8(diagnostics):
    text = 'AèЖ€￿\U0001f600\U0010ffff'

    assert codec.encode(text, diagnostics) == text.encode('utf-8')
    assert len(diagnostics.warnings) == 6


def test_encode_unpaired_surrogate_at_end(diagnostics):
    """The missing half is taken as zero."""
    assert codec.encode('\ud83d', diagnostics) == '\U0001f400'.encode('utf-8')
    assert any('unpaired' in _ for _ in diagnostics.warnings)


@pytest.mark.parametrize('text', [
    '',
    'plain ascii',
    '{"name":"Атом","k":"üñî"}',
    '߿ࠀ퟿￿',
    'emoji \U0001f600 and \U00010000',
])
def test_roundtrip(text):
    assert codec.decode(codec.encode(text)) == text
