import io
import logging
import struct

from .exceptions import StringTooLongException, TruncatedContainerException


logger = logging.getLogger(__name__)

# not a limit of the format, a string longer than this means corruption
MAX_STRING_LENGTH = 4096


def units_to_string(units):
    '''Join UTF-16 code units, pairing the surrogates when possible.'''
    raw = struct.pack('<%dH' % len(units), *units)
    return raw.decode('utf-16-le', 'surrogatepass')


def string_to_units(value):
    raw = value.encode('utf-16-le', 'surrogatepass')
    return struct.unpack('<%dH' % (len(raw) // 2), raw)


class CursorReader(object):
    '''Sequential reader over an in-memory buffer.

    The buffer is fully materialized: a path is read completely at
    construction time, bytes-like objects are copied.'''

    def __init__(self, obj):
        self._type = type(obj)
        self.obj = obj

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)

        if init_method is None:
            raise ValueError('\'%s\' is the wrong kind of object to read from' % self._type.__name__)

        init_method()

        self.stream = io.BytesIO(self.buffer)

    def __repr__(self):
        return '<%s(position=%d, size=%d)>' % (self.__class__.__name__, self.position, len(self.buffer))

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'' % self.obj)
        with open(self.obj, 'rb') as f:
            self.buffer = f.read()

    def init_bytes(self):
        self.buffer = self.obj

    def init_bytearray(self):
        self.buffer = bytes(self.obj)

    init_memoryview = init_bytearray

    @property
    def position(self) -> int:
        return self.stream.tell()

    def tell(self) -> int:
        return self.stream.tell()

    def remaining(self) -> int:
        return max(len(self.buffer) - self.position, 0)

    def at_end(self) -> bool:
        return self.position >= len(self.buffer)

    def read_bytes(self, count: int) -> bytes:
        position = self.position
        data = self.stream.read(count)

        if len(data) != count:
            raise TruncatedContainerException(
                f'tried to read {count} bytes but only {len(data)} are available', offset=position)

        return data

    def read_byte(self) -> int:
        return self.read_bytes(1)[0]

    def read_u16(self) -> int:
        return self.read_byte() | (self.read_byte() << 8)

    def read_u32(self) -> int:
        return self.read_u16() | (self.read_u16() << 16)

    def read_string(self) -> str:
        '''Read a string prefixed with its length in UTF-16 code units.'''
        position = self.position
        length = self.read_u32()

        if length > MAX_STRING_LENGTH:
            raise StringTooLongException(
                f'found a string of {length} code units, the maximum is {MAX_STRING_LENGTH}', offset=position)

        units = [self.read_u16() for _ in range(length)]

        return units_to_string(units)

    def skip(self, count: int) -> None:
        self.stream.seek(self.position + count)


class CursorWriter(object):
    '''Counterpart of CursorReader, it builds a buffer from scratch.'''

    def __init__(self):
        self.stream = io.BytesIO()

    def tell(self) -> int:
        return self.stream.tell()

    def write_bytes(self, data: bytes) -> int:
        return self.stream.write(data)

    def write_byte(self, value: int) -> int:
        return self.write_bytes(struct.pack('<B', value))

    def write_u16(self, value: int) -> int:
        return self.write_bytes(struct.pack('<H', value))

    def write_u32(self, value: int) -> int:
        return self.write_bytes(struct.pack('<I', value))

    def write_string(self, value: str) -> int:
        units = string_to_units(value)

        if len(units) > MAX_STRING_LENGTH:
            raise StringTooLongException(
                f'string of {len(units)} code units, the maximum is {MAX_STRING_LENGTH}', offset=self.tell())

        size = self.write_u32(len(units))
        for unit in units:
            size += self.write_u16(unit)

        return size

    def getvalue(self) -> bytes:
        return self.stream.getvalue()
