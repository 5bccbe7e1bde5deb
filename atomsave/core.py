"""
Core module for the saved game container.

A container is a flat sequence of records, repeated until the end of the buffer

    u32      name_length
    u16[n]   name
    u32      payload_length
    u8[payload_length]  payload

without header, padding or checksum. The container is never patched in place:
any change produces a new buffer that is parsed again from scratch.
"""
import json
import logging
from typing import Dict, Iterable, Iterator, List, NamedTuple, Tuple

from . import codec
from .diagnostics import Diagnostics
from .enum import Compliant
from .exceptions import (
    InvalidJsonException,
    RecordNotFoundException,
    TruncatedContainerException,
)
from .streams import CursorReader, CursorWriter, string_to_units


logger = logging.getLogger(__name__)


class Record(NamedTuple):
    """Coordinates of a payload inside the buffer of its container."""
    name: str
    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length

    @property
    def length_offset(self) -> int:
        '''where the payload_length field starts'''
        return self.offset - 4

    @property
    def header_offset(self) -> int:
        '''where the whole record starts'''
        return self.length_offset - 4 - 2 * len(string_to_units(self.name))


def pack(pairs: Iterable[Tuple[str, bytes]]) -> bytes:
    '''Serialize (name, payload) couples into the container format.'''
    writer = CursorWriter()

    for name, payload in pairs:
        writer.write_string(name)
        writer.write_u32(len(payload))
        writer.write_bytes(payload)

    return writer.getvalue()


class Container(object):
    """Parsed representation of a saved game: the buffer, the records in
    on-disk order and the index by name.

    Duplicated names remain all in the records but the index points to the
    last one.

    With compliant=Compliant.NONE a payload declared longer than the data
    is clamped and a truncated trailing header is ignored, otherwise
    TruncatedContainerException is raised.
    """

    def __init__(self, data, diagnostics: Diagnostics = None, compliant=Compliant.LENGTH):
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.compliant = compliant
        self.records: List[Record] = []
        self.index: Dict[str, Record] = {}

        reader = CursorReader(data)
        self.buffer = reader.buffer

        self.unpack(reader)

    @classmethod
    def from_records(cls, pairs: Iterable[Tuple[str, bytes]], **kwargs) -> 'Container':
        return cls(pack(pairs), **kwargs)

    def __repr__(self):
        return '<%s(%s)>' % (
            self.__class__.__name__,
            ','.join('%s=%d' % (record.name, record.length) for record in self.records),
        )

    def __len__(self):
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def __contains__(self, name):
        return name in self.index

    def _unpack_record(self, reader: CursorReader) -> Record:
        name = reader.read_string()
        length = reader.read_u32()
        offset = reader.position

        if length > reader.remaining():
            message = f'record \'{name}\' declares {length} bytes but only {reader.remaining()} remain'
            if self.compliant & Compliant.LENGTH:
                raise TruncatedContainerException(message, offset=offset)

            self.diagnostics(message + ', clamping', is_warning=True)
            length = reader.remaining()

        return Record(name, offset, length)

    def unpack(self, reader: CursorReader) -> None:
        while not reader.at_end():
            start = reader.position
            try:
                record = self._unpack_record(reader)
            except TruncatedContainerException as e:
                if self.compliant & Compliant.LENGTH:
                    raise

                # TruncatedContainerException from the reader means the header itself is cut
                self.diagnostics(f'ignoring {len(self.buffer) - start} trailing bytes: {e}', is_warning=True)
                break

            if record.name in self.index:
                self.diagnostics(f'duplicated record \'{record.name}\' at offset {record.offset}, '
                                 'the index will refer to this one', is_warning=True)

            self.records.append(record)
            self.index[record.name] = record

            self.diagnostics(f'found record \'{record.name}\' length {record.length} at offset {record.offset}')

            reader.skip(record.length)

        logger.debug('unpacked %d records from %d bytes' % (len(self.records), len(self.buffer)))

    def names(self) -> List[str]:
        return list(self.index.keys())

    @property
    def raw(self) -> bytes:
        return self.buffer

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        return {name: (record.offset, record.length) for name, record in self.index.items()}

    def get_record(self, name: str) -> Record:
        try:
            return self.index[name]
        except KeyError:
            raise RecordNotFoundException(name) from None

    def get(self, name: str) -> bytes:
        record = self.get_record(name)
        return self.buffer[record.offset:record.end]

    def get_text(self, name: str) -> str:
        return codec.decode(self.get(name), self.diagnostics)

    def get_json(self, name: str):
        text = self.get_text(name)
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise InvalidJsonException(f'record \'{name}\' is not valid JSON: {e}') from e

    def replace(self, name: str, payload: bytes) -> 'Container':
        from .mutator import replace
        return replace(self, name, payload)

    def update_json(self, name: str, value) -> 'Container':
        from .mutator import update_json
        return update_json(self, name, value)
