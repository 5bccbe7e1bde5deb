"""
Replacement of the payload of a record.

The new buffer is built by copy and then parsed again: we never try to shift
the offsets of the records following the modified one.
"""
import json
import logging

from . import codec
from .core import Container
from .exceptions import AtomSaveException
from .streams import CursorWriter


logger = logging.getLogger(__name__)


def replace(container: Container, name: str, payload: bytes) -> Container:
    '''Return a new container where the record named "name" has "payload" as data.

    The container passed as argument is left untouched.'''
    if not isinstance(payload, (bytes, bytearray, memoryview)):
        raise TypeError(f'payload must be bytes-like, not {type(payload).__name__}')

    record = container.get_record(name)
    payload = memoryview(payload).tobytes()

    old = container.buffer
    size = len(old) - record.length + len(payload)

    writer = CursorWriter()
    writer.write_bytes(old[:record.length_offset])
    writer.write_u32(len(payload))
    writer.write_bytes(payload)
    writer.write_bytes(old[record.end:])

    buffer = writer.getvalue()

    if len(buffer) != size:
        raise AtomSaveException(f'rebuilt buffer is {len(buffer)} bytes instead of {size}')

    container.diagnostics(f'\'{name}\' has been updated ({record.length} -> {len(payload)} bytes), '
                          'reinitializing saved game')
    logger.debug('buffer resized from %d to %d bytes' % (len(old), len(buffer)))

    return Container(buffer, diagnostics=container.diagnostics, compliant=container.compliant)


def stringify(value) -> str:
    '''Compact JSON, without spaces and with non-ASCII characters left as they are'''
    return json.dumps(value, separators=(',', ':'), ensure_ascii=False)


def update_json(container: Container, name: str, value) -> Container:
    payload = codec.encode(stringify(value), container.diagnostics)

    return replace(container, name, payload)
