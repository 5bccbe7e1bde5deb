'''
# Text codec for record payloads

The payloads containing text (mainly JSON documents) are stored with
an UTF-8 like encoding working on UTF-16 code units:

 - a byte with the high bit unset is a character by itself
 - otherwise the byte starts a sequence whose number of continuation
   bytes is given by the bits 3-5 of the lead byte, each continuation
   byte must be of the form 10xxxxxx

On the encoding side the code units of the text are taken one by one,
surrogate halves are combined into a single code point and written with
four bytes.

Every non ASCII character is reported to the diagnostics as a warning: it's
legit data, but it's where the game and the editor disagree most of the time.

Names of the records do not pass from here, they are raw UCS-2 (see streams).
'''
import logging
from typing import List

from bitstring import BitArray, Bits

from .diagnostics import Diagnostics
from .exceptions import MalformedTextException
from .streams import string_to_units


logger = logging.getLogger(__name__)

# number of continuation bytes indexed by (lead >> 3) & 0x07
EXTRA_BYTES = (1, 1, 1, 1, 2, 2, 3, 0)

# total payload bits and lead marker of a sequence of the given size
SEQUENCE_BITS = {
    2: 11,
    3: 16,
    4: 21,
}
LEAD_MARKERS = {
    2: 0xc0,
    3: 0xe0,
    4: 0xf0,
}

MAX_CODE_POINT = 0x10ffff


def _pack_sequence(code: int, size: int) -> List[int]:
    bits = Bits(uint=code, length=SEQUENCE_BITS[size])
    n_lead = len(bits) - 6 * (size - 1)

    sequence = [LEAD_MARKERS[size] | bits[:n_lead].uint]
    sequence.extend(0x80 | bits[_:_ + 6].uint for _ in range(n_lead, len(bits), 6))

    return sequence


def decode(data: bytes, diagnostics: Diagnostics = None) -> str:
    '''Convert the bytes of a payload into text.

    It fails with MalformedTextException without returning partial output
    if a sequence is invalid or truncated.'''
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()

    chars = []
    index, count = 0, len(data)

    while index < count:
        start = index
        ch = data[index]
        index += 1

        if ch & 0x80:
            diagnostics(f'non-ASCII char 0x{ch:02x} detected while decoding at offset {start}', is_warning=True)

            extra = EXTRA_BYTES[(ch >> 3) & 0x07]
            if not ch & 0x40 or not extra:
                raise MalformedTextException(f'invalid lead byte 0x{ch:02x}', offset=start)

            if index + extra > count:
                raise MalformedTextException(f'sequence of {extra + 1} bytes truncated by the end of data', offset=start)

            bits = BitArray(uint=ch & (0x3f >> extra), length=6 - extra)
            for chx in data[index:index + extra]:
                if (chx & 0xc0) != 0x80:
                    raise MalformedTextException(f'invalid continuation byte 0x{chx:02x}', offset=index)

                bits.append(Bits(uint=chx & 0x3f, length=6))
                index += 1

            ch = bits.uint
            if ch > MAX_CODE_POINT:
                raise MalformedTextException(f'code point 0x{ch:x} out of range', offset=start)

        chars.append(chr(ch))

    return ''.join(chars)


def encode(text: str, diagnostics: Diagnostics = None) -> bytes:
    '''Convert text into the bytes of a payload. It never fails.'''
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()

    units = string_to_units(text)
    out = bytearray()

    index = 0
    while index < len(units):
        unit = units[index]
        index += 1

        if unit < 0x80:
            out.append(unit)
            continue

        diagnostics(f'non-ASCII character U+{unit:04X} detected while encoding', is_warning=True)

        if unit < 0x800:
            out.extend(_pack_sequence(unit, 2))
        elif 0xd800 <= unit < 0xe000:
            # the next unit is consumed as the other half of the pair
            if index < len(units):
                low = units[index]
                index += 1
            else:
                diagnostics(f'unpaired surrogate U+{unit:04X} at the end of text', is_warning=True)
                low = 0

            code = 0x10000 + (((unit & 0x3ff) << 10) | (low & 0x3ff))
            out.extend(_pack_sequence(code, 4))
        else:
            out.extend(_pack_sequence(unit, 3))

    logger.debug('encoded %d code units into %d bytes' % (len(units), len(out)))

    return bytes(out)
