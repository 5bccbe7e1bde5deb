"""The saved games are stored on disk compressed with gzip as a whole."""
import gzip
import logging
import zlib

from .exceptions import CompressionException


logger = logging.getLogger(__name__)


def compress(data: bytes) -> bytes:
    return gzip.compress(data)


def decompress(data: bytes) -> bytes:
    try:
        decompressed = gzip.decompress(data)
    except (OSError, EOFError, zlib.error) as e:
        raise CompressionException(f'unable to decompress {len(data)} bytes: {e}') from e

    logger.debug('decompressed %d bytes into %d' % (len(data), len(decompressed)))

    return decompressed
