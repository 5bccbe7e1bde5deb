#!/usr/bin/env python3
'''
List the records contained in an ATOM RPG saved game.

 $ DEBUG=1 atomdump.py autosave.sav
'''
import logging
import os
import sys

from atomsave.exceptions import AtomSaveException
from atomsave.game import SavedGame


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.WARNING)
logger = logging.getLogger(__name__)


def usage(progname):
    print('usage: %s <saved game>' % progname)
    sys.exit(1)


def dump_records(records):
    print(f'''Records:
  [Nr] {"Name":<40} Header     Offset     Size''')
    for idx, record in enumerate(records):
        print(f'''  [{idx: >2d}] {record.name:<40} 0x{record.header_offset:08x} 0x{record.offset:08x} {record.length}''')


if __name__ == '__main__':
    if len(sys.argv) < 2:
        usage(sys.argv[0])

    path = sys.argv[1]

    try:
        game = SavedGame.load(path)
    except (AtomSaveException, OSError) as e:
        logger.error(f'failed to load saved game at path \'{path}\': {e}')
        sys.exit(1)

    dump_records(game.records)

    warnings = game.diagnostics.warnings
    if warnings:
        print(f'{len(warnings)} warnings while parsing')
