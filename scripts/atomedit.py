#!/usr/bin/env python3
'''
Read or modify a property of a JSON record inside a saved game.

 $ atomedit.py autosave.sav player.dat money
 $ atomedit.py autosave.sav player.dat money 100000

When the value is given it's parsed as JSON (falling back to a plain string)
and the saved game is exported back to the same path.
'''
import json
import logging
import os
import sys

from atomsave.exceptions import AtomSaveException
from atomsave.game import SavedGame
from atomsave.jsonpath import prettify_json


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.WARNING)
logger = logging.getLogger(__name__)


def usage(progname):
    print(f'''usage: {progname} <saved game> <record> <path> [value]

The path is a dotted list of keys and indexes (e.g. "inventory.0.count").''')
    sys.exit(1)


def parse_value(raw):
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


if __name__ == '__main__':
    if len(sys.argv) < 4:
        usage(sys.argv[0])

    path, record, property_path = sys.argv[1:4]

    try:
        game = SavedGame.load(path)

        if len(sys.argv) < 5:
            print(prettify_json(game.get_property(record, property_path)))
            sys.exit(0)

        game.set_property(record, property_path, parse_value(sys.argv[4]))
        game.export()
    except (AtomSaveException, OSError) as e:
        logger.error(f'failed to edit \'{record}\' in \'{path}\': {e}')
        sys.exit(1)
