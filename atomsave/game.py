"""
High level access to a saved game of ATOM RPG.

    game = SavedGame.load('autosave.sav')
    game.get_property('player.dat', 'money')
    game.set_property('player.dat', 'money', 100000)
    game.export()

Every modification replaces the container with a freshly parsed one.
"""
import logging
import os

from .compression import compress, decompress
from .core import Container
from .diagnostics import Diagnostics
from .enum import Compliant
from .jsonpath import get_property, set_property


logger = logging.getLogger(__name__)

# names used in the saved game that the game shows differently
CHARACTER_NAMES = {
    'Wolfter': 'Dzhulbars',
    'Gexogen': 'Hexogen',
}


def map_character_name(name: str) -> str:
    return CHARACTER_NAMES.get(name, name)


class SavedGame(object):

    def __init__(self, data, filename=None, diagnostics: Diagnostics = None, compliant=Compliant.LENGTH):
        self.filename = filename
        self.container = Container(data, diagnostics=diagnostics, compliant=compliant)

    @classmethod
    def load(cls, path, **kwargs) -> 'SavedGame':
        '''Read and decompress the saved game at the given path'''
        logger.debug('loading saved game from \'%s\'' % path)
        with open(path, 'rb') as f:
            data = decompress(f.read())

        return cls(data, filename=path, **kwargs)

    def __repr__(self):
        return '<%s(%s, %d records)>' % (self.__class__.__name__, self.filename, len(self.container))

    @property
    def diagnostics(self) -> Diagnostics:
        return self.container.diagnostics

    @property
    def records(self):
        return self.container.records

    def get_bytes(self, name: str) -> bytes:
        return self.container.get(name)

    def _new_log(self):
        '''Each operation starts with an empty log'''
        self.diagnostics.clear()

    def get_json(self, name: str):
        self._new_log()
        return self.container.get_json(name)

    def update_json(self, name: str, document) -> None:
        self._new_log()
        self.container = self.container.update_json(name, document)

    def get_property(self, name: str, path: str):
        return get_property(self.get_json(name), path)

    def set_property(self, name: str, path: str, value) -> None:
        self._new_log()
        document = self.container.get_json(name)
        set_property(document, path, value)
        self.container = self.container.update_json(name, document)

    def export(self, path=None) -> bytes:
        '''Compress the actual buffer and, when a destination is available, save it.'''
        compressed = compress(self.container.buffer)

        path = path or self.filename
        if path:
            logger.info('exporting %d bytes to \'%s\'' % (len(compressed), os.fspath(path)))
            with open(path, 'wb') as f:
                f.write(compressed)

        return compressed
