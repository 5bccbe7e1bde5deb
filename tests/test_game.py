import gzip

import pytest

from atomsave.compression import compress, decompress
from atomsave.core import pack
from atomsave.exceptions import CompressionException
from atomsave.game import SavedGame, map_character_name


@pytest.fixture
def saved_game_path(tmp_path):
    path = tmp_path / 'autosave.sav'
    path.write_bytes(gzip.compress(pack([
        ('player.dat', b'{"money":10,"party":[{"name":"Wolfter"}]}'),
        ('city_1.dat', b'{}'),
    ])))

    return path


def test_compression_roundtrip():
    data = bytes(range(256)) * 4

    assert decompress(compress(data)) == data


def test_decompress_garbage():
    with pytest.raises(CompressionException):
        decompress(b'this is not gzip')

    with pytest.raises(CompressionException):
        decompress(gzip.compress(b'truncated')[:-6])


def test_load(saved_game_path):
    game = SavedGame.load(saved_game_path)

    assert [_.name for _ in game.records] == ['player.dat', 'city_1.dat']
    assert game.get_property('player.dat', 'party.0.name') == 'Wolfter'
    assert game.get_json('city_1.dat') == {}


def test_set_property_and_export(saved_game_path, tmp_path):
    game = SavedGame.load(saved_game_path)
    container = game.container

    game.set_property('player.dat', 'money', 100000)

    assert game.container is not container
    assert game.get_property('player.dat', 'money') == 100000

    destination = tmp_path / 'edited.sav'
    compressed = game.export(destination)

    assert destination.read_bytes() == compressed

    reloaded = SavedGame.load(destination)
    assert reloaded.get_json('player.dat') == {'money': 100000, 'party': [{'name': 'Wolfter'}]}
    assert reloaded.get_bytes('city_1.dat') == b'{}'


def test_export_in_place(saved_game_path):
    game = SavedGame.load(saved_game_path)
    game.update_json('city_1.dat', {'visited': True})
    game.export()

    assert SavedGame.load(saved_game_path).get_json('city_1.dat') == {'visited': True}


def test_export_without_destination():
    game = SavedGame(pack([('a', b'1')]))

    assert gzip.decompress(game.export()) == game.container.buffer


def test_map_character_name():
    assert map_character_name('Wolfter') == 'Dzhulbars'
    assert map_character_name('Gexogen') == 'Hexogen'
    assert map_character_name('Ivan') == 'Ivan'


def test_diagnostics_reset_for_each_operation():
    game = SavedGame(pack([('p', '{"n":"Гексоген"}'.encode('utf-8'))]))

    game.get_property('p', 'n')
    count = game.diagnostics.count

    for _ in range(10):
        assert game.get_property('p', 'n') == 'Гексоген'

    assert count == 8
    assert game.diagnostics.count == count

    game.set_property('p', 'n', 'Hexogen')

    # the decoding of the old value, the encoding of the new one has no warnings
    assert len(game.diagnostics.warnings) == 8
