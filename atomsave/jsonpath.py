'''
Access to nested properties of a JSON document with a dotted path,
for example "player.stats.0.value": dictionaries are indexed by key,
lists by the component when it is a non negative integer.
'''
import json
from typing import Any, List

from .exceptions import PropertyPathException


def split_path(path: str) -> List[str]:
    return path.split('.')


def _list_index(obj: list, component: str, path: str) -> int:
    '''Only plain non negative integers address an element'''
    if not (component.isascii() and component.isdigit()) or int(component) >= len(obj):
        raise PropertyPathException(path, component)

    return int(component)


def _step(obj, component: str, path: str):
    if isinstance(obj, list):
        return obj[_list_index(obj, component, path)]

    if isinstance(obj, dict) and component in obj:
        return obj[component]

    raise PropertyPathException(path, component)


def get_property(document, path: str) -> Any:
    obj = document
    for component in split_path(path):
        obj = _step(obj, component, path)

    return obj


def set_property(document, path: str, value) -> None:
    '''The last component can be missing in a dictionary, in that case it's created.'''
    *parents, last = split_path(path)

    obj = document
    for component in parents:
        obj = _step(obj, component, path)

    if isinstance(obj, list):
        obj[_list_index(obj, last, path)] = value
    elif isinstance(obj, dict):
        obj[last] = value
    else:
        raise PropertyPathException(path, last)


def prettify_json(document) -> str:
    return json.dumps(document, indent=4, ensure_ascii=False)
