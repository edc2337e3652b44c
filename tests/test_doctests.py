import doctest
from importlib import import_module

import pytest

MODULES = [
    'transcode.encoder',
    'transcode.value',
    'transcode.serialization.adapters.max_bytes',
    'transcode.serialization.encoding.bool',
    'transcode.serialization.encoding.bytes',
    'transcode.serialization.encoding.compact',
    'transcode.serialization.encoding.int',
    'transcode.serialization.encoding.utf8',
    'transcode.utils.dict',
]


@pytest.mark.parametrize('module_name', MODULES)
def test_doctests(module_name: str) -> None:
    result = doctest.testmod(import_module(module_name))
    assert result.attempted > 0
    assert result.failed == 0
