import json
from pathlib import Path

import pytest

from transcode.exception import RegistryLoadError, UnknownTypeError
from transcode.schema import (
    Field,
    Primitive,
    Registry,
    TypeDefArray,
    TypeDefComposite,
    TypeDefOther,
    TypeDefPrimitive,
)

FIXTURES = Path(__file__).parent.parent / 'fixtures'


def test_resolve() -> None:
    registry = Registry({0: TypeDefPrimitive(Primitive.U8), 1: TypeDefArray(type_param=0)})
    assert registry.resolve(0) == TypeDefPrimitive(Primitive.U8)
    assert registry.resolve(1) == TypeDefArray(type_param=0)
    assert len(registry) == 2
    assert 1 in registry
    assert 2 not in registry
    assert sorted(registry) == [0, 1]


def test_resolve_unknown_id() -> None:
    registry = Registry({0: TypeDefPrimitive(Primitive.U8)})
    with pytest.raises(UnknownTypeError, match='7'):
        registry.resolve(7)


def test_registry_is_not_affected_by_source_mapping() -> None:
    types = {0: TypeDefPrimitive(Primitive.U8)}
    registry = Registry(types)
    types[1] = TypeDefPrimitive(Primitive.BOOL)
    assert 1 not in registry


def test_from_json_fixture() -> None:
    registry = Registry.from_json(FIXTURES / 'transfer_registry.json')
    assert len(registry) == 9
    assert registry.resolve(3) == TypeDefPrimitive(Primitive.U128)
    assert registry.resolve(4) == TypeDefArray(type_param=0)
    assert registry.resolve(5) == TypeDefComposite(fields=(Field(type_id=4),))
    assert registry.resolve(6) == TypeDefComposite(fields=(
        Field(type_id=5, name='to'),
        Field(type_id=3, name='value'),
        Field(type_id=2, name='memo'),
        Field(type_id=1, name='ok'),
    ))
    assert registry.resolve(7) == TypeDefOther(kind='variant')
    assert registry.resolve(8) == TypeDefOther(kind='sequence')


def test_from_yaml_fixture() -> None:
    registry = Registry.from_yaml(FIXTURES / 'transfer_registry.yml')
    assert registry.resolve(2) == TypeDefComposite(fields=(Field(0, 'a'), Field(1, 'b')))


def test_from_file_picks_parser_by_extension() -> None:
    assert len(Registry.from_file(FIXTURES / 'transfer_registry.json')) == 9
    assert len(Registry.from_file(FIXTURES / 'transfer_registry.yml')) == 3


def test_whole_metadata_document() -> None:
    with open(FIXTURES / 'transfer_registry.json') as file:
        types = json.load(file)['types']
    metadata = {
        'source': {'hash': '0x00', 'language': 'ink! 4.0.0'},
        'contract': {'name': 'erc20', 'version': '0.1.0'},
        'spec': {'constructors': [], 'messages': []},
        'types': types,
        'version': '4',
    }
    assert len(Registry.from_dict(metadata)) == 9


def test_versioned_metadata_document() -> None:
    metadata = {
        'metadataVersion': '0.1.0',
        'source': {'hash': '0x00'},
        'V3': {'spec': {}, 'storage': {}, 'types': [{'id': 0, 'type': {'def': {'primitive': 'bool'}}}]},
    }
    assert Registry.from_dict(metadata).resolve(0) == TypeDefPrimitive(Primitive.BOOL)


@pytest.mark.parametrize(
    'def_',
    [
        {'tuple': [0, 1]},
        {'compact': {'type': 0}},
        {'bitSequence': {'bit_store_type': 0, 'bit_order_type': 1}},
        {'phantom': {}},
    ]
)
def test_other_variants(def_: dict) -> None:
    registry = Registry.from_dict({'types': [{'id': 0, 'type': {'def': def_}}]})
    kind, = def_
    assert registry.resolve(0) == TypeDefOther(kind=kind)


def test_composite_without_fields() -> None:
    registry = Registry.from_dict({'types': [{'id': 0, 'type': {'def': {'composite': {}}}}]})
    assert registry.resolve(0) == TypeDefComposite(fields=())


@pytest.mark.parametrize(
    'document',
    [
        {},
        {'types': {}},
        {'types': [{'type': {'def': {'primitive': 'u8'}}}]},
        {'types': [{'id': -1, 'type': {'def': {'primitive': 'u8'}}}]},
        {'types': [{'id': 0, 'type': {'def': {'primitive': 'u7'}}}]},
        {'types': [{'id': 0, 'type': {'def': {}}}]},
        {'types': [{'id': 0, 'type': {'def': {'primitive': 'u8', 'array': {'type': 0}}}}]},
        {'types': [{'id': 0, 'type': {'def': {'array': {'len': 4}}}}]},
        {'types': [{'id': 0, 'type': {'def': {'composite': {'fields': [{'name': 'a'}]}}}}]},
        {'types': [{'id': 0, 'type': {'def': {'primitive': 'u8'}, 'unexpected': 1}}]},
        {'types': [
            {'id': 0, 'type': {'def': {'primitive': 'u8'}}},
            {'id': 0, 'type': {'def': {'primitive': 'bool'}}},
        ]},
    ]
)
def test_invalid_documents(document: dict) -> None:
    with pytest.raises(RegistryLoadError):
        Registry.from_dict(document)


def test_invalid_files(tmp_path: Path) -> None:
    bad_json = tmp_path / 'bad.json'
    bad_json.write_text('{"types": [')
    with pytest.raises(RegistryLoadError):
        Registry.from_json(bad_json)

    list_json = tmp_path / 'list.json'
    list_json.write_text('[]')
    with pytest.raises(RegistryLoadError):
        Registry.from_json(list_json)

    bad_yaml = tmp_path / 'bad.yml'
    bad_yaml.write_text('types: [\n')
    with pytest.raises(RegistryLoadError):
        Registry.from_yaml(bad_yaml)

    with pytest.raises(RegistryLoadError):
        Registry.from_yaml(tmp_path / 'missing.yml')
