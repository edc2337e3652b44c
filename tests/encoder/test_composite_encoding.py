import pytest

from transcode.conf import TranscodeSettings
from transcode.encoder import encode_to_bytes, encode_type_id
from transcode.exception import TypeMismatchError, UnknownTypeError, UnsupportedTypeError
from transcode.schema import Field, Primitive, Registry, TypeDefArray, TypeDefComposite, TypeDefOther, TypeDefPrimitive
from transcode.serialization import Serializer

POSITIONAL = TranscodeSettings()
STRICT = TranscodeSettings(STRICT_FIELD_NAMES=True)

U8 = 0
BOOL = 1
STR = 2
PAIR = 3
WRAPPER = 4
TUPLE_STRUCT = 5
ENUM = 6
WITH_ENUM = 7
UNIT = 8
NESTED = 9
WITH_DANGLING = 10
BYTES = 11

REGISTRY = Registry({
    U8: TypeDefPrimitive(Primitive.U8),
    BOOL: TypeDefPrimitive(Primitive.BOOL),
    STR: TypeDefPrimitive(Primitive.STR),
    PAIR: TypeDefComposite(fields=(Field(U8, 'a'), Field(BOOL, 'b'))),
    WRAPPER: TypeDefComposite(fields=(Field(BYTES),)),
    TUPLE_STRUCT: TypeDefComposite(fields=(Field(U8), Field(STR))),
    ENUM: TypeDefOther(kind='variant'),
    WITH_ENUM: TypeDefComposite(fields=(Field(U8, 'first'), Field(ENUM, 'second'))),
    UNIT: TypeDefComposite(fields=()),
    NESTED: TypeDefComposite(fields=(Field(PAIR, 'inner'), Field(STR, 'label'))),
    WITH_DANGLING: TypeDefComposite(fields=(Field(U8, 'a'), Field(42, 'b'))),
    BYTES: TypeDefArray(type_param=U8),
})


def _encode(type_id: int, value, settings: TranscodeSettings = POSITIONAL) -> bytes:
    return encode_to_bytes(REGISTRY, type_id, value, settings=settings)


def test_fields_in_declaration_order() -> None:
    assert _encode(PAIR, {'a': 7, 'b': True}).hex() == '0701'


def test_positional_mode_ignores_key_names() -> None:
    assert _encode(PAIR, {'b': 7, 'a': True}).hex() == '0701'
    assert _encode(PAIR, {'whatever': 7, 1: True}).hex() == '0701'


def test_positional_mode_stops_at_shortest() -> None:
    # extra entries are dropped and missing fields are simply not written
    assert _encode(PAIR, {'a': 7, 'b': True, 'c': 'ignored'}).hex() == '0701'
    assert _encode(PAIR, {'a': 7}).hex() == '07'
    assert _encode(PAIR, {}) == b''


def test_nested_composites() -> None:
    assert _encode(NESTED, {'inner': {'a': 1, 'b': False}, 'label': 'ok'}).hex() == '0100' '086f6b'


def test_single_field_wrapper() -> None:
    assert _encode(WRAPPER, {'0': '0xdeadbeef'}).hex() == 'deadbeef'


def test_unit_struct() -> None:
    assert _encode(UNIT, {}) == b''
    assert _encode(UNIT, {'extra': 1}) == b''


@pytest.mark.parametrize('value', [[7, True], (7, True), 'a', 7, None, True])
def test_struct_requires_a_map(value) -> None:
    with pytest.raises(TypeMismatchError, match='expected a map for a struct'):
        _encode(PAIR, value)


def test_field_shape_mismatch_keeps_previous_fields() -> None:
    serializer = Serializer.build_bytes_serializer()
    with pytest.raises(TypeMismatchError):
        encode_type_id(REGISTRY, PAIR, {'a': 7, 'b': 'yes'}, serializer, settings=POSITIONAL)
    assert bytes(serializer.finalize()).hex() == '07'


def test_unsupported_field_type() -> None:
    serializer = Serializer.build_bytes_serializer()
    with pytest.raises(UnsupportedTypeError, match='variant'):
        encode_type_id(REGISTRY, WITH_ENUM, {'first': 1, 'second': {'Some': 1}}, serializer, settings=POSITIONAL)
    assert bytes(serializer.finalize()).hex() == '01'


def test_unsupported_type_writes_nothing() -> None:
    serializer = Serializer.build_bytes_serializer()
    with pytest.raises(UnsupportedTypeError):
        encode_type_id(REGISTRY, ENUM, {'None': []}, serializer, settings=POSITIONAL)
    assert serializer.cur_pos() == 0


def test_unknown_field_type() -> None:
    with pytest.raises(UnknownTypeError):
        _encode(WITH_DANGLING, {'a': 1, 'b': 2})


def test_strict_mode_matches_by_name() -> None:
    assert _encode(PAIR, {'b': True, 'a': 7}, STRICT).hex() == '0701'
    assert _encode(PAIR, {'a': 7, 'b': True}, STRICT).hex() == '0701'


@pytest.mark.parametrize(
    'value',
    [
        {'a': 7},
        {'a': 7, 'b': True, 'c': 1},
        {'a': 7, 'c': True},
        {},
    ]
)
def test_strict_mode_rejects_mismatched_keys(value) -> None:
    with pytest.raises(TypeMismatchError):
        _encode(PAIR, value, STRICT)


def test_strict_mode_unnamed_fields_are_positional() -> None:
    assert _encode(TUPLE_STRUCT, {'x': 1, 'y': 'a'}, STRICT).hex() == '0104' '61'
    with pytest.raises(TypeMismatchError):
        _encode(TUPLE_STRUCT, {'x': 1}, STRICT)


def test_strict_mode_applies_to_nested_structs() -> None:
    value = {'label': 'ok', 'inner': {'b': False, 'a': 1}}
    assert _encode(NESTED, value, STRICT).hex() == '0100' '086f6b'
