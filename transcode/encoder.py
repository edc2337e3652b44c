#  Copyright 2025 Hathor Labs
#
#  Licensed under the Apache License, Version 2.0 (the "License");
#  you may not use this file except in compliance with the License.
#  You may obtain a copy of the License at
#
#  http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.

r"""
Type-directed encoding of dynamic values into SCALE bytes.

Every rule receives a type definition and a value, checks that the value has an acceptable shape and appends the
encoded bytes to the serializer. Nested types are resolved through the registry as they are reached.

>>> from transcode.schema import Field, Primitive, Registry, TypeDefArray, TypeDefComposite, TypeDefPrimitive
>>> registry = Registry({
...     0: TypeDefPrimitive(Primitive.U8),
...     1: TypeDefPrimitive(Primitive.BOOL),
...     2: TypeDefComposite(fields=(Field(0, 'a'), Field(1, 'b'))),
...     3: TypeDefArray(type_param=0),
...     4: TypeDefArray(type_param=2),
... })
>>> settings = TranscodeSettings()
>>> encode_to_bytes(registry, 2, {'a': 7, 'b': True}, settings=settings).hex()
'0701'
>>> encode_to_bytes(registry, 3, '0x0102ff', settings=settings).hex()
'0102ff'
>>> encode_to_bytes(registry, 4, [{'a': 1, 'b': False}, {'a': 2, 'b': True}], settings=settings).hex()
'01000201'

Failures leave behind whatever was written before the failing node:

>>> se = Serializer.build_bytes_serializer()
>>> try:
...     encode_type_id(registry, 3, [1, 2, 256], se, settings=settings)
... except NumericConversionError as e:
...     print(*e.args)
256 is out of range for u8
>>> bytes(se.finalize()).hex()
'0102'
"""

import re
from collections.abc import Iterable, Mapping
from typing import Any, Optional

from structlog import get_logger
from typing_extensions import assert_never

from transcode.conf.settings import TranscodeSettings
from transcode.exception import (
    HexDecodeError,
    NumericConversionError,
    NumericParseError,
    StringTooLongError,
    TranscodeError,
    TypeMismatchError,
    UnsupportedTypeError,
)
from transcode.schema.registry import Registry
from transcode.schema.type_def import (
    Field,
    Primitive,
    TypeDef,
    TypeDefArray,
    TypeDefComposite,
    TypeDefOther,
    TypeDefPrimitive,
)
from transcode.serialization import SerializationError, Serializer, TooLongError
from transcode.serialization.encoding.bool import encode_bool
from transcode.serialization.encoding.int import encode_int
from transcode.serialization.encoding.utf8 import encode_utf8
from transcode.value import Value, describe, is_integer, is_mapping, is_sequence

logger = get_logger()

UNSIGNED_BYTE_SIZES: dict[Primitive, int] = {
    Primitive.U8: 1,
    Primitive.U16: 2,
    Primitive.U32: 4,
    Primitive.U64: 8,
    Primitive.U128: 16,
}

# thousands separators accepted in the string form of u64/u128
NUMERIC_SEPARATORS = ('_', ',')
HEX_PREFIX = '0x'

_U8_TYPE_DEF = TypeDefPrimitive(Primitive.U8)
_DECIMAL_RE = re.compile(r'\+?[0-9]+')
_HEX_RE = re.compile(r'(?:[0-9a-fA-F]{2})*')


def unsigned_upper_bound(kind: Primitive) -> int:
    """
    >>> unsigned_upper_bound(Primitive.U8), unsigned_upper_bound(Primitive.U32)
    (255, 4294967295)
    """
    return 2**(UNSIGNED_BYTE_SIZES[kind] * 8) - 1


def check_unsigned_range(number: int, kind: Primitive) -> None:
    """Raise NumericConversionError if `number` does not fit in the unsigned primitive `kind`."""
    if number < 0 or number > unsigned_upper_bound(kind):
        raise NumericConversionError(f'{number} is out of range for {kind.value}')


def parse_unsigned(text: str, kind: Primitive) -> int:
    """ Parse the string form of a large unsigned integer.

    Separators (`_` and `,`) are removed anywhere in the string, what remains must be a plain decimal literal that fits
    in `kind`, otherwise NumericParseError is raised.

    >>> parse_unsigned('1_000_000', Primitive.U64), parse_unsigned('1,000,000', Primitive.U64)
    (1000000, 1000000)
    >>> parse_unsigned('340_282_366_920_938_463_463_374_607_431_768_211_455', Primitive.U128) == 2**128 - 1
    True
    >>> try:
    ...     parse_unsigned('18446744073709551616', Primitive.U64)
    ... except NumericParseError as e:
    ...     print(*e.args)
    '18446744073709551616' is too large for u64
    """
    sanitized = text
    for separator in NUMERIC_SEPARATORS:
        sanitized = sanitized.replace(separator, '')
    if not _DECIMAL_RE.fullmatch(sanitized):
        raise NumericParseError(f'{text!r} is not a valid unsigned integer')
    digits = sanitized.lstrip('+').lstrip('0') or '0'
    # u128 has at most 39 digits, checking the length first avoids building huge ints
    if len(digits) > 39 or int(digits) > unsigned_upper_bound(kind):
        raise NumericParseError(f'{text!r} is too large for {kind.value}')
    return int(digits)


def decode_hex(text: str) -> bytes:
    r""" Decode a hex string, any number of leading `0x` is removed first.

    >>> decode_hex('0x0102ff')
    b'\x01\x02\xff'
    >>> decode_hex('DEADbeef').hex()
    'deadbeef'
    >>> decode_hex('')
    b''
    >>> try:
    ...     decode_hex('0x123')
    ... except HexDecodeError as e:
    ...     print(*e.args)
    invalid hex string '0x123'
    """
    digits = text
    while digits.startswith(HEX_PREFIX):
        digits = digits[len(HEX_PREFIX):]
    if not _HEX_RE.fullmatch(digits):
        raise HexDecodeError(f'invalid hex string {text!r}')
    return bytes.fromhex(digits)


def encode_value(
    registry: Registry,
    type_def: TypeDef,
    value: Value,
    serializer: Serializer,
    *,
    settings: Optional[TranscodeSettings] = None,
) -> None:
    """ Encode `value` following `type_def`, appending the result to `serializer`.

    Nothing is rolled back on failure, bytes written for earlier siblings stay in the serializer. Use
    `encode_to_bytes` or an `Encoder` with `ATOMIC_WRITES` when that matters.

    When `settings` is not given the global settings are used.
    """
    if settings is None:
        from transcode.conf import get_global_settings
        settings = get_global_settings()
    _encode(registry, type_def, value, serializer, settings)


def encode_type_id(
    registry: Registry,
    type_id: int,
    value: Value,
    serializer: Serializer,
    *,
    settings: Optional[TranscodeSettings] = None,
) -> None:
    """Resolve `type_id` and encode `value` with it, see `encode_value`."""
    encode_value(registry, registry.resolve(type_id), value, serializer, settings=settings)


def encode_to_bytes(
    registry: Registry,
    type_id: int,
    value: Value,
    *,
    settings: Optional[TranscodeSettings] = None,
) -> bytes:
    """Encode into a scratch serializer and return the resulting bytes, nothing escapes when it fails."""
    serializer = Serializer.build_bytes_serializer()
    encode_type_id(registry, type_id, value, serializer, settings=settings)
    return bytes(serializer.finalize())


class Encoder:
    """Binds a registry and settings, and logs failures before letting them propagate."""

    def __init__(self, registry: Registry, *, settings: Optional[TranscodeSettings] = None) -> None:
        if settings is None:
            from transcode.conf import get_global_settings
            settings = get_global_settings()
        self.log = logger.new()
        self.registry = registry
        self.settings = settings

    def encode(self, type_id: int, value: Value, serializer: Serializer) -> None:
        """ Encode `value` as the type `type_id` into `serializer`.

        With `ATOMIC_WRITES` enabled the value is first encoded into a scratch serializer, so `serializer` is either
        fully written or left untouched.
        """
        if not self.settings.ATOMIC_WRITES:
            self._encode_logged(type_id, value, serializer)
            return
        scratch = Serializer.build_bytes_serializer()
        self._encode_logged(type_id, value, scratch)
        serializer.write_bytes(scratch.finalize(), max_bytes=None)

    def to_bytes(self, type_id: int, value: Value) -> bytes:
        serializer = Serializer.build_bytes_serializer()
        self._encode_logged(type_id, value, serializer)
        return bytes(serializer.finalize())

    def _encode_logged(self, type_id: int, value: Value, serializer: Serializer) -> None:
        try:
            encode_type_id(self.registry, type_id, value, serializer, settings=self.settings)
        except (TranscodeError, SerializationError) as e:
            self.log.debug('encoding failed', type_id=type_id, error_type=type(e).__name__, error=str(e))
            raise
        self.log.debug('value encoded', type_id=type_id, size=serializer.cur_pos())


def _encode(
    registry: Registry,
    type_def: TypeDef,
    value: Value,
    serializer: Serializer,
    settings: TranscodeSettings,
) -> None:
    match type_def:
        case TypeDefPrimitive(kind=kind):
            encode_primitive(kind, value, serializer, max_string_bytes=settings.MAX_STRING_BYTES)
        case TypeDefArray():
            _encode_array(registry, type_def, value, serializer, settings)
        case TypeDefComposite():
            _encode_composite(registry, type_def, value, serializer, settings)
        case TypeDefOther(kind=kind):
            raise UnsupportedTypeError(f'type definition not supported: {kind}')
        case _:
            assert_never(type_def)


def encode_primitive(
    kind: Primitive,
    value: Value,
    serializer: Serializer,
    *,
    max_string_bytes: int | None = None,
) -> None:
    """ Encode a primitive leaf.

    `u64` and `u128` also accept their value as a decimal string (see `parse_unsigned`), `char`, `u256` and all the
    signed kinds are not supported.
    """
    match kind:
        case Primitive.BOOL:
            if not isinstance(value, bool):
                raise TypeMismatchError(f'expected a bool value, found {describe(value)}')
            encode_bool(serializer, value)
        case Primitive.STR:
            if not isinstance(value, str):
                raise TypeMismatchError(f'expected a str value, found {describe(value)}')
            try:
                encode_utf8(serializer, value, max_bytes=max_string_bytes)
            except UnicodeEncodeError as e:
                raise TypeMismatchError(f'string cannot be encoded as UTF-8: {e.reason}') from e
            except TooLongError as e:
                raise StringTooLongError(str(e)) from e
        case Primitive.U8 | Primitive.U16 | Primitive.U32:
            if not is_integer(value):
                raise TypeMismatchError(f'expected a {kind.value} value, found {describe(value)}')
            _encode_unsigned(serializer, value, kind)
        case Primitive.U64 | Primitive.U128:
            if is_integer(value):
                number = value
            elif isinstance(value, str):
                number = parse_unsigned(value, kind)
            else:
                raise TypeMismatchError(f'expected a number or a string for {kind.value}, found {describe(value)}')
            _encode_unsigned(serializer, number, kind)
        case Primitive.CHAR:
            raise UnsupportedTypeError('no binary encoding defined for char')
        case _:
            raise UnsupportedTypeError(f'primitive type not supported: {kind.value}')


def _encode_unsigned(serializer: Serializer, number: int, kind: Primitive) -> None:
    check_unsigned_range(number, kind)
    encode_int(serializer, number, length=UNSIGNED_BYTE_SIZES[kind], signed=False)


def _encode_array(
    registry: Registry,
    array: TypeDefArray,
    value: Value,
    serializer: Serializer,
    settings: TranscodeSettings,
) -> None:
    element_def = registry.resolve(array.type_param)
    if isinstance(value, str):
        if element_def != _U8_TYPE_DEF:
            raise TypeMismatchError('only byte (u8) arrays supported as strings')
        for byte in decode_hex(value):
            encode_int(serializer, byte, length=1, signed=False)
    elif is_sequence(value):
        # no length prefix, the element count is implied by the value
        for element in value:
            _encode(registry, element_def, element, serializer, settings)
    else:
        raise TypeMismatchError(f'{describe(value)} cannot be encoded as an array')


def _encode_composite(
    registry: Registry,
    composite: TypeDefComposite,
    value: Value,
    serializer: Serializer,
    settings: TranscodeSettings,
) -> None:
    if not is_mapping(value):
        raise TypeMismatchError(f'expected a map for a struct, found {describe(value)}')
    field_values: Iterable[Value]
    if settings.STRICT_FIELD_NAMES:
        field_values = _match_field_names(composite.fields, value)
    else:
        # positional: keys are ignored and zip stops at the shortest side
        field_values = value.values()
    for field, field_value in zip(composite.fields, field_values):
        encode_field(registry, field, field_value, serializer, settings)


def _match_field_names(fields: tuple[Field, ...], mapping: Mapping[Any, Value]) -> list[Value]:
    if len(mapping) != len(fields):
        raise TypeMismatchError(f'expected {len(fields)} fields for a struct, found {len(mapping)}')
    if any(field.name is None for field in fields):
        return list(mapping.values())
    names = [field.name for field in fields]
    missing = [name for name in names if name not in mapping]
    if missing:
        unexpected = [repr(key) for key in mapping if key not in names]
        raise TypeMismatchError(
            f'struct fields do not match: missing {", ".join(missing)}; unexpected {", ".join(unexpected)}'
        )
    return [mapping[name] for name in names]


def encode_field(
    registry: Registry,
    field: Field,
    value: Value,
    serializer: Serializer,
    settings: TranscodeSettings,
) -> None:
    type_def = registry.resolve(field.type_id)
    _encode(registry, type_def, value, serializer, settings)
