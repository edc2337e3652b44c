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

"""
Type definitions are the nodes of a schema, each one describes the shape of a single value type.

The set of variants is closed: `TypeDef` is the union of the four classes below and consumers are expected to `match`
over it. Nested types are never embedded, they are referenced by type id and resolved through a `Registry`.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias


class Primitive(str, Enum):
    """Primitive kinds, the values are the names used by registry documents."""
    BOOL = 'bool'
    CHAR = 'char'
    STR = 'str'
    U8 = 'u8'
    U16 = 'u16'
    U32 = 'u32'
    U64 = 'u64'
    U128 = 'u128'
    U256 = 'u256'
    I8 = 'i8'
    I16 = 'i16'
    I32 = 'i32'
    I64 = 'i64'
    I128 = 'i128'
    I256 = 'i256'


@dataclass(slots=True, frozen=True)
class TypeDefPrimitive:
    kind: Primitive


@dataclass(slots=True, frozen=True)
class TypeDefArray:
    """Homogeneous sequence, how many elements there are is decided by the value being encoded."""
    type_param: int


@dataclass(slots=True, frozen=True)
class Field:
    type_id: int
    name: str | None = None


@dataclass(slots=True, frozen=True)
class TypeDefComposite:
    """Struct-like type, `fields` are kept in declaration order."""
    fields: tuple[Field, ...]


@dataclass(slots=True, frozen=True)
class TypeDefOther:
    """Any registry variant that has no encoding rule (variant, sequence, tuple, compact, ...).

    `kind` is the name of the variant as it appears in registry documents.
    """
    kind: str


TypeDef: TypeAlias = TypeDefPrimitive | TypeDefArray | TypeDefComposite | TypeDefOther
