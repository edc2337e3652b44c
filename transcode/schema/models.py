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
Pydantic models for portable registry documents, the `types` section found in contract metadata files.

Only what is needed to build `TypeDef` instances is interpreted, the remaining keys of a type entry (path, params,
docs) are accepted and kept for reference.
"""

from typing import Any

from pydantic import ConfigDict, Field as PydanticField, NonNegativeInt, model_validator

from transcode.schema.type_def import (
    Field,
    Primitive,
    TypeDef,
    TypeDefArray,
    TypeDefComposite,
    TypeDefOther,
    TypeDefPrimitive,
)
from transcode.utils.pydantic import BaseModel


class FieldModel(BaseModel):
    name: str | None = None
    type: NonNegativeInt
    type_name: str | None = PydanticField(default=None, alias='typeName')
    docs: list[str] = []

    def to_field(self) -> Field:
        return Field(type_id=self.type, name=self.name)


class ArrayDefModel(BaseModel):
    # informational only, the element count comes from the value being encoded
    len: NonNegativeInt | None = None
    type: NonNegativeInt


class CompositeDefModel(BaseModel):
    fields: list[FieldModel] = []


class TypeDefModel(BaseModel):
    """The `def` object of a type entry, it must have exactly one key naming the variant.

    Variants without an encoding rule are kept as extra keys and become `TypeDefOther`.
    """
    model_config = ConfigDict(frozen=True, extra='allow')

    primitive: Primitive | None = None
    array: ArrayDefModel | None = None
    composite: CompositeDefModel | None = None

    @model_validator(mode='after')
    def _validate_single_variant(self) -> 'TypeDefModel':
        known = [name for name in ('primitive', 'array', 'composite') if getattr(self, name) is not None]
        other = list(self.model_extra or {})
        if len(known) + len(other) != 1:
            raise ValueError(f'expected exactly one type definition variant, got {known + other}')
        return self

    def to_type_def(self) -> TypeDef:
        if self.primitive is not None:
            return TypeDefPrimitive(self.primitive)
        if self.array is not None:
            return TypeDefArray(type_param=self.array.type)
        if self.composite is not None:
            return TypeDefComposite(fields=tuple(field.to_field() for field in self.composite.fields))
        assert self.model_extra is not None
        kind, = self.model_extra
        return TypeDefOther(kind=kind)


class TypeModel(BaseModel):
    path: list[str] = []
    params: list[Any] = []
    def_: TypeDefModel = PydanticField(alias='def')
    docs: list[str] = []


class PortableTypeModel(BaseModel):
    id: NonNegativeInt
    type: TypeModel


class RegistryDocument(BaseModel):
    """A portable registry, keys other than `types` are ignored so a whole metadata file can be given."""
    model_config = ConfigDict(frozen=True, extra='ignore')

    types: list[PortableTypeModel]

    @model_validator(mode='after')
    def _validate_unique_ids(self) -> 'RegistryDocument':
        seen: set[int] = set()
        for entry in self.types:
            if entry.id in seen:
                raise ValueError(f'duplicate type id: {entry.id}')
            seen.add(entry.id)
        return self
