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

from __future__ import annotations

import json
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Union

import yaml
from pydantic import ValidationError
from structlog import get_logger

from transcode.exception import RegistryLoadError, UnknownTypeError
from transcode.schema.type_def import TypeDef

logger = get_logger()

# metadata files of some versions nest everything under a single key such as "V3"
_VERSION_KEY_PREFIX = 'V'


class Registry:
    """Read-only store mapping type ids to type definitions.

    A registry never changes after it is built, so the same instance can be shared by any number of encode calls.
    Lookups are plain dict accesses, there is no caching layer.
    """

    __slots__ = ('_types',)

    def __init__(self, types: Mapping[int, TypeDef]) -> None:
        self._types: Mapping[int, TypeDef] = MappingProxyType(dict(types))

    def resolve(self, type_id: int) -> TypeDef:
        """Get the type definition for the given id, raises UnknownTypeError if there is none."""
        try:
            return self._types[type_id]
        except KeyError:
            raise UnknownTypeError(f'type id {type_id} not found in registry') from None

    def __len__(self) -> int:
        return len(self._types)

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._types

    def __iter__(self) -> Iterator[int]:
        return iter(self._types)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Registry:
        """Build a registry from a portable registry document or a whole metadata document."""
        from transcode.schema.models import RegistryDocument
        data = _unwrap_versioned(data)
        try:
            document = RegistryDocument.model_validate(data)
        except ValidationError as e:
            raise RegistryLoadError(f'invalid registry document: {e}') from e
        registry = cls({entry.id: entry.type.def_.to_type_def() for entry in document.types})
        logger.debug('registry loaded', types=len(registry))
        return registry

    @classmethod
    def from_json(cls, filepath: Union[Path, str]) -> Registry:
        with open(filepath, 'r') as file:
            try:
                data = json.load(file)
            except json.JSONDecodeError as e:
                raise RegistryLoadError(f"'{filepath}' is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise RegistryLoadError(f"'{filepath}' cannot be parsed as a dictionary")
        return cls.from_dict(data)

    @classmethod
    def from_yaml(cls, filepath: Union[Path, str]) -> Registry:
        from transcode.utils.yaml import dict_from_yaml
        try:
            data = dict_from_yaml(filepath=filepath)
        except (ValueError, yaml.YAMLError) as e:
            raise RegistryLoadError(str(e)) from e
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, filepath: Union[Path, str]) -> Registry:
        """Load a registry document choosing the parser from the file extension, `.json` or YAML otherwise."""
        if Path(filepath).suffix.lower() == '.json':
            return cls.from_json(filepath)
        return cls.from_yaml(filepath)


def _unwrap_versioned(data: Mapping[str, Any]) -> Mapping[str, Any]:
    if 'types' in data:
        return data
    versioned = [
        key for key, value in data.items()
        if isinstance(key, str) and key.startswith(_VERSION_KEY_PREFIX) and isinstance(value, dict)
    ]
    if len(versioned) == 1:
        return data[versioned[0]]
    return data
