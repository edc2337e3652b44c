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
The dynamic value tree is made of plain Python objects, as produced by `json.load` or `yaml.safe_load`:

- `bool`
- `str`
- `int` (arbitrary precision)
- `float` (never accepted by any encoding rule)
- sequences: `list` or `tuple` of values
- mappings: any `Mapping` of keys to values, iteration order is the order that matters

`bool` is a subclass of `int` in Python, so the predicates below must be used instead of bare isinstance checks.
"""

from collections.abc import Mapping
from typing import Any, TypeAlias, TypeGuard

Value: TypeAlias = bool | str | int | float | list['Value'] | tuple['Value', ...] | Mapping[Any, 'Value']


def is_integer(value: Any) -> TypeGuard[int]:
    """
    >>> is_integer(1), is_integer(True), is_integer(1.0), is_integer('1')
    (True, False, False, False)
    """
    return isinstance(value, int) and not isinstance(value, bool)


def is_sequence(value: Any) -> TypeGuard[list[Value] | tuple[Value, ...]]:
    return isinstance(value, (list, tuple))


def is_mapping(value: Any) -> TypeGuard[Mapping[Any, Value]]:
    return isinstance(value, Mapping)


def describe(value: Any) -> str:
    """Short description of a value for error messages, containers are not expanded.

    >>> describe(True), describe([1, 2]), describe({'a': 1}), describe('foo')
    ('bool (True)', 'sequence of 2', 'map of 1', "str ('foo')")
    """
    if is_sequence(value):
        return f'sequence of {len(value)}'
    if is_mapping(value):
        return f'map of {len(value)}'
    text = repr(value)
    if len(text) > 40:
        text = text[:37] + '...'
    return f'{type(value).__name__} ({text})'
