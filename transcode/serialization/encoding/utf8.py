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
This module implements utf-8 string encoding with a length prefix.

It works exactly like bytes-encoding but it takes a `str`, the length prefix counts bytes, not characters.

>>> se = Serializer.build_bytes_serializer()
>>> encode_utf8(se, 'foobar')  # writes 18666f6f626172
>>> encode_utf8(se, 'π')  # writes 08cf80
>>> encode_utf8(se, '')  # writes 00
>>> bytes(se.finalize()).hex()
'18666f6f62617208cf8000'
"""

from transcode.serialization import Serializer
from transcode.serialization.consts import DEFAULT_BYTES_MAX_LENGTH

from .bytes import encode_bytes


def encode_utf8(serializer: Serializer, value: str, *, max_bytes: int | None = DEFAULT_BYTES_MAX_LENGTH) -> None:
    """ Encodes a string using UTF-8 and adding a length prefix.

    This modules's docstring has more details and examples.
    """
    assert isinstance(value, str)
    data = value.encode('utf-8')
    encode_bytes(serializer, data, max_bytes=max_bytes)
