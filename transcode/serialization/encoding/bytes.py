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
This modules implements encoding of byte sequence by prefixing it with the length of the sequence encoded as a SCALE
compact integer.

>>> se = Serializer.build_bytes_serializer()
>>> encode_bytes(se, b'test')  # will prepend b'\x10' before writing b'test'
>>> bytes(se.finalize()).hex()
'1074657374'

>>> se = Serializer.build_bytes_serializer()
>>> raw_data = b'test' * 32
>>> len(raw_data)
128
>>> encode_bytes(se, raw_data)  # prepends b'\x01\x02' before raw_data
>>> encoded_data = bytes(se.finalize())
>>> len(encoded_data)
130
>>> encoded_data[:10].hex()
'01027465737474657374'
"""

from transcode.serialization import Serializer
from transcode.serialization.consts import DEFAULT_BYTES_MAX_LENGTH
from transcode.serialization.exceptions import TooLongError

from .compact import encode_compact


def encode_bytes(serializer: Serializer, data: bytes, *, max_bytes: int | None = DEFAULT_BYTES_MAX_LENGTH) -> None:
    """ Encodes a byte-sequence adding a length prefix.

    The length of `data` is checked against `max_bytes` before anything is written.

    This modules's docstring has more details and examples.
    """
    assert isinstance(data, bytes)
    if max_bytes is not None and len(data) > max_bytes:
        raise TooLongError(f'{len(data)} bytes exceeds the maximum of {max_bytes}')
    encode_compact(serializer, len(data))
    serializer.write_bytes(data, max_bytes=None)
