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
This module implements the SCALE "compact" encoding for unsigned integers.

The two least significant bits of the first byte select the mode:

- `0b00`: single-byte mode, values in 0..=63 (upper 6 bits)
- `0b01`: two-byte mode, values in 64..=2**14-1 (upper 14 bits, little-endian)
- `0b10`: four-byte mode, values in 2**14..=2**30-1 (upper 30 bits, little-endian)
- `0b11`: big-integer mode, the upper 6 bits hold the number of payload bytes minus 4, followed by the payload in
  little-endian, using the least amount of bytes possible (at least 4, at most 67)

References:
- https://docs.substrate.io/reference/scale-codec/

>>> se = Serializer.build_bytes_serializer()
>>> encode_compact(se, 0)  # writes 00
>>> encode_compact(se, 63)  # writes fc
>>> encode_compact(se, 64)  # writes 0101
>>> encode_compact(se, 16383)  # writes fdff
>>> encode_compact(se, 16384)  # writes 02000100
>>> encode_compact(se, 2**30 - 1)  # writes feffffff
>>> encode_compact(se, 2**30)  # writes 0300000040
>>> bytes(se.finalize()).hex()
'00fc0101fdff02000100feffffff0300000040'

>>> se = Serializer.build_bytes_serializer()
>>> encode_compact(se, 2**64 - 1)
>>> bytes(se.finalize()).hex()
'13ffffffffffffffff'

>>> try:
...     encode_compact(se, -1)
... except ValueError as e:
...     print(*e.args)
cannot encode value <0 as compact
"""

from transcode.serialization import Serializer
from transcode.serialization.consts import COMPACT_MAX_PAYLOAD_BYTES

SINGLE_BYTE_MAX = 2**6 - 1
TWO_BYTE_MAX = 2**14 - 1
FOUR_BYTE_MAX = 2**30 - 1
BIG_INT_MAX = 2**(8 * COMPACT_MAX_PAYLOAD_BYTES) - 1


def encode_compact(serializer: Serializer, value: int) -> None:
    """ Encodes an unsigned integer using the SCALE compact format.

    This module's docstring has more details and examples.
    """
    if value < 0:
        raise ValueError('cannot encode value <0 as compact')
    if value <= SINGLE_BYTE_MAX:
        serializer.write_byte(value << 2)
    elif value <= TWO_BYTE_MAX:
        serializer.write_bytes(((value << 2) | 0b01).to_bytes(2, byteorder='little'))
    elif value <= FOUR_BYTE_MAX:
        serializer.write_bytes(((value << 2) | 0b10).to_bytes(4, byteorder='little'))
    elif value <= BIG_INT_MAX:
        length = max(4, (value.bit_length() + 7) // 8)
        serializer.write_byte(((length - 4) << 2) | 0b11)
        serializer.write_bytes(value.to_bytes(length, byteorder='little'))
    else:
        raise ValueError('too big to encode as compact')
