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

from typing import TypeVar

from typing_extensions import override

from transcode.serialization.exceptions import MaxBytesExceededError
from transcode.serialization.serializer import Serializer

from .generic_adapter import GenericSerializerAdapter

S = TypeVar('S', bound=Serializer)


class MaxBytesSerializer(GenericSerializerAdapter[S]):
    """ Adapter that fails with MaxBytesExceededError once more than `max_bytes` would have been written.

    >>> se = Serializer.build_bytes_serializer()
    >>> limited = se.with_max_bytes(3)
    >>> limited.write_bytes(b'abc')
    >>> try:
    ...     limited.write_byte(0x64)
    ... except MaxBytesExceededError:
    ...     print('exceeded')
    exceeded
    >>> bytes(se.finalize())
    b'abc'
    """

    def __init__(self, serializer: S, max_bytes: int) -> None:
        super().__init__(serializer)
        self._max_bytes = max_bytes
        self._bytes_left = max_bytes

    def _check_update_exceeds(self, write_size: int) -> None:
        self._bytes_left -= write_size
        if self._bytes_left < 0:
            raise MaxBytesExceededError(f'output is limited to {self._max_bytes} bytes')

    @override
    def write_byte(self, data: int) -> None:
        self._check_update_exceeds(1)
        super().write_byte(data)

    @override
    def _write_bytes(self, data: bytes | memoryview) -> None:
        data_view = memoryview(data)
        self._check_update_exceeds(len(data_view))
        super()._write_bytes(data_view)
