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


class SerializationError(Exception):
    """Base class for errors raised while writing to a serializer."""
    pass


class TooLongError(SerializationError):
    """A single write exceeded the allowed length."""
    pass


class MaxBytesExceededError(SerializationError):
    """ This error is raised when an adapted serializer reached its maximum bytes written.

    After this exception is raised the adapted serializer cannot be used anymore. Handlers of this exception are
    expected to bubble up the exception (or an equivalent exception). The bytes already written to the inner
    serializer are left in place, so the serialization should be considered failed as a whole.
    """
    pass
