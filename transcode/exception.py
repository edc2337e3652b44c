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


class TranscodeError(Exception):
    """Base class for exceptions raised while transcoding a value."""
    pass


class UnknownTypeError(TranscodeError):
    """A type id could not be found in the registry."""
    pass


class UnsupportedTypeError(TranscodeError):
    """The schema uses a type definition or primitive kind that cannot be encoded.
    """
    pass


class TypeMismatchError(TranscodeError):
    """The shape of the value does not match what the type definition requires."""
    pass


class NumericConversionError(TranscodeError):
    """An integer value does not fit in the width of the target type."""
    pass


class NumericParseError(TranscodeError):
    """A string could not be parsed as an unsigned decimal integer."""
    pass


class HexDecodeError(TranscodeError):
    """A byte-array string does not contain valid hexadecimal content."""
    pass


class RegistryLoadError(TranscodeError):
    """A registry document is malformed.
    """
    pass


class StringTooLongError(TranscodeError):
    """A string value is longer than the configured MAX_STRING_BYTES."""
    pass
