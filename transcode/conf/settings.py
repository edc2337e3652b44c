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

from pathlib import Path
from typing import Optional

from pydantic import PositiveInt

from transcode.utils.pydantic import BaseModel


class TranscodeSettings(BaseModel):
    # Match composite fields to map keys by name instead of by position, missing or extra keys become errors
    STRICT_FIELD_NAMES: bool = False

    # Encode into a scratch buffer and only copy to the caller's serializer when the whole value succeeded
    ATOMIC_WRITES: bool = False

    # Optional upper bound on the UTF-8 body of a single encoded string, no bound when unset
    MAX_STRING_BYTES: Optional[PositiveInt] = None

    @classmethod
    def from_yaml(cls, *, filepath: str) -> 'TranscodeSettings':
        """Takes a filepath to a yaml file and returns a validated TranscodeSettings instance."""
        from transcode.utils.yaml import model_from_extended_yaml
        return model_from_extended_yaml(cls, filepath=filepath, custom_root=Path(__file__).parent)
