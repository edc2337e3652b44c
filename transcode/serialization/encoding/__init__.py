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
This module was made to hold the primitive SCALE encodings.

Each submodule `x` deals with a single wire format and looks like this:

    def encode_x(serializer: Serializer, value: ValueType, ...config params...) -> None:
        ...

The "config params" are optional and specific to each encoder. Submodules should not have to take into consideration
how schema types are mapped to encoders, that is done by `transcode.encoder`.

Only the encoding direction exists, this package never reads back what it wrote.
"""
