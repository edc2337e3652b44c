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

# limit on a single `write_bytes` call, it can be overridden per call
DEFAULT_BYTES_MAX_LENGTH = 2**16  # 64KiB

# SCALE compact integers use at most 1 prefix byte followed by 67 bytes of payload
COMPACT_MAX_PAYLOAD_BYTES = 67
