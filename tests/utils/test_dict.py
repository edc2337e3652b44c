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
from transcode.utils.dict import deep_merge


def test_deep_merge_nested():
    base = dict(a=1, b=dict(c=2, d=dict(e=3)))
    extension = dict(b=dict(d=dict(f=4)), g=5)

    deep_merge(base, extension)

    assert base == dict(a=1, b=dict(c=2, d=dict(e=3, f=4)), g=5)


def test_deep_merge_overrides_non_dict_values():
    base = dict(a=[1, 2], b=dict(c=1))
    extension = dict(a=[3], b=2)

    deep_merge(base, extension)

    assert base == dict(a=[3], b=2)
