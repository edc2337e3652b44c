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

import os
from typing import NamedTuple, Optional

from structlog import get_logger

from transcode.conf.settings import TranscodeSettings

logger = get_logger()

CONFIG_YAML_ENV_VAR = 'TRANSCODE_CONFIG_YAML'


class _SettingsMetadata(NamedTuple):
    source: str
    settings: TranscodeSettings


_settings_singleton: Optional[_SettingsMetadata] = None


def get_global_settings() -> TranscodeSettings:
    """
    Returns the global settings.

    The settings are read from the yaml filepath in the 'TRANSCODE_CONFIG_YAML' env var, if it is not set the default
    settings file shipped with the package is used. The file is only read once.
    """
    from transcode.conf import DEFAULT_SETTINGS_FILEPATH
    settings_yaml_filepath = os.environ.get(CONFIG_YAML_ENV_VAR, DEFAULT_SETTINGS_FILEPATH)
    return _load_settings_singleton(settings_yaml_filepath)


def get_settings_source() -> str:
    """ Returns the path of the settings YAML file that was loaded.

    XXX: Will raise an assertion error if get_global_settings() wasn't used before.
    """
    assert _settings_singleton is not None, 'get_global_settings() not called before'
    return _settings_singleton.source


def _load_settings_singleton(source: str) -> TranscodeSettings:
    global _settings_singleton

    if _settings_singleton is not None:
        if _settings_singleton.source != source:
            raise Exception('loading config twice with a different file')
        return _settings_singleton.settings

    logger.debug('loading settings', source=source)
    _settings_singleton = _SettingsMetadata(
        source=source,
        settings=TranscodeSettings.from_yaml(filepath=source),
    )
    return _settings_singleton.settings
