import os

from transcode.conf import UNITTESTS_SETTINGS_FILEPATH

os.environ['TRANSCODE_CONFIG_YAML'] = os.environ.get('TRANSCODE_TEST_CONFIG_YAML', UNITTESTS_SETTINGS_FILEPATH)
