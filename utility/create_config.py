# Copyright The IETF Trust 2026, All Rights Reserved
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

__copyright__ = 'Copyright The IETF Trust 2026, All Rights Reserved'
__license__ = 'Apache License, Version 2.0'

import os
import typing as t
from configparser import ConfigParser, ExtendedInterpolation

from utility.staticVariables import CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH


def create_config(config_path: t.Optional[str] = None) -> ConfigParser:
    """Load the INI configuration file.

    A missing file yields an empty config, callers are expected to use fallbacks.

    Arguments:
        :param config_path  (Optional[str]) path to the config file, defaults to the path
            stored in the ES_INDEX_BACKUP_CONFIG_PATH environment variable
        :return             (ConfigParser) parsed configuration
    """
    config_path = config_path or os.environ.get(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH)
    config = ConfigParser(interpolation=ExtendedInterpolation())
    config.read(config_path)
    return config
