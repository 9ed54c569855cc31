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

from enum import Enum

# JSON headers
json_header_str = 'application/json'
json_accept = {'Accept': json_header_str}

# Logstash style index naming, e.g. logstash-2013.05.01
index_date_format = '%Y.%m.%d'
year_month_length = 7

DEFAULT_CONFIG_PATH = '/etc/es-index-backup/es-index-backup.conf'
CONFIG_PATH_ENV = 'ES_INDEX_BACKUP_CONFIG_PATH'
LOG_FILENAME = 'es-index-backup.log'
LOGGER_NAME = 'index-recovery'

DEFAULT_INDEX_NAME = 'logstash'
DEFAULT_TEMP_DIR = '/tmp'
DEFAULT_LOG_DIR = '/var/log/es-index-backup'
DEFAULT_ES_URL = 'http://localhost:9200'
DEFAULT_HTTP_TIMEOUT = 60
DEFAULT_SHARDS = 5
DEFAULT_REPLICAS = 0
DEFAULT_NICE = 19
DEFAULT_RESTART_COMMAND = 'service elasticsearch restart'

ARCHIVE_SUFFIX = '.tgz'
RESTORE_SCRIPT_SUFFIX = '-restore.sh'
RESTORE_SCRIPT_MODE = 0o750


class JobLogStatuses(str, Enum):
    SUCCESS = 'Success'
    IN_PROGRESS = 'In Progress'
    FAIL = 'Fail'
