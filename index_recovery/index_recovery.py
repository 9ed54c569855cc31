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
import sys
import typing as t

import utility.log as log
from index_recovery.models.index_backup import IndexBackup
from index_recovery.models.recovery_configs import BackupConfig, RestoreConfig
from utility.staticVariables import LOG_FILENAME, LOGGER_NAME
from utility.util import is_root_user


class IndexRecovery:
    """Common part of the backup and restore processes of one index."""

    process_type = ''

    def __init__(self, recovery_config: t.Union[BackupConfig, RestoreConfig], index_backup: IndexBackup):
        self.job_log_messages = []
        self.recovery_config = recovery_config
        self.index_backup = index_backup
        self.log_directory = recovery_config.log_directory
        self.temp_dir = recovery_config.temp_dir
        self.archive_path = os.path.join(self.temp_dir, index_backup.archive_filename)
        self.restore_script_path = os.path.join(self.temp_dir, index_backup.restore_script_filename)
        self.logger = log.get_logger(LOGGER_NAME, os.path.join(self.log_directory, LOG_FILENAME))

    def start_process(self) -> list[dict]:
        self.logger.info(f'Starting {self.process_type} process of index {self.index_backup.index}')
        self._start_process()
        self.logger.info(f'{self.process_type} process of index {self.index_backup.index} finished successfully')
        return self.job_log_messages

    def _start_process(self):
        """Main logic of the script"""
        raise NotImplementedError


def exit_unless_root():
    if not is_root_user():
        # Permissions of the index directory and the elasticsearch service require root
        print('This script must be run as root.')
        sys.exit(1)
