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

"""
Retrieve a specified logstash index via SCP and restore it with its accompanying
restore script.
Must run on an elasticsearch node with data, the restore script restarts elasticsearch.
"""

__copyright__ = 'Copyright The IETF Trust 2026, All Rights Reserved'
__license__ = 'Apache License, Version 2.0'

import os
import sys
from configparser import ConfigParser

from index_recovery.index_recovery import IndexRecovery, exit_unless_root
from index_recovery.models.index_backup import IndexBackup
from index_recovery.models.recovery_configs import RestoreConfig, build_restore_config
from utility import commands
from utility.create_config import create_config
from utility.exceptions import IndexRecoveryError, InvalidArgumentsError, TransferError
from utility.script_config_dict import get_script_config
from utility.scriptConfig import ScriptConfig
from utility.staticVariables import RESTORE_SCRIPT_MODE
from utility.util import job_log, remove_files

BASENAME = os.path.basename(__file__)
FILENAME = BASENAME.split('.py')[0]
DEFAULT_SCRIPT_CONFIG = get_script_config(FILENAME, arglist=None if __name__ == '__main__' else [])


class MissingRestoreScriptError(IndexRecoveryError):
    def __init__(self):
        super().__init__('Unable to find restore script, does that backup exist?')


class IndexRestoreProcess(IndexRecovery):
    process_type = 'restore'

    def __init__(self, restore_config: RestoreConfig, index_backup: IndexBackup):
        super().__init__(restore_config, index_backup)
        self.restore_config = restore_config

    @job_log(file_basename=BASENAME)
    def start_process(self) -> list[dict]:
        return super().start_process()

    def _start_process(self):
        os.makedirs(self.temp_dir, exist_ok=True)
        try:
            self._download()
            os.chmod(self.restore_script_path, RESTORE_SCRIPT_MODE)
            self._run_restore_script()
        finally:
            if not self.restore_config.persist:
                remove_files((self.archive_path, self.restore_script_path), self.logger)

    def _download(self):
        transfer = self.restore_config.transfer
        scp_base = self.restore_config.scp_base
        archive_error = None
        try:
            commands.scp_copy(
                self.index_backup.remote_path(scp_base, self.index_backup.archive_filename),
                self.archive_path,
                transfer.scp_command,
                transfer.scp_options,
            )
        except TransferError as e:
            # A missing restore script is the more telling error, report that one first
            archive_error = e
        try:
            commands.scp_copy(
                self.index_backup.remote_path(scp_base, self.index_backup.restore_script_filename),
                self.restore_script_path,
                transfer.scp_command,
                transfer.scp_options,
            )
        except TransferError as e:
            self.logger.error(str(e))
            raise MissingRestoreScriptError() from e
        if not os.path.isfile(self.restore_script_path):
            raise MissingRestoreScriptError()
        if archive_error is not None:
            raise archive_error
        self.logger.info(f'Downloaded backup of index {self.index_backup.index} to {self.temp_dir}')

    def _run_restore_script(self):
        env = {
            'INDEX_DIR': self.restore_config.index_dir,
            'NICE': str(self.restore_config.nice),
        }
        if self.restore_config.es_url:
            env['ELASTICSEARCH'] = self.restore_config.es_url
        output = commands.run_restore_script(self.restore_script_path, self.temp_dir, env)
        if output:
            print(output.strip())
        self.logger.info(f'Restore script {self.restore_script_path} finished successfully')
        self.job_log_messages.append({'label': 'Restored index', 'message': self.index_backup.index})


def main(script_conf: ScriptConfig = DEFAULT_SCRIPT_CONFIG.copy(), config: ConfigParser = create_config()):
    exit_unless_root()
    try:
        restore_config = build_restore_config(script_conf.args, config)
    except InvalidArgumentsError as e:
        print('\n'.join(e.messages))
        script_conf.print_help()
        sys.exit(1)

    index_backup = IndexBackup.for_date(restore_config.date, restore_config.index_name)
    process = IndexRestoreProcess(restore_config, index_backup)
    try:
        process.start_process()
    except IndexRecoveryError as e:
        process.logger.error(str(e))
        print(e)
        sys.exit(1)


def run():
    main(get_script_config(FILENAME))


if __name__ == '__main__':
    main()
