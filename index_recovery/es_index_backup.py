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
Push a logstash index from yesterday (or from a given date) to an SCP target together
with a restore script for it. The archive and the restore script are uploaded to
a YYYY-mm subdirectory of the target.
Must run on an elasticsearch node, and expects to find the index on this node.
This script runs as a daily cronjob.
"""

__copyright__ = 'Copyright The IETF Trust 2026, All Rights Reserved'
__license__ = 'Apache License, Version 2.0'

import os
import sys
from configparser import ConfigParser

from index_recovery.index_recovery import IndexRecovery, exit_unless_root
from index_recovery.models.index_backup import IndexBackup
from index_recovery.models.recovery_configs import BackupConfig, build_backup_config
from index_recovery.restore_script import RestoreScript
from utility import commands
from utility.create_config import create_config
from utility.elasticsearch_util import build_settings_document, extract_mappings, get_index_mapping
from utility.exceptions import IndexRecoveryError, InvalidArgumentsError
from utility.script_config_dict import get_script_config
from utility.scriptConfig import ScriptConfig
from utility.util import job_log, remove_files

BASENAME = os.path.basename(__file__)
FILENAME = BASENAME.split('.py')[0]
DEFAULT_SCRIPT_CONFIG = get_script_config(FILENAME, arglist=None if __name__ == '__main__' else [])


class MissingIndexDirectoryError(IndexRecoveryError):
    def __init__(self, index_path: str):
        self.index_path = index_path
        super().__init__(f'The index {index_path} does not appear to exist.')


class IndexBackupProcess(IndexRecovery):
    process_type = 'backup'

    def __init__(self, backup_config: BackupConfig, index_backup: IndexBackup):
        super().__init__(backup_config, index_backup)
        self.backup_config = backup_config
        self.index_path = index_backup.index_path(backup_config.index_dir)

    @job_log(file_basename=BASENAME)
    def start_process(self) -> list[dict]:
        return super().start_process()

    def _start_process(self):
        # Make sure there is an index
        if not os.path.isdir(self.index_path):
            raise MissingIndexDirectoryError(self.index_path)
        settings = self._get_settings_document()
        os.makedirs(self.temp_dir, exist_ok=True)
        try:
            self._create_archive()
            self._create_restore_script(settings)
            self._upload()
        finally:
            if not self.backup_config.persist:
                remove_files((self.archive_path, self.restore_script_path), self.logger)

    def _get_settings_document(self) -> dict:
        index = self.index_backup.index
        mapping_response = get_index_mapping(self.backup_config.es_url, index, self.backup_config.http_timeout)
        self.logger.info(f'Fetched mapping of index {index} from {self.backup_config.es_url}')
        return build_settings_document(
            self.backup_config.shards,
            self.backup_config.replicas,
            extract_mappings(mapping_response, index),
        )

    def _create_archive(self):
        commands.create_archive(
            self.backup_config.index_dir,
            self.index_backup.index,
            self.archive_path,
            self.backup_config.nice,
        )
        archive_size = os.path.getsize(self.archive_path)
        self.logger.info(f'Archived {self.index_path} to {self.archive_path} ({archive_size} bytes)')
        self.job_log_messages.append({'label': 'Archive size', 'message': archive_size})

    def _create_restore_script(self, settings: dict):
        restore_script = RestoreScript(
            es_url=self.backup_config.es_url,
            index=self.index_backup.index,
            settings=settings,
            index_dir=self.backup_config.index_dir,
            restart_command=self.backup_config.restart_command,
        )
        restore_script.write(self.restore_script_path)
        self.logger.info(f'Restore script written to {self.restore_script_path}')

    def _upload(self):
        transfer = self.backup_config.transfer
        remote_directory = self.index_backup.remote_directory(self.backup_config.scp_base)
        if transfer.create_remote_dir:
            commands.ensure_remote_directory(remote_directory, transfer.ssh_command)
        for local_path, filename in (
            (self.archive_path, self.index_backup.archive_filename),
            (self.restore_script_path, self.index_backup.restore_script_filename),
        ):
            remote_path = self.index_backup.remote_path(self.backup_config.scp_base, filename)
            commands.scp_copy(local_path, remote_path, transfer.scp_command, transfer.scp_options)
            self.logger.info(f'Uploaded {local_path} to {remote_path}')
        self.job_log_messages.append({'label': 'Uploaded to', 'message': remote_directory})


def main(script_conf: ScriptConfig = DEFAULT_SCRIPT_CONFIG.copy(), config: ConfigParser = create_config()):
    exit_unless_root()
    try:
        backup_config = build_backup_config(script_conf.args, config)
    except InvalidArgumentsError as e:
        print('\n'.join(e.messages))
        script_conf.print_help()
        sys.exit(1)

    if backup_config.date:
        index_backup = IndexBackup.for_date(backup_config.date, backup_config.index_name)
    else:
        index_backup = IndexBackup.for_yesterday(backup_config.index_name)

    process = IndexBackupProcess(backup_config, index_backup)
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
