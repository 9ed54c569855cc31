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
Wrappers around the external programs used for backups: tar, scp, ssh and the generated
restore scripts. Every wrapper raises a subclass of CommandError when the program
cannot be started or exits with a non-zero status.
"""

__copyright__ = 'Copyright The IETF Trust 2026, All Rights Reserved'
__license__ = 'Apache License, Version 2.0'

import logging
import os
import re
import subprocess
import typing as t

from utility.exceptions import ArchiveError, CommandError, RestoreScriptError, TransferError
from utility.staticVariables import LOGGER_NAME

logger = logging.getLogger(f'{LOGGER_NAME}.commands')

# user@host:/path or host:path, but not a local path that happens to contain a colon after a slash
remote_target_re = re.compile(r'^(?P<host>[^/:]+):(?P<path>.*)$')

# Overrides read by the restore scripts, only ever set by the restore utility itself
restore_script_variables = frozenset(('ELASTICSEARCH', 'INDEX_DIR', 'NICE'))


def run_command(
    command: t.Sequence[str],
    error_class: t.Type[CommandError] = CommandError,
    cwd: t.Optional[str] = None,
    env: t.Optional[dict[str, str]] = None,
) -> subprocess.CompletedProcess:
    """Run the command until it finishes.

    Arguments:
        :param command      (Sequence[str]) program and its arguments
        :param error_class  (Type[CommandError]) error raised on failure
        :param cwd          (Optional[str]) working directory of the process
        :param env          (Optional[dict]) environment of the process
        :return             (subprocess.CompletedProcess) the finished process
    """
    logger.debug(f'Running: {" ".join(command)}')
    try:
        process = subprocess.run(
            list(command),
            cwd=cwd,
            env=env,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            universal_newlines=True,
        )
    except OSError as e:
        raise error_class(command, output=str(e)) from e
    if process.stdout:
        logger.debug(process.stdout.strip())
    if process.returncode != 0:
        raise error_class(command, process.returncode, process.stdout or '')
    return process


def create_archive(index_dir: str, index: str, archive_path: str, nice: int):
    """Create a gzip compressed tar archive of index_dir/index.
    The archive contains the index directory itself as its top level entry.
    """
    command = ['nice', '-n', str(nice), 'tar', 'czf', archive_path, '-C', index_dir, index]
    run_command(command, ArchiveError)


def split_remote_target(target: str) -> tuple[t.Optional[str], str]:
    """Split an SCP target into its host part (None for local targets) and its path."""
    match = remote_target_re.match(target)
    if match is None:
        return None, target
    return match.group('host'), match.group('path')


def ensure_remote_directory(target: str, ssh_command: str = 'ssh'):
    """Create the directory of an SCP target, remotely over ssh or locally."""
    host, path = split_remote_target(target)
    if host is None:
        os.makedirs(path, exist_ok=True)
        return
    run_command([ssh_command, host, 'mkdir', '-p', path], TransferError)


def scp_copy(source: str, destination: str, scp_command: str = 'scp', scp_options: t.Sequence[str] = ()):
    run_command([scp_command, *scp_options, source, destination], TransferError)


def run_restore_script(script_path: str, cwd: str, env: t.Optional[dict[str, str]] = None) -> str:
    """Run a generated restore script without arguments and return its output.

    Arguments:
        :param script_path  (str) path to the executable restore script
        :param cwd          (str) working directory, the directory of the downloaded archive
        :param env          (Optional[dict]) variables added to the current environment, which
                            never passes ELASTICSEARCH, INDEX_DIR or NICE on by itself
    """
    process_env = {key: value for key, value in os.environ.items() if key not in restore_script_variables}
    process_env.update(env or {})
    process = run_command([script_path], RestoreScriptError, cwd=cwd, env=process_env)
    return process.stdout or ''
