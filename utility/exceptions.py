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

import typing as t


class IndexRecoveryError(Exception):
    pass


class InvalidArgumentsError(IndexRecoveryError):
    def __init__(self, messages: list[str]):
        self.messages = messages
        super().__init__('\n'.join(messages))


class CommandError(IndexRecoveryError):
    """An external process could not be started or exited with a non-zero status."""

    def __init__(self, command: t.Sequence[str], returncode: t.Optional[int] = None, output: str = ''):
        self.command = list(command)
        self.returncode = returncode
        self.output = output.strip()
        if returncode is None:
            message = f'Unable to run {self.command[0]}'
        else:
            message = f'{" ".join(self.command)} exited with status {returncode}'
        if self.output:
            message = f'{message}: {self.output}'
        super().__init__(message)


class ArchiveError(CommandError):
    pass


class TransferError(CommandError):
    pass


class RestoreScriptError(CommandError):
    pass


class HttpCallError(IndexRecoveryError):
    def __init__(self, method: str, url: str, reason: str):
        self.method = method
        self.url = url
        self.reason = reason
        super().__init__(f'{method} {url} failed: {reason}')
