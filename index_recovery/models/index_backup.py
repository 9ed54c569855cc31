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
from dataclasses import dataclass
from datetime import date

from utility.staticVariables import ARCHIVE_SUFFIX, DEFAULT_INDEX_NAME, RESTORE_SCRIPT_SUFFIX
from utility.util import get_index_name, get_year_month, get_yesterday


@dataclass(frozen=True)
class IndexBackup:
    """Names and paths of the backup of one date partitioned index."""

    name: str
    date: str

    @classmethod
    def for_date(cls, index_date: str, name: str = DEFAULT_INDEX_NAME) -> 'IndexBackup':
        return cls(name=name, date=index_date)

    @classmethod
    def for_yesterday(cls, name: str = DEFAULT_INDEX_NAME, today: t.Optional[date] = None) -> 'IndexBackup':
        return cls(name=name, date=get_yesterday(today))

    @property
    def index(self) -> str:
        return get_index_name(self.name, self.date)

    @property
    def year_month(self) -> str:
        return get_year_month(self.date)

    @property
    def archive_filename(self) -> str:
        return f'{self.index}{ARCHIVE_SUFFIX}'

    @property
    def restore_script_filename(self) -> str:
        return f'{self.index}{RESTORE_SCRIPT_SUFFIX}'

    def index_path(self, index_dir: str) -> str:
        return os.path.join(index_dir, self.index)

    def remote_directory(self, scp_base: str) -> str:
        """Year-month partition directory under the SCP base path, e.g. user@host:/backups/2013-05"""
        return f'{scp_base.rstrip("/")}/{self.year_month}'

    def remote_path(self, scp_base: str, filename: str) -> str:
        return f'{self.remote_directory(scp_base)}/{filename}'
