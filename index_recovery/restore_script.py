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
Restore scripts travel next to each index archive. A restore script takes no arguments,
recreates the index on the Elasticsearch node, extracts the archive into the index
directory and restarts Elasticsearch. It exits with 0 on success and 1 on any failure.
"""

__copyright__ = 'Copyright The IETF Trust 2026, All Rights Reserved'
__license__ = 'Apache License, Version 2.0'

import json
import os
import shlex
from dataclasses import dataclass

import jinja2

from utility.staticVariables import ARCHIVE_SUFFIX, DEFAULT_NICE, RESTORE_SCRIPT_MODE

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'templates')
RESTORE_SCRIPT_TEMPLATE = 'index-restore.sh.j2'


@dataclass(frozen=True)
class RestoreScript:
    es_url: str
    index: str
    settings: dict
    index_dir: str
    restart_command: str

    @property
    def settings_json(self) -> str:
        return json.dumps(self.settings, separators=(',', ':'))

    @property
    def archive_filename(self) -> str:
        return f'{self.index}{ARCHIVE_SUFFIX}'

    def render(self) -> str:
        return render(
            RESTORE_SCRIPT_TEMPLATE,
            {
                'es_url': self.es_url,
                'index': self.index,
                'settings_json': self.settings_json,
                'index_dir': self.index_dir,
                'restart_command': self.restart_command,
                'archive_filename': self.archive_filename,
                'default_nice': DEFAULT_NICE,
            },
        )

    def write(self, path: str):
        """Write the rendered script to path, replacing any previous copy, and make it executable."""
        with open(path, 'w') as writer:
            writer.write(self.render())
        os.chmod(path, RESTORE_SCRIPT_MODE)


def render(template_name: str, context: dict) -> str:
    """Render jinja shell script template

    Arguments:
        :param template_name:   (str) name of a template file in the templates directory
        :param context:         (dict) dictionary containing data to render jinja
            template file
        :return:                (str) string containing rendered script
    """
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(TEMPLATES_DIR),
        keep_trailing_newline=True,
        undefined=jinja2.StrictUndefined,
    )
    env.filters['shquote'] = lambda value: shlex.quote(str(value))
    return env.get_template(template_name).render(context)
