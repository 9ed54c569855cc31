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

from utility.scriptConfig import Arg, ScriptConfig


class BaseScriptConfigInfo(t.TypedDict):
    help: str


class ScriptConfigInfo(BaseScriptConfigInfo, total=False):
    args: t.Optional[list[Arg]]
    epilog: str


# Defaults of value flags are None so that values from the config file can be told apart
# from values given on the command line.
script_config_dict: dict[str, ScriptConfigInfo] = {
    'es_index_backup': {
        'help': (
            'Create a restorable backup of an elasticsearch index (assumes Logstash format indexes), '
            'and upload it to a backup directory via SCP. The default backs up an index from yesterday. '
            'Note that this script itself does not restart elasticsearch - the restore script that is '
            'generated for each backup will restart elasticsearch after restoring an archived index.'
        ),
        'epilog': (
            'examples:\n'
            '  es-index-backup -b "user@server:/path/to/target/" -i "/usr/local/elasticsearch/data/node/0/indices"\n'
            '\n'
            '    This uses http://localhost:9200 to connect to elasticsearch and backs up the index from\n'
            '    yesterday (based on system time, be careful with timezones)\n'
            '\n'
            '  es-index-backup -b "user@server:/path/to/target/" -i "/mnt/es/data/node/0/indices" \\\n'
            '    -d "2013.05.21" -t "/mnt/es/backups" -g my_index -u "service es restart" \\\n'
            '    -e "http://127.0.0.1:9200" -p\n'
            '\n'
            '    Connect to elasticsearch using 127.0.0.1 instead of localhost, backup the index "my_index"\n'
            '    from 2013.05.21 instead of yesterday, store the archive and restore script in\n'
            '    /mnt/es/backups (and persist them) and use \'service es restart\' to restart elasticsearch.\n'
        ),
        'args': [
            {
                'flag': '-b',
                'dest': 'scp_base',
                'metavar': 'USER@SERVER:/PATH',
                'help': 'SCP path for backups (Required)',
                'type': str,
                'default': None,
            },
            {
                'flag': '-i',
                'dest': 'index_dir',
                'metavar': 'INDEX_DIRECTORY',
                'help': 'Elasticsearch index directory (Required)',
                'type': str,
                'default': None,
            },
            {
                'flag': '-g',
                'dest': 'index_name',
                'metavar': 'NAME',
                'help': 'Consistent index name (default: logstash)',
                'type': str,
                'default': None,
            },
            {
                'flag': '-d',
                'dest': 'date',
                'metavar': 'YYYY.mm.dd',
                'help': 'Backup a specific date (default: yesterday)',
                'type': str,
                'default': None,
            },
            {
                'flag': '-t',
                'dest': 'temp_dir',
                'metavar': 'DIRECTORY',
                'help': 'Temporary directory for archiving (default: /tmp)',
                'type': str,
                'default': None,
            },
            {
                'flag': '-p',
                'dest': 'persist',
                'help': 'Persist local backups, by default backups are not kept locally',
                'action': 'store_true',
                'default': False,
            },
            {
                'flag': '-s',
                'dest': 'shards',
                'metavar': 'SHARDS',
                'help': 'Shards (default: 5)',
                'type': str,
                'default': None,
            },
            {
                'flag': '-r',
                'dest': 'replicas',
                'metavar': 'REPLICAS',
                'help': 'Replicas (default: 0)',
                'type': str,
                'default': None,
            },
            {
                'flag': '-e',
                'dest': 'es_url',
                'metavar': 'URL',
                'help': 'Elasticsearch URL (default: http://localhost:9200)',
                'type': str,
                'default': None,
            },
            {
                'flag': '-n',
                'dest': 'nice',
                'metavar': 'NICE',
                'help': 'How nice tar must be (default: 19)',
                'type': str,
                'default': None,
            },
            {
                'flag': '-u',
                'dest': 'restart_command',
                'metavar': 'COMMAND',
                'help': "Restart command for elasticsearch (default: 'service elasticsearch restart')",
                'type': str,
                'default': None,
            },
        ],
    },
    'es_index_restore': {
        'help': 'Retrieve a specified logstash index via SCP and restore it with its accompanying restore script.',
        'epilog': (
            'examples:\n'
            '  es-index-restore -b "user@server:/path/to/target/" -i /mnt/es/data/nodes/0/indices -d "2013.05.01"\n'
            '\n'
            '    Get the backup and restore script for the 2013.05.01 index from this server and restore\n'
            '    the index to the provided elasticsearch index directory.\n'
        ),
        'args': [
            {
                'flag': '-b',
                'dest': 'scp_base',
                'metavar': 'USER@SERVER:/PATH',
                'help': 'SCP path for backups (Required)',
                'type': str,
                'default': None,
            },
            {
                'flag': '-i',
                'dest': 'index_dir',
                'metavar': 'INDEX_DIRECTORY',
                'help': 'Elasticsearch index directory (Required)',
                'type': str,
                'default': None,
            },
            {
                'flag': '-d',
                'dest': 'date',
                'metavar': 'YYYY.mm.dd',
                'help': 'Date to retrieve (Required)',
                'type': str,
                'default': None,
            },
            {
                'flag': '-t',
                'dest': 'temp_dir',
                'metavar': 'DIRECTORY',
                'help': 'Temporary directory for download and extract (default: /tmp)',
                'type': str,
                'default': None,
            },
            {
                'flag': '-p',
                'dest': 'persist',
                'help': 'Keep the downloaded archive and restore script',
                'action': 'store_true',
                'default': False,
            },
            {
                'flag': '-e',
                'dest': 'es_url',
                'metavar': 'URL',
                'help': 'Elasticsearch URL (default: the URL the backup was taken from)',
                'type': str,
                'default': None,
            },
            {
                'flag': '-n',
                'dest': 'nice',
                'metavar': 'NICE',
                'help': 'How nice tar must be (default: 19)',
                'type': str,
                'default': None,
            },
        ],
    },
}


def get_script_config(filename: str, arglist: t.Optional[list[str]] = None) -> ScriptConfig:
    """Build the ScriptConfig of a utility.

    Arguments:
        :param filename     (str) module name of the utility, key into script_config_dict
        :param arglist      (Optional[list[str]]) arguments to parse, sys.argv is used if None
    """
    script_config_info = script_config_dict[filename]
    return ScriptConfig(
        help=script_config_info['help'],
        args=script_config_info.get('args'),
        arglist=arglist,
        epilog=script_config_info.get('epilog'),
    )
