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
import shlex
import shutil
import stat
import subprocess
import tarfile
import tempfile
import unittest

from ddt import data, ddt

from index_recovery.restore_script import RestoreScript

INDEX = 'logstash-2013.05.01'
SETTINGS = {
    'settings': {'number_of_shards': 5, 'number_of_replicas': 0},
    'mappings': {'logs': {'properties': {'message': {'type': 'string', 'analyzer': "o'reilly"}}}},
}

STUB_CURL = """#!/bin/sh
method=GET
for arg in "$@"; do
  if [ "$arg" = "-XPUT" ]; then
    method=PUT
  fi
done
echo "$method $*" >> "$CURL_LOG"
if [ "$method" = "PUT" ]; then
  printf '%s' "${PUT_STATUS:-200}"
else
  printf '%s' "${PROBE_STATUS:-404}"
fi
"""


def make_restore_script(**kwargs) -> RestoreScript:
    values = {
        'es_url': 'http://localhost:9200',
        'index': INDEX,
        'settings': SETTINGS,
        'index_dir': '/data/indices',
        'restart_command': 'service elasticsearch restart',
    }
    values.update(kwargs)
    return RestoreScript(**values)


class TestRestoreScriptRenderClass(unittest.TestCase):
    def test_shebang(self):
        rendered = make_restore_script().render()

        self.assertTrue(rendered.startswith('#!/bin/bash\n'))
        self.assertTrue(rendered.endswith('exit 0\n'))

    def test_embedded_values_are_quoted(self):
        restore_script = make_restore_script(index_dir='/mnt/es data/indices')

        rendered = restore_script.render()

        self.assertIn(f'INDEX={shlex.quote(INDEX)}\n', rendered)
        self.assertIn("BACKUP_ELASTICSEARCH='http://localhost:9200'\n", rendered)
        self.assertIn("BACKUP_INDEX_DIR='/mnt/es data/indices'\n", rendered)
        self.assertIn(f'SETTINGS={shlex.quote(restore_script.settings_json)}\n', rendered)

    def test_settings_json(self):
        restore_script = make_restore_script()

        self.assertEqual(
            restore_script.settings_json,
            '{"settings":{"number_of_shards":5,"number_of_replicas":0},'
            '"mappings":{"logs":{"properties":{"message":{"type":"string","analyzer":"o\'reilly"}}}}}',
        )

    def test_restart_command_is_quoted(self):
        rendered = make_restore_script(restart_command='service es stop && service es start').render()

        self.assertIn("RESTART_COMMAND='service es stop && service es start'\n", rendered)
        self.assertIn('if ! /bin/bash -e -c "$RESTART_COMMAND"; then\n', rendered)

    def test_http_calls(self):
        rendered = make_restore_script().render()

        self.assertIn('-XGET "$ELASTICSEARCH/$INDEX/_status"', rendered)
        self.assertIn('-XPUT "$ELASTICSEARCH/$INDEX/"', rendered)

    def test_write(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            path = os.path.join(temp_dir, f'{INDEX}-restore.sh')
            with open(path, 'w') as writer:
                writer.write('stale content')
            restore_script = make_restore_script()

            restore_script.write(path)

            with open(path) as reader:
                self.assertEqual(reader.read(), restore_script.render())
            self.assertEqual(stat.S_IMODE(os.stat(path).st_mode), 0o750)


@ddt
@unittest.skipUnless(
    os.path.exists('/bin/bash') and all(shutil.which(program) for program in ('tar', 'nice', 'touch')),
    '/bin/bash, tar, nice and touch are needed to run restore scripts',
)
class TestRestoreScriptRunClass(unittest.TestCase):
    """Run rendered restore scripts against a stub curl."""

    def setUp(self):
        self._temp_dir = tempfile.TemporaryDirectory()
        self.root = self._temp_dir.name
        self.download_dir = os.path.join(self.root, 'download')
        self.index_dir = os.path.join(self.root, 'indices')
        self.bin_dir = os.path.join(self.root, 'bin')
        self.curl_log = os.path.join(self.root, 'curl.log')
        self.restart_marker = os.path.join(self.root, 'restarted')
        for directory in (self.download_dir, self.bin_dir):
            os.makedirs(directory)

        curl_path = os.path.join(self.bin_dir, 'curl')
        with open(curl_path, 'w') as writer:
            writer.write(STUB_CURL)
        os.chmod(curl_path, 0o755)

        self.archive_path = os.path.join(self.download_dir, f'{INDEX}.tgz')
        source_index = os.path.join(self.root, 'source', INDEX)
        os.makedirs(os.path.join(source_index, '0'))
        with open(os.path.join(source_index, '0', 'segments'), 'w') as writer:
            writer.write('segment data')
        with tarfile.open(self.archive_path, 'w:gz') as archive:
            archive.add(source_index, arcname=INDEX)

        self.script_path = os.path.join(self.download_dir, f'{INDEX}-restore.sh')
        make_restore_script(
            index_dir=self.index_dir,
            restart_command=f'touch {shlex.quote(self.restart_marker)}',
        ).write(self.script_path)

    def tearDown(self):
        self._temp_dir.cleanup()

    def run_script(self, **env) -> subprocess.CompletedProcess:
        process_env = {
            'PATH': f'{self.bin_dir}{os.pathsep}{os.environ.get("PATH", "")}',
            'CURL_LOG': self.curl_log,
        }
        process_env.update(env)
        return subprocess.run(
            [self.script_path],
            cwd=self.root,
            env=process_env,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            universal_newlines=True,
        )

    def read_curl_log(self) -> list[str]:
        if not os.path.exists(self.curl_log):
            return []
        with open(self.curl_log) as reader:
            return reader.read().splitlines()

    def test_restore(self):
        process = self.run_script()

        self.assertEqual(process.returncode, 0, process.stdout)
        with open(os.path.join(self.index_dir, INDEX, '0', 'segments')) as reader:
            self.assertEqual(reader.read(), 'segment data')
        self.assertTrue(os.path.exists(self.restart_marker))
        curl_calls = self.read_curl_log()
        self.assertEqual(len(curl_calls), 2)
        self.assertIn(f'http://localhost:9200/{INDEX}/_status', curl_calls[0])
        self.assertTrue(curl_calls[1].startswith('PUT '))
        self.assertIn(f'http://localhost:9200/{INDEX}/', curl_calls[1])

    def test_environment_overrides(self):
        other_index_dir = os.path.join(self.root, 'other-indices')

        process = self.run_script(ELASTICSEARCH='http://es02:9200', INDEX_DIR=other_index_dir, NICE='10')

        self.assertEqual(process.returncode, 0, process.stdout)
        self.assertTrue(os.path.isdir(os.path.join(other_index_dir, INDEX)))
        self.assertFalse(os.path.exists(self.index_dir))
        self.assertIn(f'http://es02:9200/{INDEX}/_status', self.read_curl_log()[0])

    def test_index_already_exists(self):
        process = self.run_script(PROBE_STATUS='200')

        self.assertEqual(process.returncode, 1)
        self.assertIn(f'Index: {INDEX} already exists on this elasticsearch node.', process.stdout)
        self.assertFalse(os.path.exists(self.index_dir))
        self.assertFalse(os.path.exists(self.restart_marker))
        self.assertEqual(len(self.read_curl_log()), 1)

    @data('000', '500', '503')
    def test_index_existence_unknown(self, probe_status: str):
        process = self.run_script(PROBE_STATUS=probe_status)

        self.assertEqual(process.returncode, 1)
        self.assertIn('Unable to determine whether index', process.stdout)
        self.assertFalse(os.path.exists(self.index_dir))
        self.assertFalse(os.path.exists(self.restart_marker))

    def test_missing_archive(self):
        os.remove(self.archive_path)

        process = self.run_script()

        self.assertEqual(process.returncode, 1)
        self.assertIn('Unable to locate archive file', process.stdout)
        self.assertEqual(len(self.read_curl_log()), 1)
        self.assertFalse(os.path.exists(self.restart_marker))

    def test_index_creation_failed(self):
        process = self.run_script(PUT_STATUS='400')

        self.assertEqual(process.returncode, 1)
        self.assertIn(f'Unable to create index {INDEX}', process.stdout)
        self.assertFalse(os.path.exists(self.index_dir))
        self.assertFalse(os.path.exists(self.restart_marker))

    def test_restart_failed(self):
        make_restore_script(index_dir=self.index_dir, restart_command='false').write(self.script_path)

        process = self.run_script()

        self.assertEqual(process.returncode, 1)
        self.assertIn('Restart command failed', process.stdout)
        self.assertTrue(os.path.isdir(os.path.join(self.index_dir, INDEX)))

    def test_restart_compound_command(self):
        stopped = os.path.join(self.root, 'stopped')
        started = os.path.join(self.root, 'started')
        make_restore_script(
            index_dir=self.index_dir,
            restart_command=f'touch {shlex.quote(stopped)} && touch {shlex.quote(started)}',
        ).write(self.script_path)

        process = self.run_script()

        self.assertEqual(process.returncode, 0, process.stdout)
        self.assertTrue(os.path.exists(stopped))
        self.assertTrue(os.path.exists(started))

    @data('false; true', 'false && true', 'true && false')
    def test_restart_compound_command_failed(self, restart_command: str):
        make_restore_script(index_dir=self.index_dir, restart_command=restart_command).write(self.script_path)

        process = self.run_script()

        self.assertEqual(process.returncode, 1)
        self.assertIn(f'Restart command failed: {restart_command}', process.stdout)


if __name__ == '__main__':
    unittest.main()
