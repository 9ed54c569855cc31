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

import unittest
from unittest import mock

import requests

from utility import elasticsearch_util
from utility.exceptions import HttpCallError

INDEX = 'logstash-2013.05.01'


class TestElasticsearchUtilClass(unittest.TestCase):
    def mock_response(self, status_code: int = 200, body='{}'):
        response = requests.Response()
        response.status_code = status_code
        response._content = body.encode('utf-8')
        return response

    @mock.patch('utility.elasticsearch_util.requests.get')
    def test_get_index_mapping(self, get_mock: mock.MagicMock):
        get_mock.return_value = self.mock_response(body='{"logstash-2013.05.01": {"logs": {}}}')

        mapping = elasticsearch_util.get_index_mapping('http://localhost:9200/', INDEX, 5)

        self.assertEqual(mapping, {INDEX: {'logs': {}}})
        self.assertEqual(get_mock.call_args.args[0], f'http://localhost:9200/{INDEX}/_mapping')
        self.assertEqual(get_mock.call_args.kwargs['timeout'], 5)

    @mock.patch('utility.elasticsearch_util.requests.get')
    def test_get_index_mapping_not_found(self, get_mock: mock.MagicMock):
        get_mock.return_value = self.mock_response(404, '{"error": "IndexMissingException"}')

        with self.assertRaises(HttpCallError) as context:
            elasticsearch_util.get_index_mapping('http://localhost:9200', INDEX)

        self.assertEqual(context.exception.method, 'GET')
        self.assertIn('HTTP status 404', context.exception.reason)

    @mock.patch('utility.elasticsearch_util.requests.get', side_effect=requests.exceptions.ConnectionError('refused'))
    def test_get_index_mapping_unreachable(self, get_mock: mock.MagicMock):
        with self.assertRaises(HttpCallError) as context:
            elasticsearch_util.get_index_mapping('http://localhost:9200', INDEX)

        self.assertEqual(context.exception.url, f'http://localhost:9200/{INDEX}/_mapping')
        self.assertIn('refused', str(context.exception))

    @mock.patch('utility.elasticsearch_util.requests.get')
    def test_get_index_mapping_not_json(self, get_mock: mock.MagicMock):
        get_mock.return_value = self.mock_response(body='<html>proxy error</html>')

        with self.assertRaises(HttpCallError) as context:
            elasticsearch_util.get_index_mapping('http://localhost:9200', INDEX)

        self.assertEqual(context.exception.reason, 'response body is not JSON')

    def test_extract_mappings(self):
        type_mappings = {'logs': {'properties': {'message': {'type': 'string'}}}}

        self.assertEqual(elasticsearch_util.extract_mappings({INDEX: type_mappings}, INDEX), type_mappings)
        self.assertEqual(
            elasticsearch_util.extract_mappings({INDEX: {'mappings': type_mappings}}, INDEX),
            type_mappings,
        )

    def test_extract_mappings_unknown_shape(self):
        response = {'other-index': {'logs': {}}}

        self.assertEqual(elasticsearch_util.extract_mappings(response, INDEX), response)
        self.assertEqual(elasticsearch_util.extract_mappings({}, INDEX), {})

    def test_build_settings_document(self):
        document = elasticsearch_util.build_settings_document(5, 0, {'logs': {}})

        self.assertEqual(
            document,
            {'settings': {'number_of_shards': 5, 'number_of_replicas': 0}, 'mappings': {'logs': {}}},
        )


if __name__ == '__main__':
    unittest.main()
