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

import requests

from utility.exceptions import HttpCallError
from utility.staticVariables import DEFAULT_HTTP_TIMEOUT, json_accept


def get_index_mapping(es_url: str, index: str, timeout: float = DEFAULT_HTTP_TIMEOUT) -> t.Any:
    """Fetch the field mappings of an index.

    Arguments:
        :param es_url   (str) base URL of the Elasticsearch node
        :param index    (str) name of the index
        :param timeout  (float) seconds to wait for the response
        :return         decoded JSON body of the _mapping response
    """
    url = f'{es_url.rstrip("/")}/{index}/_mapping'
    try:
        response = requests.get(url, headers=json_accept, timeout=timeout)
    except requests.exceptions.RequestException as e:
        raise HttpCallError('GET', url, str(e)) from e
    if not response.ok:
        raise HttpCallError('GET', url, f'HTTP status {response.status_code}: {response.text.strip()}')
    try:
        return response.json()
    except ValueError as e:
        raise HttpCallError('GET', url, 'response body is not JSON') from e


def extract_mappings(mapping_response: t.Any, index: str) -> t.Any:
    """Strip the index name (and the 'mappings' key of newer versions) from a _mapping response,
    so the result can be used in an index creation body. Other shapes are returned unchanged.
    """
    if isinstance(mapping_response, dict) and set(mapping_response) == {index}:
        mappings = mapping_response[index]
        if isinstance(mappings, dict) and set(mappings) == {'mappings'}:
            return mappings['mappings']
        return mappings
    return mapping_response


def build_settings_document(shards: int, replicas: int, mappings: t.Any) -> dict:
    return {
        'settings': {'number_of_shards': shards, 'number_of_replicas': replicas},
        'mappings': mappings,
    }
