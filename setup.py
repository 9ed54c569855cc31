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

from setuptools import find_packages, setup

setup(
    name='es-index-backup',
    version='1.0.0',
    packages=find_packages(exclude=['tests', 'tests.*', '*.tests', '*.tests.*']),
    package_data={'index_recovery': ['templates/*.j2']},
    url='',
    license='Apache License, Version 2.0',
    description='Back up and restore date partitioned Elasticsearch indices over SCP',
    python_requires='>=3.9',
    install_requires=['requests', 'jinja2'],
    extras_require={'test': ['pytest', 'ddt']},
    entry_points={
        'console_scripts': [
            'es-index-backup=index_recovery.es_index_backup:run',
            'es-index-restore=index_recovery.es_index_restore:run',
        ],
    },
)
