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

import logging
import os

from utility.staticVariables import LOG_FILENAME


def get_logger(name: str, file_name_path: str = LOG_FILENAME, level: int = logging.DEBUG):
    """Create formated logger with the specified name and store at path defined by
        'file_name_path' argument.
        Arguments:
            :param name             (str) set name of the logger.
            :param file_name_path   (str) filename and path where to save logs.
            :param level            (int) Optional - logging level of this logger.
            :return a logger with the specified name.
    """
    log_directory = os.path.dirname(file_name_path)
    if log_directory:
        os.makedirs(log_directory, exist_ok=True)
    exists = os.path.isfile(file_name_path)
    FORMAT = '%(asctime)-15s %(levelname)-8s %(filename)s %(name)5s => %(message)s - %(lineno)d'
    DATEFMT = '%Y-%m-%d %H:%M:%S'
    logger = logging.getLogger(name)
    logging.getLogger('urllib3').setLevel(logging.ERROR)
    logger.setLevel(level)
    file_handlers = [handler for handler in logger.handlers if isinstance(handler, logging.FileHandler)]
    if not any(handler.baseFilename == os.path.abspath(file_name_path) for handler in file_handlers):
        for handler in file_handlers:
            logger.removeHandler(handler)
            handler.close()
        handler = logging.FileHandler(file_name_path)
        handler.setFormatter(logging.Formatter(FORMAT, DATEFMT))
        logger.addHandler(handler)
    # if file didn t exist we create it and now we can set chmod
    if not exists:
        os.chmod(file_name_path, 0o664)
    return logger
