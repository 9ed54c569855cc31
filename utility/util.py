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

import functools
import json
import logging
import os
import re
import time
import typing as t
from datetime import date, datetime, timedelta

from utility.staticVariables import JobLogStatuses, index_date_format, year_month_length

digits_re = re.compile(r'[0-9]+')


def is_digits(value: t.Optional[str]) -> bool:
    return value is not None and digits_re.fullmatch(value) is not None


def is_valid_index_date(index_date: str) -> bool:
    """Check whether the date is a real calendar day in YYYY.mm.dd format."""
    if not re.fullmatch(r'\d{4}\.\d{2}\.\d{2}', index_date):
        return False
    try:
        datetime.strptime(index_date, index_date_format)
    except ValueError:
        return False
    return True


def get_index_name(name: str, index_date: str) -> str:
    return f'{name}-{index_date}'


def get_year_month(index_date: str) -> str:
    """Get the YYYY-mm partition of a YYYY.mm.dd date.

    Arguments:
        :param index_date   (str) date in YYYY.mm.dd format
        :return             (str) the date with dots replaced by hyphens, cut after the month
    """
    return index_date.replace('.', '-')[:year_month_length]


def get_yesterday(today: t.Optional[date] = None) -> str:
    """Return the previous calendar day in YYYY.mm.dd format, based on the local system clock."""
    today = today or date.today()
    return (today - timedelta(days=1)).strftime(index_date_format)


def is_root_user() -> bool:
    if hasattr(os, 'geteuid') and os.geteuid() == 0:
        return True
    return os.environ.get('USER') == 'root' or os.environ.get('LOGNAME') == 'root'


def remove_files(paths: t.Iterable[str], logger: logging.Logger):
    for path in paths:
        if os.path.isfile(path):
            os.remove(path)
            logger.info(f'Removed local file {path}')


def job_log(file_basename: str):
    """Record the run of the decorated method in the cronjob.json file.

    The decorated method must belong to an object with a 'log_directory' attribute
    and return a list of messages. Exceptions are recorded and re-raised.
    """

    def _job_log_decorator(func):
        @functools.wraps(func)
        def _job_log(self, *args, **kwargs):
            start_time = int(time.time())
            write_job_log(start_time, self.log_directory, file_basename, status=JobLogStatuses.IN_PROGRESS)
            try:
                success_messages: list[dict[str, str]] = func(self, *args, **kwargs)
            except Exception as e:
                write_job_log(
                    start_time,
                    self.log_directory,
                    file_basename,
                    end_time=int(time.time()),
                    error=str(e),
                    status=JobLogStatuses.FAIL,
                )
                raise
            write_job_log(
                start_time,
                self.log_directory,
                file_basename,
                end_time=int(time.time()),
                messages=success_messages,
                status=JobLogStatuses.SUCCESS,
            )
            return success_messages

        return _job_log

    return _job_log_decorator


def write_job_log(
    start_time: int,
    log_directory: str,
    filename: str,
    status: JobLogStatuses,
    end_time: t.Union[str, int] = '',
    messages: t.Optional[t.Union[tuple, list]] = (),
    error: str = '',
):
    """
    Dump job run information into cronjob.json file.

    Arguments:
        :param start_time       (int) Start time of job
        :param log_directory    (str) Path to the directory where cronjob.json file will be stored
        :param filename         (str) Name of python script
        :param messages         (list) Optional - list of additional messages
        :param end_time         (Union[str, int]) - End time of the job
        :param error            (str) Error message - if any error has occurred
        :param status           (str) Status of job run - either 'Fail' or 'Success'
    """
    os.makedirs(log_directory, exist_ok=True)
    cronjob_results_path = os.path.join(log_directory, 'cronjob.json')
    result = {'start': start_time, 'end': end_time, 'status': status, 'error': error, 'messages': messages or ()}

    try:
        with open(cronjob_results_path, 'r') as reader:
            file_content = json.load(reader)
    except (FileNotFoundError, json.decoder.JSONDecodeError):
        file_content = {}

    filename = filename.split('.py')[0]
    # If successfully rewrite, otherwise use last_successfull value from JSON
    last_successful = None
    if status == JobLogStatuses.SUCCESS:
        last_successful = end_time
    elif previous_state := file_content.get(filename):
        last_successful = previous_state.get('last_successfull')

    result['last_successfull'] = last_successful
    file_content[filename] = result

    with open(cronjob_results_path, 'w') as writer:
        writer.write(json.dumps(file_content, indent=4))
