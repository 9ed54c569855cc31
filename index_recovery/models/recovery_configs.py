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
Immutable run configurations of the backup and restore utilities. Each one is built once
from the parsed command line arguments, with the config file and the built-in defaults
filling in the options that were not given.
"""

__copyright__ = 'Copyright The IETF Trust 2026, All Rights Reserved'
__license__ = 'Apache License, Version 2.0'

import configparser
import logging
import shlex
import typing as t
from argparse import Namespace
from configparser import ConfigParser
from dataclasses import dataclass

from utility.exceptions import InvalidArgumentsError
from utility.staticVariables import (
    DEFAULT_ES_URL,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_INDEX_NAME,
    DEFAULT_LOG_DIR,
    DEFAULT_NICE,
    DEFAULT_REPLICAS,
    DEFAULT_RESTART_COMMAND,
    DEFAULT_SHARDS,
    DEFAULT_TEMP_DIR,
    LOGGER_NAME,
)
from utility.util import is_digits, is_valid_index_date

logger = logging.getLogger(f'{LOGGER_NAME}.config')


@dataclass(frozen=True)
class TransferConfig:
    scp_command: str = 'scp'
    ssh_command: str = 'ssh'
    scp_options: tuple[str, ...] = ()
    create_remote_dir: bool = True

    @classmethod
    def from_config(cls, config: ConfigParser, errors: list[str]) -> 'TransferConfig':
        return cls(
            scp_command=_read_config(config, 'Transfer-Section', 'scp-command', 'scp', errors),
            ssh_command=_read_config(config, 'Transfer-Section', 'ssh-command', 'ssh', errors),
            scp_options=_read_config(config, 'Transfer-Section', 'scp-options', (), errors, _to_options),
            create_remote_dir=_read_config(config, 'Transfer-Section', 'create-remote-dir', True, errors, _to_boolean),
        )


@dataclass(frozen=True)
class BackupConfig:
    scp_base: str
    index_dir: str
    index_name: str
    date: t.Optional[str]
    temp_dir: str
    persist: bool
    shards: int
    replicas: int
    es_url: str
    nice: int
    restart_command: str
    http_timeout: float
    log_directory: str
    transfer: TransferConfig


@dataclass(frozen=True)
class RestoreConfig:
    scp_base: str
    index_dir: str
    index_name: str
    date: str
    temp_dir: str
    persist: bool
    es_url: t.Optional[str]
    nice: int
    log_directory: str
    transfer: TransferConfig


def _to_integer(value: str) -> int:
    if not is_digits(value):
        raise ValueError(f'not an integer: {value}')
    return int(value)


def _to_timeout(value: str) -> float:
    timeout = float(value)
    if not timeout > 0:
        raise ValueError(f'not a positive number: {value}')
    return timeout


def _to_boolean(value: str) -> bool:
    if value.lower() not in ConfigParser.BOOLEAN_STATES:
        raise ValueError(f'not a boolean: {value}')
    return ConfigParser.BOOLEAN_STATES[value.lower()]


def _to_options(value: str) -> tuple[str, ...]:
    return tuple(shlex.split(value))


def _read_config(
    config: ConfigParser,
    section: str,
    option: str,
    default: t.Any,
    errors: list[str],
    convert: t.Optional[t.Callable[[str], t.Any]] = None,
) -> t.Any:
    """Read one option of the config file. An unreadable value is reported in errors
    and the default is returned in its place.
    """
    try:
        value = config.get(section, option, fallback=None)
        if value is None:
            return default
        return value if convert is None else convert(value)
    except (configparser.Error, ValueError) as e:
        errors.append(f'Invalid value of {option} in [{section}] of the config file: {e}')
        return default


def _resolve_nice(value: t.Optional[str], config: ConfigParser, errors: list[str]) -> int:
    default_nice = _read_config(config, 'Backup-Section', 'nice', DEFAULT_NICE, errors, _to_integer)
    if value is None:
        return default_nice
    if not is_digits(value):
        # If nice is not an integer, just use default
        logger.warning(f'Ignoring nice value "{value}", using {default_nice}')
        return default_nice
    return int(value)


def _validate_date(value: t.Optional[str], errors: list[str]):
    if value is not None and not is_valid_index_date(value):
        errors.append('Date must be in YYYY.mm.dd format.')


def build_backup_config(args: Namespace, config: ConfigParser) -> BackupConfig:
    """Validate the arguments of the backup utility and merge them with the config file.

    Raises:
        InvalidArgumentsError: with every problem found, before any I/O is done
    """
    errors = []
    if args.shards is not None and not is_digits(args.shards):
        errors.append('Shards must be an integer.')
    if args.replicas is not None and not is_digits(args.replicas):
        errors.append('Replicas must be an integer.')
    if not args.scp_base:
        errors.append('Please provide an SCP user, server, and path with -b.')
    if not args.index_dir:
        errors.append('Please provide an Elasticsearch index directory with -i.')
    _validate_date(args.date, errors)

    shards = args.shards or _read_config(config, 'Backup-Section', 'shards', DEFAULT_SHARDS, errors, _to_integer)
    replicas = args.replicas or _read_config(
        config, 'Backup-Section', 'replicas', DEFAULT_REPLICAS, errors, _to_integer,
    )
    backup_settings = {
        'index_name': args.index_name
        or _read_config(config, 'Backup-Section', 'index-name', DEFAULT_INDEX_NAME, errors),
        'temp_dir': args.temp_dir or _read_config(config, 'Directory-Section', 'temp', DEFAULT_TEMP_DIR, errors),
        'es_url': args.es_url or _read_config(config, 'ES-Section', 'es-url', DEFAULT_ES_URL, errors),
        'nice': _resolve_nice(args.nice, config, errors),
        'restart_command': args.restart_command
        or _read_config(config, 'Backup-Section', 'restart-command', DEFAULT_RESTART_COMMAND, errors),
        'http_timeout': _read_config(config, 'ES-Section', 'http-timeout', DEFAULT_HTTP_TIMEOUT, errors, _to_timeout),
        'log_directory': _read_config(config, 'Directory-Section', 'logs', DEFAULT_LOG_DIR, errors),
        'transfer': TransferConfig.from_config(config, errors),
    }
    if errors:
        raise InvalidArgumentsError(errors)

    return BackupConfig(
        scp_base=args.scp_base,
        index_dir=args.index_dir,
        date=args.date,
        persist=args.persist,
        shards=int(shards),
        replicas=int(replicas),
        **backup_settings,
    )


def build_restore_config(args: Namespace, config: ConfigParser) -> RestoreConfig:
    """Validate the arguments of the restore utility and merge them with the config file.

    Raises:
        InvalidArgumentsError: with every problem found, before any I/O is done
    """
    errors = []
    if not args.scp_base:
        errors.append('Please provide an scp user, server, and path with -b.')
    if not args.index_dir:
        errors.append('Please provide an Elasticsearch index directory with -i.')
    if not args.date:
        errors.append('Please provide a date for restoration with -d.')
    else:
        _validate_date(args.date, errors)

    restore_settings = {
        'index_name': _read_config(config, 'Backup-Section', 'index-name', DEFAULT_INDEX_NAME, errors),
        'temp_dir': args.temp_dir or _read_config(config, 'Directory-Section', 'temp', DEFAULT_TEMP_DIR, errors),
        'nice': _resolve_nice(args.nice, config, errors),
        'log_directory': _read_config(config, 'Directory-Section', 'logs', DEFAULT_LOG_DIR, errors),
        'transfer': TransferConfig.from_config(config, errors),
    }
    if errors:
        raise InvalidArgumentsError(errors)

    return RestoreConfig(
        scp_base=args.scp_base,
        index_dir=args.index_dir,
        date=args.date,
        persist=args.persist,
        es_url=args.es_url,
        **restore_settings,
    )
