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

import argparse
import sys
import typing as t
from copy import deepcopy


class BaseArg(t.TypedDict):
    flag: str
    help: str
    default: t.Any


class Arg(BaseArg, total=False):
    dest: str
    metavar: str
    type: type
    action: t.Literal['store_true', 'store_false']


class ScriptArgumentParser(argparse.ArgumentParser):
    """Argument parser which reports usage errors with exit code 1 and the full help text."""

    def error(self, message: str) -> t.NoReturn:
        sys.stdout.write(f'{message}\n')
        self.print_help(sys.stdout)
        self.exit(1)


class ScriptConfig:
    """
    A class for setting configuration options
    for the command line utilities.
    """

    def __init__(
        self,
        help: str,
        args: t.Optional[list[Arg]],
        arglist: t.Optional[list[str]],
        epilog: t.Optional[str] = None,
    ):
        self.copy_info = {
            'help': deepcopy(help),
            'args': deepcopy(args),
            'arglist': deepcopy(arglist),
            'epilog': deepcopy(epilog),
        }

        # We need to make copies of data, so that we don't affect the original info,
        # that we used for ScriptConfig initialization.
        args = deepcopy(args)
        arglist = deepcopy(arglist)

        self.parser = ScriptArgumentParser(
            description=help,
            epilog=epilog,
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        if args:
            self._add_args(args)
        self.args = self.parser.parse_args(arglist)

    def _add_args(self, args: list[Arg]):
        for arg in args:
            flag = arg.pop('flag')
            self.parser.add_argument(flag, **arg)

    def print_help(self):
        self.parser.print_help(sys.stdout)

    def copy(self, arglist: t.Optional[list[str]] = None):
        """Create a new config from the same definition, optionally parsing a different argument list."""
        copy_info = deepcopy(self.copy_info)
        if arglist is not None:
            copy_info['arglist'] = arglist
        return ScriptConfig(**copy_info)
