#! /usr/bin/env python3

import collections
import json
import os
import sys

import docopt

from . import compat
from .error import PrintableError
from . import locator
from . import parser
from .runtime import Runtime
from . import writer

__doc__ = '''\
Usage:
    aspectsync [-hqv] [--file=<file>] [--aspect-dir=<dir>]
               <command> [<args>...]
    aspectsync [--help|--version]

Commands:
    sync     copy the aspects directory into a destination
    locate   print the aspects directory that sync would copy from
    writers  list the available aspect writers
    help     show help for subcommands, same as -h/--help

Options:
    -h --help             so much help
    -q --quiet            don't print anything
    -v --verbose          print everything

    --file=<file>
        The project file to use instead of searching the current dir and its
        parents for 'aspectsync.yaml'.
    --aspect-dir=<dir>
        The directory to copy aspects from. Defaults to the "aspect dir"
        field of the project file, or $ASPECTSYNC_ASPECT_DIR if it's defined,
        or else the aspects bundled with aspectsync.
'''


def aspectsync_command(name, doc):
    def decorator(f):
        COMMAND_FNS[name] = f
        COMMAND_DOCS[name] = doc
        return f

    return decorator


COMMAND_FNS = {}
COMMAND_DOCS = {}


@aspectsync_command('sync', '''\
Usage:
    aspectsync sync [<dest>] [-hqv] [--writer=<name>]

Writes the aspects directory into <dest>, or into the "destination" of
your project file. Existing files with the same names are overwritten.
Other files in the destination are left alone.

Options:
    -h --help          explain these confusing flags
    -q --quiet         don't print anything
    -v --verbose       print every file that gets written
    --writer=<name>    the writer to use, "Default Aspects" if unset
''')
def do_sync(params):
    runtime = params.runtime
    aspect_writer = writer.get_writer(runtime.writer_name)
    dest = runtime.destination()
    aspect_writer.write(dest, runtime)
    if not runtime.quiet:
        runtime.display.print('wrote {} to {}'.format(
            aspect_writer.name(), dest))


@aspectsync_command('locate', '''\
Usage:
    aspectsync locate [-h]

Prints the aspects directory that sync would copy from.

Options:
    -h --help  what were they thinking?
''')
def do_locate(params):
    runtime = params.runtime
    path = locator.require_aspect_directory(runtime.aspect_dir, runtime.env)
    print(path)


@aspectsync_command('writers', '''\
Usage:
    aspectsync writers [-h] [--json]

Lists the aspect writers that sync can use.

Options:
    -h --help  I'm not feeling creative :)
    --json     print output as JSON
''')
def do_writers(params):
    names = sorted(writer.WRITERS)
    if params.args['--json']:
        print(json.dumps(names))
    else:
        for name in names:
            print(name)


def get_version():
    version_file = os.path.join(compat.MODULE_ROOT, 'VERSION')
    with open(version_file) as f:
        return f.read().strip()


def print_red(*args, **kwargs):
    if compat.is_fancy_terminal():
        sys.stdout.write('\x1b[31m')
    print(*args, **kwargs)
    if compat.is_fancy_terminal():
        sys.stdout.write('\x1b[39m')


def maybe_print_help_and_return(args):
    if args['--version']:
        print(get_version())
        return 0

    help = args['--help']
    command = args['<command>']
    if command == "help":
        help = True
        help_args = args['<args>']
        command = help_args[0] if help_args else None

    # no explicit command, just print toplevel help
    if command is None:
        print(__doc__, end='')
        return 0

    # bad command, or help for a bad command
    if command not in COMMAND_DOCS:
        print(__doc__, end='', file=sys.stderr)
        return 1

    if help:
        print(COMMAND_DOCS[command], end='')
        return 0

    return None


def merged_args_dicts(global_args, subcommand_args):
    '''Flags like --verbose can be given before or after the subcommand. A
    False from the subcommand parse must not override a True from the toplevel
    parse.'''
    merged = global_args.copy()
    for key, val in subcommand_args.items():
        if key not in merged:
            merged[key] = val
        elif type(merged[key]) is type(val) is bool:
            merged[key] = merged[key] or val
        else:
            raise RuntimeError("Unmergable args.")
    return merged


def docopt_parse_args(argv):
    args = docopt.docopt(__doc__, argv, help=False, options_first=True)
    command = args['<command>']
    # Skip the subcommand parse for `aspectsync badcommand`, for
    # `aspectsync help <cmd>`, and for `aspectsync --help sync`.
    if command in COMMAND_DOCS and not args['--help']:
        command_doc = COMMAND_DOCS[command]
        command_argv = [command] + args['<args>']
        command_args = docopt.docopt(command_doc, command_argv, help=False)
        args = merged_args_dicts(args, command_args)
    return args


CommandParams = collections.namedtuple('CommandParams', ['args', 'runtime'])


# Called as a setup.py entry point, or from __main__.py
# (`python3 -m aspectsync`).
def main(*, argv=None, env=None, nocatch=False):
    if argv is None:
        argv = sys.argv[1:]
    if env is None:
        env = os.environ.copy()

    args = docopt_parse_args(argv)
    command = args['<command>']

    ret = maybe_print_help_and_return(args)
    if ret is not None:
        return ret

    try:
        runtime = Runtime(args, env)
        if runtime.project_file and not args['--quiet']:
            parser.warn_duplicate_keys(runtime.project_file)
        params = CommandParams(args, runtime)
        COMMAND_FNS[command](params)
    except PrintableError as e:
        if args['--verbose'] or nocatch:
            # Just allow the stacktrace to print if verbose, or in testing.
            raise
        print_red(e.message, end='' if e.message.endswith('\n') else '\n')
        return 1
