import os

from .error import PrintableError
from . import display
from .locator import ASPECT_DIR_VAR
from . import parser
from .writer import DEFAULT_WRITER_NAME


class Runtime:
    '''Everything a command needs to know, merged from the command line, the
    environment, and the project file, in that order of precedence.'''

    def __init__(self, args, env):
        if args['--quiet'] and args['--verbose']:
            raise PrintableError(
                "aspectsync can't be quiet and verbose at the same time.")
        self.quiet = args['--quiet']
        self.verbose = args['--verbose']
        self.env = env

        self.project_file = _get_project_file(args)
        if self.project_file is not None:
            self.config = parser.parse_file(self.project_file)
        else:
            self.config = parser.EMPTY_CONFIG

        # The env var is left to the locator, so that it still sits between
        # the flag/project file setting and the bundled default.
        self.aspect_dir = args['--aspect-dir'] or (
            None if env.get(ASPECT_DIR_VAR) else self.config.aspect_dir)
        self.writer_name = (args.get('--writer') or self.config.writer
                            or DEFAULT_WRITER_NAME)
        self._dest_arg = args.get('<dest>')

        self.display = get_display(args)

    def destination(self):
        if self._dest_arg:
            return os.path.abspath(self._dest_arg)
        if self.config.destination:
            return self.config.destination
        raise CommandLineError(
            'No destination given, and no "destination" field in {}.',
            self.project_file or parser.DEFAULT_PROJECT_FILE_NAME)


def _get_project_file(args):
    explicit_file = args['--file']
    if explicit_file:
        if not os.path.isfile(explicit_file):
            raise CommandLineError("Can't find project file {}.",
                                   explicit_file)
        return os.path.abspath(explicit_file)
    return find_project_file(os.getcwd(), parser.DEFAULT_PROJECT_FILE_NAME)


def find_project_file(start_dir, basename):
    '''Walk up the directory tree until we find a file of the given name.
    Returns None if there isn't one.'''
    prefix = os.path.abspath(start_dir)
    while True:
        candidate = os.path.join(prefix, basename)
        if os.path.isfile(candidate):
            return candidate
        if os.path.exists(candidate):
            raise PrintableError(
                "Found {}, but it's not a file.", candidate)
        if os.path.dirname(prefix) == prefix:
            # We've walked all the way to the top.
            return None
        prefix = os.path.dirname(prefix)


def get_display(args):
    if args['--verbose']:
        return display.VerboseDisplay()
    return display.QuietDisplay()


class CommandLineError(PrintableError):
    pass
