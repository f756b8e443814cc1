import os

from . import compat
from .error import SourceUnavailableError

ASPECT_DIR_VAR = 'ASPECTSYNC_ASPECT_DIR'
BUNDLED_ASPECT_DIR = os.path.join(compat.MODULE_ROOT, 'resources', 'aspects')


def locate_aspect_directory(explicit=None, env=None):
    '''Find the directory that aspects get copied from. An explicit setting
    wins over $ASPECTSYNC_ASPECT_DIR, which wins over the copy bundled with
    this package. Returns None if the chosen candidate isn't a directory. A
    bad explicit or env setting does not fall back to the bundled copy,
    because that would quietly sync the wrong aspects.'''
    if env is None:
        env = os.environ
    candidate = explicit or env.get(ASPECT_DIR_VAR) or BUNDLED_ASPECT_DIR
    if not os.path.isdir(candidate):
        return None
    return os.path.abspath(candidate)


def require_aspect_directory(explicit=None, env=None):
    path = locate_aspect_directory(explicit, env)
    if path is None:
        raise SourceUnavailableError('Could not find aspect directory')
    return path
