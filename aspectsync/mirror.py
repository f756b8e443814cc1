import collections
import os
from pathlib import Path
import shutil

from . import compat
from .error import MirrorFailedError, RelativePathError, SyncFailedError

DIR = 'dir'
FILE = 'file'
LINK = 'link'
SPECIAL = 'special'

TreeEntry = collections.namedtuple('TreeEntry', ['path', 'relpath', 'kind'])


def _raise(e):
    raise e


def walk_tree(root):
    '''Yield a TreeEntry for everything under root, depth first and top down,
    so that a directory always comes before anything inside it. Siblings come
    out sorted. Symlinks are reported as links and never followed. Errors from
    listing a directory are raised rather than skipped.'''
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames.sort()
        for name in sorted(dirnames + filenames):
            path = os.path.join(dirpath, name)
            if os.path.islink(path):
                kind = LINK
            elif name in dirnames:
                kind = DIR
            elif os.path.isfile(path):
                kind = FILE
            else:
                # FIFOs, sockets and devices.
                kind = SPECIAL
            yield TreeEntry(path, relative_path(path, root), kind)


def relative_path(path, root):
    try:
        relpath = Path(path).relative_to(root)
    except ValueError:
        raise RelativePathError(path)
    if not relpath.parts or '..' in relpath.parts:
        raise RelativePathError(path)
    return relpath


def mirror_tree(source, dest, handle=None):
    '''Copy everything under source into dest, creating dest if needed. Files
    already in dest are overwritten when the source has the same path, and
    left alone otherwise. Any OSError aborts the whole copy and is raised as a
    MirrorFailedError.

    No lock is held on the source while we walk it. If something else
    modifies the source in the meantime, the copy may be inconsistent.'''
    source = os.path.abspath(source)
    dest = os.path.abspath(dest)
    # A dest inside the source would get walked again as it's being filled.
    real_source = os.path.realpath(source)
    real_dest = os.path.realpath(dest)
    if os.path.commonpath([real_source, real_dest]) == real_source:
        raise SyncFailedError(
            'Could not copy aspects: destination {} is inside {}', dest,
            source)
    try:
        compat.makedirs(dest)
        for entry in walk_tree(source):
            _mirror_entry(entry, dest, handle)
    except OSError as e:
        raise MirrorFailedError(e) from e


def _mirror_entry(entry, dest, handle):
    target = os.path.join(dest, str(entry.relpath))
    if entry.kind == DIR:
        # Replace a link to a dir, or the whole subtree lands outside dest.
        if os.path.islink(target):
            os.remove(target)
        compat.makedirs(target)
        _log(handle, 'dir  {}/', entry.relpath.as_posix())
    elif entry.kind == LINK:
        link_target = os.readlink(entry.path)
        if os.path.islink(target) or os.path.isfile(target):
            os.remove(target)
        os.symlink(link_target, target)
        _log(handle, 'link {} -> {}', entry.relpath.as_posix(), link_target)
    elif entry.kind == SPECIAL:
        # Opening a FIFO for reading would block forever.
        raise OSError('Not a regular file: {}'.format(entry.path))
    else:
        # Replace a link rather than writing through it.
        if os.path.islink(target):
            os.remove(target)
        _copy_file(entry.path, target)
        _log(handle, 'file {}', entry.relpath.as_posix())


def _copy_file(source, target):
    # Mode 'wb' creates or truncates, so an existing file is fully replaced.
    with open(source, 'rb') as input:
        with open(target, 'wb') as output:
            shutil.copyfileobj(input, output)


def _log(handle, message, *args):
    if handle is not None:
        handle.write(message.format(*args) + '\n')
