import os
import sys


# Resolve the package dir once at import time, so that the bundled resources
# are still found after the process changes its working directory.
MODULE_ROOT = os.path.abspath(os.path.dirname(__file__))


def makedirs(path):
    '''Create a directory and any missing parents. An existing directory is
    fine. Anything else at that path (a file, a dangling link) raises.'''
    path = str(path)  # compatibility with pathlib
    if not os.path.isdir(path):
        os.makedirs(path)


def is_fancy_terminal():
    '''The Windows terminal does not support the color codes we print errors
    with. This is a quick and dirty way to make sure we default to plain
    output there, and when stdout is redirected.'''
    return sys.stdout.isatty() and os.name != 'nt'
