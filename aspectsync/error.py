from contextlib import contextmanager
from textwrap import indent


class PrintableError(Exception):
    def __init__(self, message, *args, **kwargs):
        self.message = message.format(*args, **kwargs)

    def __str__(self):
        return self.message

    def add_context(self, context):
        self.message = 'In {}:\n{}'.format(context, indent(self.message, '  '))


@contextmanager
def error_context(context):
    try:
        yield
    except PrintableError as e:
        e.add_context(context)
        raise


class SyncFailedError(PrintableError):
    '''The one failure type a sync step reports to its caller. The underlying
    exception, if there was one, is kept in `cause`.'''

    def __init__(self, message, *args, cause=None, **kwargs):
        super().__init__(message, *args, **kwargs)
        self.cause = cause


class SourceUnavailableError(SyncFailedError):
    pass


class RelativePathError(SyncFailedError):
    def __init__(self, path):
        super().__init__('Could not determine relative path of {}', path)
        self.path = path


class MirrorFailedError(SyncFailedError):
    def __init__(self, cause):
        super().__init__('Could not copy aspects: {}', cause, cause=cause)
