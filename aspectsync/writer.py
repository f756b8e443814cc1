from .error import PrintableError
from .locator import require_aspect_directory
from .mirror import mirror_tree

DEFAULT_WRITER_NAME = 'Default Aspects'

# Writer classes, keyed by the name they report. Callers pick a writer by
# name, so names have to be unique.
WRITERS = {}


def register_writer(cls):
    name = cls.name()
    if name in WRITERS:
        raise ValueError('Writer "{}" is already registered.'.format(name))
    WRITERS[name] = cls
    return cls


def get_writer(name):
    if name not in WRITERS:
        raise UnknownWriterError(
            'Unknown writer "{}". Known writers: {}', name,
            ', '.join(sorted(WRITERS)))
    return WRITERS[name]()


class AspectWriter:
    '''A strategy for putting the aspects directory in place at a sync
    destination.'''

    @classmethod
    def name(cls):
        raise NotImplementedError

    def write(self, dest, runtime):
        raise NotImplementedError


@register_writer
class DefaultAspectWriter(AspectWriter):
    '''Copies the located aspects directory over dest. Files that are already
    in dest are overwritten, and nothing is ever deleted.'''

    @classmethod
    def name(cls):
        return DEFAULT_WRITER_NAME

    def write(self, dest, runtime):
        # Locate first, so a missing source never touches dest.
        source = require_aspect_directory(runtime.aspect_dir, runtime.env)
        with runtime.display.get_handle(self.name()) as handle:
            mirror_tree(source, dest, handle)


class UnknownWriterError(PrintableError):
    pass
