import collections
import os
import sys
import yaml

from .error import PrintableError

DEFAULT_PROJECT_FILE_NAME = 'aspectsync.yaml'

Config = collections.namedtuple('Config',
                                ['aspect_dir', 'destination', 'writer'])

EMPTY_CONFIG = Config(None, None, None)


class ParserError(PrintableError):
    pass


def parse_file(file_path):
    '''Parse a project file. Relative paths in it are interpreted from the
    directory containing the file, not from the cwd.'''
    with open(file_path) as f:
        config = parse_string(f.read())
    project_dir = os.path.dirname(os.path.abspath(file_path))
    return config._replace(
        aspect_dir=_join_relative(project_dir, config.aspect_dir),
        destination=_join_relative(project_dir, config.destination))


def parse_string(yaml_str):
    try:
        blob = yaml.safe_load(yaml_str)
    except yaml.YAMLError as e:
        raise ParserError("YAML parser error:\n\n{}", e) from e
    if blob is None:
        blob = {}
    return _parse_toplevel(blob)


def _parse_toplevel(blob):
    aspect_dir = _extract_optional_string_field(blob, 'aspect dir')
    destination = _extract_optional_string_field(blob, 'destination')
    writer = _extract_optional_string_field(blob, 'writer')
    if blob:
        raise ParserError("Unknown toplevel fields: {}",
                          ", ".join(str(key) for key in blob.keys()))
    return Config(aspect_dir, destination, writer)


def _extract_optional_string_field(blob, name):
    value = typesafe_pop(blob, name, None)
    if value is not None and not isinstance(value, str):
        raise ParserError('"{}" field must be a string.', name)
    return value


def _join_relative(project_dir, path):
    if path is None:
        return None
    return os.path.join(project_dir, os.path.expanduser(path))


def typesafe_pop(d, field, default=object()):
    if not isinstance(d, dict):
        raise ParserError('Error parsing project file: {} is not a map.',
                          repr(d))
    if default == typesafe_pop.__defaults__[0]:
        return d.pop(field)
    else:
        return d.pop(field, default)


# Code for the duplicate keys warning

DuplicatedKey = collections.namedtuple('DuplicatedKey',
                                       ['key', 'first_line', 'second_line'])


def _get_duplicate_keys(yaml_text):
    '''The project file is flat, so a key seen twice at the top level is a
    duplicate. yaml.safe_load silently keeps the last one.'''
    duplicates = []
    seen = {}
    for line_index, line in enumerate(yaml_text.split('\n')):
        line_num = line_index + 1
        # Good enough for a warning. Quoted keys containing '#' will confuse
        # this.
        if '#' in line:
            line = line[:line.index('#')]
        if ':' not in line or line[:1] in (' ', '-'):
            continue
        key = line.split(':')[0].strip()
        if key in seen:
            duplicates.append(DuplicatedKey(key, seen[key], line_num))
        seen[key] = line_num
    return duplicates


def _warn(s, *args, **kwargs):
    print(s.format(*args, **kwargs), file=sys.stderr)


def warn_duplicate_keys(file_path):
    with open(file_path) as f:
        text = f.read()
    duplicates = _get_duplicate_keys(text)
    if not duplicates:
        return
    _warn(
        'WARNING: Duplicate keys found in {}\n'
        'These will overwrite each other:', file_path)
    for duplicate in duplicates:
        _warn('  "{}" on lines {} and {}', *duplicate)
