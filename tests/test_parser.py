import io
import os
from textwrap import dedent
from unittest import mock

from aspectsync import parser
from aspectsync.parser import Config, parse_string, ParserError

import shared


class ParserTest(shared.AspectSyncTest):
    def test_parse_empty_file(self):
        self.assertEqual(Config(None, None, None), parse_string(''))

    def test_parse_all_fields(self):
        config = parse_string(dedent('''\
            aspect dir: tools/aspects
            destination: .aspects
            writer: Default Aspects
            '''))
        self.assertEqual('tools/aspects', config.aspect_dir)
        self.assertEqual('.aspects', config.destination)
        self.assertEqual('Default Aspects', config.writer)

    def test_unknown_fields_are_errors(self):
        with self.assertRaises(ParserError) as cm:
            parse_string('junk: 5\n')
        self.assertIn('junk', cm.exception.message)

    def test_non_string_field(self):
        with self.assertRaises(ParserError):
            parse_string('destination: [a, b]\n')

    def test_toplevel_must_be_a_map(self):
        with self.assertRaises(ParserError):
            parse_string('- a\n- b\n')

    def test_bad_yaml(self):
        with self.assertRaises(ParserError) as cm:
            parse_string('destination: {a\n')
        self.assertTrue(cm.exception.message.startswith('YAML parser error'))

    def test_parse_file_paths_are_relative_to_the_file(self):
        project_dir = shared.create_dir({
            parser.DEFAULT_PROJECT_FILE_NAME: dedent('''\
                aspect dir: ../aspects
                destination: /abs/dest
                '''),
        })
        config = parser.parse_file(
            os.path.join(project_dir, parser.DEFAULT_PROJECT_FILE_NAME))
        self.assertEqual(os.path.join(project_dir, '../aspects'),
                         config.aspect_dir)
        self.assertEqual('/abs/dest', config.destination)
        self.assertIsNone(config.writer)

    def test_duplicate_keys_warning(self):
        project_dir = shared.create_dir({
            'dup.yaml': dedent('''\
                destination: a  # first
                writer: w
                destination: b
                '''),
        })
        stderr = io.StringIO()
        with mock.patch('sys.stderr', stderr):
            parser.warn_duplicate_keys(os.path.join(project_dir, 'dup.yaml'))
        self.assertIn('"destination" on lines 1 and 3', stderr.getvalue())

    def test_no_duplicate_keys_no_warning(self):
        project_dir = shared.create_dir({'ok.yaml': 'destination: a\n'})
        stderr = io.StringIO()
        with mock.patch('sys.stderr', stderr):
            parser.warn_duplicate_keys(os.path.join(project_dir, 'ok.yaml'))
        self.assertEqual('', stderr.getvalue())
