import collections
import io
import os
from unittest import mock

from aspectsync import display
from aspectsync.error import SourceUnavailableError
from aspectsync import writer

import shared
from shared import assert_contents

FakeRuntime = collections.namedtuple('FakeRuntime',
                                     ['aspect_dir', 'env', 'display'])


class WriterTest(shared.AspectSyncTest):
    def setUp(self):
        self.output = io.StringIO()

    def runtime(self, aspect_dir, env=None):
        return FakeRuntime(aspect_dir, env or {},
                           display.QuietDisplay(self.output))

    def test_default_writer_name(self):
        self.assertEqual('Default Aspects',
                         writer.DefaultAspectWriter.name())
        self.assertIs(writer.DefaultAspectWriter,
                      writer.WRITERS['Default Aspects'])

    def test_get_writer(self):
        self.assertIsInstance(writer.get_writer('Default Aspects'),
                              writer.DefaultAspectWriter)
        with self.assertRaises(writer.UnknownWriterError) as cm:
            writer.get_writer('Nope')
        self.assertIn('Default Aspects', cm.exception.message)

    def test_register_writer(self):
        with mock.patch.dict(writer.WRITERS):
            @writer.register_writer
            class OtherWriter(writer.AspectWriter):
                @classmethod
                def name(cls):
                    return 'Other Aspects'

            self.assertIsInstance(writer.get_writer('Other Aspects'),
                                  OtherWriter)
            with self.assertRaises(ValueError):
                writer.register_writer(OtherWriter)
        self.assertNotIn('Other Aspects', writer.WRITERS)

    def test_write_mirrors_the_aspect_dir(self):
        source = shared.create_dir({'a.bzl': 'a', 'sub/b.bzl': 'b'})
        dest = shared.create_dir({'a.bzl': 'old', 'keep': 'keep'})
        writer.DefaultAspectWriter().write(dest, self.runtime(source))
        assert_contents(dest, {'a.bzl': 'a', 'sub/b.bzl': 'b',
                               'keep': 'keep'})
        # QuietDisplay swallows the job output.
        self.assertEqual('', self.output.getvalue())

    def test_write_bundled_aspects(self):
        dest = shared.create_dir()
        writer.DefaultAspectWriter().write(dest, self.runtime(None))
        self.assertTrue(os.path.isfile(os.path.join(dest, 'BUILD')))
        self.assertTrue(
            os.path.isfile(os.path.join(dest, 'intellij_info.bzl')))

    def test_missing_source_leaves_dest_alone(self):
        missing = os.path.join(shared.create_dir(), 'missing')
        dest = os.path.join(shared.create_dir(), 'dest')
        with self.assertRaises(SourceUnavailableError):
            writer.DefaultAspectWriter().write(dest, self.runtime(missing))
        self.assertFalse(os.path.exists(dest))

    def test_existing_dest_untouched_when_source_missing(self):
        missing = os.path.join(shared.create_dir(), 'missing')
        dest = shared.create_dir({'a': 'a'})
        with self.assertRaises(SourceUnavailableError):
            writer.DefaultAspectWriter().write(dest, self.runtime(missing))
        assert_contents(dest, {'a': 'a'})
