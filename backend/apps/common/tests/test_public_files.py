import tempfile
import unittest
from pathlib import Path

from django.http import Http404
from django.test import RequestFactory, override_settings

from apps.common.views import public_file


class PublicFileTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        (self.root / 'index.html').write_text('<h1>home</h1>')
        (self.root / 'success.html').write_text('<h1>paid</h1>')
        self.factory = RequestFactory()
        self.override = override_settings(PUBLIC_DIR=self.root)
        self.override.enable()

    def tearDown(self):
        self.override.disable()
        self._tmp.cleanup()

    @staticmethod
    def _body(response):
        return b''.join(response.streaming_content)

    def test_serves_file_verbatim(self):
        response = public_file(self.factory.get('/success.html'), path='success.html')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self._body(response), b'<h1>paid</h1>')

    def test_root_serves_index(self):
        response = public_file(self.factory.get('/'), path='')
        self.assertEqual(self._body(response), b'<h1>home</h1>')

    def test_missing_file_is_404(self):
        with self.assertRaises(Http404):
            public_file(self.factory.get('/nope.html'), path='nope.html')

    def test_post_not_allowed(self):
        response = public_file(self.factory.post('/success.html'), path='success.html')
        self.assertEqual(response.status_code, 405)
