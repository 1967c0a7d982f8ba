#!/usr/bin/env python3
"""
Unit tests for the in-memory file store and path helpers.
"""

import os
import shutil
import tempfile
import unittest
from website.exceptions import MemoryLoadError
from website.memory import FileData, MemoryStore, guess_content_type
from website.utility import sanitize_path, url_path_for

class TestSanitizePath(unittest.TestCase):
    """Test cases for request path sanitizing."""

    def test_plain_path_unchanged(self):
        self.assertEqual(sanitize_path("/post/velero-backups/"), "/post/velero-backups/")
        self.assertEqual(sanitize_path("/css/site.min.css"), "/css/site.min.css")

    def test_query_escaping(self):
        self.assertEqual(sanitize_path("/a b"), "/a+b")
        self.assertEqual(sanitize_path("/café"), "/caf%C3%A9")
        self.assertEqual(sanitize_path("/x?y=1"), "/x%3Fy%3D1")

    def test_control_characters_escaped(self):
        sanitized = sanitize_path("/evil\r\npath\t\x00")
        for char in ("\r", "\n", "\t", "\x00"):
            self.assertNotIn(char, sanitized)
        self.assertEqual(sanitized, "/evil%0D%0Apath%09%00")

    def test_url_path_for(self):
        self.assertEqual(url_path_for("."), "/")
        self.assertEqual(url_path_for("post/a/index.html"), "/post/a/index.html")
        self.assertEqual(url_path_for("post\\a"), "/post/a")

class TestMemoryStore(unittest.TestCase):
    """Test cases for loading and looking up the web root."""

    def setUp(self):
        self.webroot = tempfile.mkdtemp()
        self.write("index.html", b"home")
        self.write("post/velero/index.html", b"velero")
        self.write("post/no-index/data.json", b"{}")
        self.write("img/logo.png", b"\x89PNG")
        self.write("my file.txt", b"spaces")
        self.store = MemoryStore()
        self.count = self.store.load(self.webroot)

    def tearDown(self):
        shutil.rmtree(self.webroot)

    def write(self, relpath: str, content: bytes):
        path = os.path.join(self.webroot, relpath)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "wb") as f:
            f.write(content)

    def test_keys(self):
        self.assertEqual(set(self.store.files), {
            "/",
            "/index.html",
            "/post/velero/",
            "/post/velero/index.html",
            "/post/no-index/data.json",
            "/img/logo.png",
            "/my+file.txt",
        })
        self.assertEqual(self.count, 7)
        self.assertEqual(len(self.store), 7)

    def test_directory_without_index_has_no_entry(self):
        self.assertNotIn("/post/no-index/", self.store)
        self.assertNotIn("/post/", self.store)

    def test_lookup_root(self):
        self.assertEqual(self.store.lookup("/").content, b"home")

    def test_lookup_directory(self):
        self.assertEqual(self.store.lookup("/post/velero/").content, b"velero")
        self.assertEqual(self.store.lookup("/post/velero").content, b"velero")
        self.assertEqual(self.store.lookup("/post/velero/index.html").content, b"velero")

    def test_lookup_missing(self):
        self.assertIsNone(self.store.lookup("/post/missing"))
        self.assertIsNone(self.store.lookup("/post/missing/"))
        self.assertIsNone(self.store.lookup("/post/no-index/"))

    def test_lookup_sanitized_key(self):
        self.assertEqual(self.store.lookup(sanitize_path("/my file.txt")).content, b"spaces")

    def test_content_types(self):
        self.assertEqual(self.store.lookup("/").content_type, "text/html; charset=utf-8")
        self.assertEqual(self.store.lookup("/img/logo.png").content_type, "image/png")
        self.assertEqual(self.store.lookup("/post/no-index/data.json").content_type, "application/json; charset=utf-8")

    def test_reload_replaces_contents(self):
        os.remove(os.path.join(self.webroot, "my file.txt"))
        self.store.load(self.webroot)
        self.assertNotIn("/my+file.txt", self.store)

    def test_total_bytes(self):
        self.assertEqual(self.store.total_bytes(), len(b"home") * 2 + len(b"velero") * 2 + 2 + 4 + 6)

    def test_missing_root(self):
        with self.assertRaises(MemoryLoadError):
            MemoryStore().load(os.path.join(self.webroot, "nope"))

class TestFileData(unittest.TestCase):

    def test_etag_is_unix_time(self):
        fd = FileData(b"x", "text/plain")
        self.assertEqual(fd.etag, str(int(fd.mod_time.timestamp())))
        self.assertEqual(len(fd), 1)

    def test_unknown_extension(self):
        self.assertEqual(guess_content_type("blob.unknownext"), "application/octet-stream")

if __name__ == '__main__':
    unittest.main()
