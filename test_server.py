#!/usr/bin/env python3
"""
Unit tests for the website server: file serving, middleware and probes.
"""

import gzip
import os
import shutil
import tempfile
import unittest
from prometheus_client import REGISTRY
from website import create_app, create_metrics_app
from website.config import Config
from website.exceptions import MemoryLoadError
from website.memory import MemoryStore

HOME = b"<html><body>Support Tools</body></html>"
POST = b"<html><body>Velero backups</body></html>"
CSS = b"body { color: black; }"

class SiteMixin:
    """Builds a rendered web root and an app serving it."""

    use_memory = False

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.webroot = os.path.join(self.tmpdir, "public")
        self.write("index.html", HOME)
        self.write("post/velero/index.html", POST)
        self.write("css/site.css", CSS)
        self.access_log_path = os.path.join(self.tmpdir, "logs", "access.log")
        self.config = Config({
            "WEBROOT": self.webroot,
            "USE_MEMORY": "true" if self.use_memory else "false",
            "LOG_FILE_PATH": self.access_log_path,
            "VERSION": "v1.2.3",
            "GIT_COMMIT": "abc1234",
            "BUILD_TIME": "2025-01-01T00:00:00Z",
        })
        self.app = create_app(self.config)
        self.app.testing = True
        self.client = self.app.test_client()

    def tearDown(self):
        self.app.extensions["access_log"].close()
        shutil.rmtree(self.tmpdir)

    def write(self, relpath: str, content: bytes):
        path = os.path.join(self.webroot, relpath)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "wb") as f:
            f.write(content)

    def access_log_lines(self):
        with open(self.access_log_path, encoding="utf-8") as f:
            return f.read().splitlines()

class TestFilesystemServing(SiteMixin, unittest.TestCase):
    """Test cases for serving straight from the web root."""

    def test_home(self):
        resp = self.client.get("/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data, HOME)

    def test_directory_redirect(self):
        resp = self.client.get("/post/velero")
        self.assertEqual(resp.status_code, 301)
        self.assertTrue(resp.headers["Location"].endswith("/post/velero/"))

    def test_directory_index(self):
        resp = self.client.get("/post/velero/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data, POST)

    def test_static_file(self):
        resp = self.client.get("/css/site.css")
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.content_type.startswith("text/css"))

    def test_not_found(self):
        resp = self.client.get("/post/missing/")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.data, b"404 page not found\n")

    def test_gzip(self):
        resp = self.client.get("/", headers={"Accept-Encoding": "gzip, deflate"})
        self.assertEqual(resp.headers["Content-Encoding"], "gzip")
        self.assertIn("Accept-Encoding", resp.headers["Vary"])
        self.assertEqual(gzip.decompress(resp.data), HOME)

    def test_no_gzip_without_accept_encoding(self):
        resp = self.client.get("/")
        self.assertNotIn("Content-Encoding", resp.headers)

class TestMemoryServing(SiteMixin, unittest.TestCase):
    """Test cases for serving the preloaded web root."""

    use_memory = True

    def test_store_loaded(self):
        store = self.app.extensions["memory_store"]
        self.assertIsInstance(store, MemoryStore)
        self.assertIn("/post/velero/index.html", store)

    def test_home_headers(self):
        resp = self.client.get("/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data, HOME)
        self.assertEqual(resp.headers["Cache-Control"], "max-age=31536000")
        self.assertEqual(resp.headers["X-Content-Type-Options"], "nosniff")
        self.assertEqual(resp.headers["Content-Length"], str(len(HOME)))
        self.assertIn("Last-Modified", resp.headers)
        self.assertRegex(resp.headers["ETag"], r'^"\d+"$')
        self.assertTrue(resp.content_type.startswith("text/html"))

    def test_directory_without_slash(self):
        resp = self.client.get("/post/velero")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data, POST)

    def test_conditional_request(self):
        etag = self.client.get("/").headers["ETag"]
        resp = self.client.get("/", headers={"If-None-Match": etag})
        self.assertEqual(resp.status_code, 304)
        self.assertEqual(resp.data, b"")

    def test_conditional_request_with_gzip(self):
        etag = self.client.get("/").headers["ETag"]
        resp = self.client.get("/", headers={"If-None-Match": etag, "Accept-Encoding": "gzip"})
        self.assertEqual(resp.status_code, 304)
        self.assertNotIn("Content-Encoding", resp.headers)

    def test_not_found(self):
        self.assertEqual(self.client.get("/nope.html").status_code, 404)

    def test_gzip(self):
        resp = self.client.get("/css/site.css", headers={"Accept-Encoding": "gzip"})
        self.assertEqual(resp.headers["Content-Encoding"], "gzip")
        self.assertEqual(gzip.decompress(resp.data), CSS)

    def test_missing_webroot_is_fatal(self):
        config = Config({"WEBROOT": os.path.join(self.tmpdir, "missing"), "USE_MEMORY": "true",
                         "LOG_FILE_PATH": self.access_log_path})
        with self.assertRaises(MemoryLoadError):
            create_app(config)

class TestMiddleware(SiteMixin, unittest.TestCase):
    """Test cases for access logging and request metrics."""

    def test_access_log_line(self):
        self.client.get("/css/site.css", headers={
            "CF-Connecting-IP": "203.0.113.7",
            "X-Forwarded-For": "198.51.100.1",
            "Referer": "https://support.tools/",
            "User-Agent": "unittest-agent",
        })
        lines = self.access_log_lines()
        self.assertEqual(len(lines), 1)
        line = lines[0]
        self.assertTrue(line.startswith("localhost 203.0.113.7 ["))
        self.assertIn(f'"GET /css/site.css HTTP/1.1" 200 {len(CSS)} "https://support.tools/" "unittest-agent"', line)

    def test_access_log_forwarded_for(self):
        self.client.get("/", headers={"X-Forwarded-For": "198.51.100.1, 10.0.0.1"})
        self.assertIn(" 198.51.100.1 [", self.access_log_lines()[0])

    def test_access_log_records_404(self):
        self.client.get("/missing", query_string={"q": "1"})
        self.assertIn('"GET /missing?q=1 HTTP/1.1" 404', self.access_log_lines()[0])

    def test_request_metrics(self):
        path = "/css/site.css"
        before = REGISTRY.get_sample_value("http_requests_total", {"path": path}) or 0.0
        self.client.get(path)
        self.client.get(path)
        after = REGISTRY.get_sample_value("http_requests_total", {"path": path})
        self.assertEqual(after - before, 2.0)
        self.assertIsNotNone(REGISTRY.get_sample_value("http_response_duration_seconds_count", {"path": path}))

    def test_metrics_label_is_sanitized(self):
        self.write("a b.txt", b"spaced")
        self.assertEqual(self.client.get("/a b.txt").status_code, 200)
        self.assertIsNotNone(REGISTRY.get_sample_value("http_requests_total", {"path": "/a+b.txt"}))

    def test_not_found_shares_one_series(self):
        before = REGISTRY.get_sample_value("http_requests_total", {"path": "<not-found>"}) or 0.0
        self.client.get("/wp-login.php")
        self.client.get("/.env")
        after = REGISTRY.get_sample_value("http_requests_total", {"path": "<not-found>"})
        self.assertEqual(after - before, 2.0)
        self.assertIsNone(REGISTRY.get_sample_value("http_requests_total", {"path": "/wp-login.php"}))

    def test_probes_are_not_logged(self):
        self.client.get("/healthz")
        self.assertEqual(self.access_log_lines(), [])

class TestHealthcheck(unittest.TestCase):
    """Test cases for the metrics-port app."""

    def setUp(self):
        config = Config({"VERSION": "v1.2.3", "GIT_COMMIT": "abc1234", "BUILD_TIME": "2025-01-01T00:00:00Z"})
        self.client = create_metrics_app(config).test_client()

    def test_healthz(self):
        resp = self.client.get("/healthz")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data, b"ok")
        self.assertTrue(resp.content_type.startswith("text/plain"))

    def test_version(self):
        resp = self.client.get("/version")
        self.assertEqual(resp.get_json(), {
            "version": "v1.2.3",
            "gitCommit": "abc1234",
            "buildTime": "2025-01-01T00:00:00Z",
        })

    def test_metrics(self):
        resp = self.client.get("/metrics")
        self.assertEqual(resp.status_code, 200)
        self.assertIn(b"http_requests_total", resp.data)
        self.assertTrue(resp.content_type.startswith("text/plain"))

    def test_no_site_routes(self):
        self.assertEqual(self.client.get("/").status_code, 404)

if __name__ == '__main__':
    unittest.main()
