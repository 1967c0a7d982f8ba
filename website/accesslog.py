# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

import os
import logging
import threading
from datetime import datetime, timezone
from typing import Optional, TextIO
from urllib.parse import quote
from flask import Request, Response
from .utility import sanitize_log_field

logger = logging.getLogger(__name__)

TIME_FORMAT = "%d/%b/%Y:%H:%M:%S %z"

def client_ip(request: Request) -> str:
    """The real client address: Cloudflare header, then the first proxy hop, then the socket peer."""
    ip = request.headers.get("CF-Connecting-IP")
    if not ip and "X-Forwarded-For" in request.headers:
        ip = request.headers["X-Forwarded-For"].split(",")[0].strip()
    return ip or request.remote_addr or "-"

def request_uri(request: Request) -> str:
    """The request target as the client sent it, still percent-escaped."""
    raw = request.environ.get("RAW_URI") or request.environ.get("REQUEST_URI")
    if raw:
        return raw
    uri = quote(request.path)
    if request.query_string:
        uri += "?" + request.query_string.decode("latin-1")
    return uri

def format_access_line(request: Request, response: Response, now: Optional[datetime] = None) -> str:
    """Format one request in the nginx-style access log layout used by the site."""
    now = now or datetime.now(timezone.utc)
    size = response.content_length
    if size is None and not response.direct_passthrough:
        size = response.calculate_content_length()
    return '%s %s [%s] "%s %s %s" %d %d "%s" "%s"' % (
        sanitize_log_field(request.host),
        sanitize_log_field(client_ip(request)),
        now.strftime(TIME_FORMAT),
        request.method,
        sanitize_log_field(request_uri(request)),
        request.environ.get("SERVER_PROTOCOL", "HTTP/1.1"),
        response.status_code,
        size or 0,
        sanitize_log_field(request.referrer or ""),
        sanitize_log_field(request.user_agent.string or ""),
    )

class AccessLog:
    """Append-only access log file shared by all request threads."""

    def __init__(self, path: str):
        self.path = path
        self._file: Optional[TextIO] = None
        self._lock = threading.Lock()

    def open(self):
        log_dir = os.path.dirname(self.path)
        if log_dir and not os.path.isdir(log_dir):
            os.makedirs(log_dir, mode=0o755, exist_ok=True)
        self._file = open(self.path, "a", encoding="utf-8")
        logger.info(f"Writing access log to {self.path}")
        return self

    def close(self):
        with self._lock:
            if self._file is not None:
                self._file.close()
                self._file = None

    def write(self, line: str):
        """Write a line; failures are logged and never reach the client."""
        with self._lock:
            if self._file is None:
                logger.error("Access log is not open, dropping entry")
                return
            try:
                self._file.write(line + "\n")
                self._file.flush()
            except (OSError, ValueError) as e:
                logger.error(f"Failed to write to access log file: {e}")

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
