# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

import os
import logging
import mimetypes
import threading
from datetime import datetime, timezone
from typing import Dict, Optional
from .exceptions import MemoryLoadError
from .utility import sanitize_path, url_path_for

logger = logging.getLogger(__name__)

INDEX_FILE = "index.html"

class FileData:
    """A single file of the rendered site, held in memory."""
    content_type: str
    content: bytes
    mod_time: datetime

    def __init__(self, content: bytes, content_type: str, mod_time: Optional[datetime] = None):
        self.content = content
        self.content_type = content_type
        self.mod_time = mod_time or datetime.now(timezone.utc)

    @property
    def etag(self) -> str:
        return str(int(self.mod_time.timestamp()))

    def __len__(self):
        return len(self.content)

    def __repr__(self):
        return f"<FileData content_type=\"{self.content_type}\" bytes={len(self.content)}>"

def guess_content_type(filename: str) -> str:
    content_type, _ = mimetypes.guess_type(filename)
    if content_type is None:
        return "application/octet-stream"
    if content_type.startswith("text/") or content_type in ("application/javascript", "application/json", "image/svg+xml"):
        return f"{content_type}; charset=utf-8"
    return content_type

class MemoryStore:
    """URL path -> file contents for the whole web root.

    Files are keyed by their sanitized URL path. Directories holding an index.html are
    also keyed by their path with a trailing slash.
    """

    def __init__(self):
        self.files: Dict[str, FileData] = {}
        self._lock = threading.Lock()

    def __len__(self):
        return len(self.files)

    def __contains__(self, path: str):
        return path in self.files

    def total_bytes(self) -> int:
        return sum(len(fd) for fd in self.files.values())

    def load(self, root_dir: str) -> int:
        """Read every file under root_dir into memory, replacing the current contents.

        Returns the number of entries loaded. Raises MemoryLoadError when the
        root is missing or a file cannot be read.
        """
        if not os.path.isdir(root_dir):
            raise MemoryLoadError(f"Web root {root_dir!r} does not exist or is not a directory")

        def on_error(error: OSError):
            raise MemoryLoadError(f"Error accessing path {error.filename!r}: {error}") from error

        files: Dict[str, FileData] = {}
        for dirpath, dirnames, filenames in os.walk(root_dir, onerror=on_error):
            dirnames.sort()
            url_path = sanitize_path(url_path_for(os.path.relpath(dirpath, root_dir)))
            if not url_path.endswith("/"):
                url_path += "/"

            logger.debug(f"Loading directory: {dirpath}")
            if INDEX_FILE in filenames:
                files[url_path] = self._read(os.path.join(dirpath, INDEX_FILE))
                logger.debug(f"Directory {url_path} loaded with {INDEX_FILE}")
            else:
                logger.debug(f"Directory {url_path} does not contain an {INDEX_FILE}")

            for filename in sorted(filenames):
                path = os.path.join(dirpath, filename)
                file_url = sanitize_path(url_path_for(os.path.relpath(path, root_dir)))
                files[file_url] = self._read(path)
                logger.debug(f"File {path} loaded into memory with urlPath {file_url}")

        with self._lock:
            self.files = files
        logger.info(f"All files and directories successfully loaded into memory ({len(files)} entries, {self.total_bytes()} bytes).")
        return len(files)

    @staticmethod
    def _read(path: str) -> FileData:
        try:
            with open(path, "rb") as f:
                content = f.read()
        except OSError as e:
            raise MemoryLoadError(f"Failed to read file {path!r}: {e}") from e
        return FileData(content, guess_content_type(path))

    def lookup(self, path: str) -> Optional[FileData]:
        """Find the entry serving a (sanitized) request path."""
        if path.endswith("/"):
            path += INDEX_FILE

        fd = self.files.get(path)
        if fd is None and not path.endswith("/" + INDEX_FILE):
            # /post/foo -> /post/foo/index.html
            fd = self.files.get(path + "/" + INDEX_FILE)
            if fd is not None:
                logger.debug(f"Found {INDEX_FILE} for path: {path}")
        return fd
