# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

import os
import posixpath
import logging
from flask import Blueprint, Response, abort, current_app, redirect, request, send_from_directory
from werkzeug.security import safe_join
from ..memory import INDEX_FILE, MemoryStore
from ..utility import sanitize_path

logger = logging.getLogger(__name__)

bp_site = Blueprint('site', __name__)

ONE_YEAR = 31536000

def serve_from_memory(store: MemoryStore) -> Response:
    """Serve a preloaded file, with long-lived cache headers."""
    path = sanitize_path(request.path)
    fd = store.lookup(path)
    if fd is None:
        logger.debug(f"File not found in memory for path: {path}")
        abort(404)

    logger.debug(f"Serving file from memory: {path}")
    resp = Response(fd.content, content_type=fd.content_type)
    resp.headers["Cache-Control"] = f"max-age={ONE_YEAR}"
    resp.headers["X-Content-Type-Options"] = "nosniff"
    resp.last_modified = fd.mod_time
    resp.set_etag(fd.etag)
    return resp.make_conditional(request)

def serve_from_filesystem(webroot: str, filename: str) -> Response:
    """Serve straight from the web root on disk."""
    full_path = safe_join(webroot, filename) if filename else webroot
    if full_path is None:
        abort(404)

    if os.path.isdir(full_path):
        if filename and not request.path.endswith("/"):
            return redirect(request.path + "/", code=301)
        filename = posixpath.join(filename, INDEX_FILE) if filename else INDEX_FILE

    return send_from_directory(webroot, filename)

@bp_site.route("/", defaults={"filename": ""})
@bp_site.route("/<path:filename>")
def serve(filename: str):
    config = current_app.config["SITE"]
    store = current_app.extensions.get("memory_store")
    if store is not None:
        return serve_from_memory(store)
    return serve_from_filesystem(config.WEBROOT, filename)
