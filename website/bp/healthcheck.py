# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

from flask import Blueprint, current_app, jsonify, make_response
from ..metrics import render_metrics
from ..version import __version__
import logging

logger = logging.getLogger(__name__)

bp_healthcheck = Blueprint('healthcheck', __name__)

@bp_healthcheck.route("/healthz")
def healthz():
    """Liveness probe. Answers as long as the process can serve requests."""
    resp = make_response("ok", 200)
    resp.mimetype = "text/plain"
    return resp

@bp_healthcheck.route("/version")
def version():
    """Build information baked into the image."""
    logger.debug("VersionHandler")
    config = current_app.config["SITE"]
    return jsonify({
        "version": config.VERSION or __version__,
        "gitCommit": config.GIT_COMMIT,
        "buildTime": config.BUILD_TIME,
    })

@bp_healthcheck.route("/metrics")
def metrics():
    payload, content_type = render_metrics()
    resp = make_response(payload, 200)
    resp.headers["Content-Type"] = content_type
    return resp
