# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

from flask import Flask, g, request
import atexit
import logging
import time
import traceback
from os import environ
from typing import Optional
from .config import Config, parse_env_bool
from .utility import MultiLineFormatter, GunicornWorkerFilter, sanitize_path
from .version import __version__
from .accesslog import AccessLog, format_access_line
from .compression import gzip_response
from .memory import MemoryStore
from .metrics import record_metrics

# Configure logging
level = logging.DEBUG if parse_env_bool(environ, "DEBUG", False) else logging.INFO

formatter = MultiLineFormatter(f'[%(worker_id)s] %(asctime)-21s %(levelname)-8s %(name)-12s | %(message)s', datefmt="%Y-%m-%d %H:%M:%S")
handler = logging.StreamHandler()
handler.setFormatter(formatter)
handler.addFilter(GunicornWorkerFilter())  # Add the Gunicorn worker ID filter
logging.basicConfig(level=level, handlers=[handler])
logger = logging.getLogger("website")
logger.setLevel(level)

from .bp.healthcheck import bp_healthcheck
from .bp.site import bp_site

def _install_error_handlers(app: Flask):
    @app.errorhandler(404)
    def handle_not_found(error):
        logger.debug(f"Returning 404 for path: {sanitize_path(request.path)}")
        return "404 page not found\n", 404, {"Content-Type": "text/plain; charset=utf-8"}

    @app.errorhandler(500)
    def handle_internal_error(error):
        tb_str = traceback.format_exc()
        logger.error(f"Internal server error: {error}\nTraceback:\n{tb_str}")
        return "Internal Server Error\n", 500, {"Content-Type": "text/plain; charset=utf-8"}

def create_app(config: Optional[Config] = None, store: Optional[MemoryStore] = None) -> Flask:
    """Build the site application.

    When USE_MEMORY is set the whole web root is loaded before the app is
    returned; a MemoryLoadError here is fatal, the server must not start
    with a partial site.
    """
    config = config or Config()
    app = Flask(__name__, static_folder=None)
    app.config["SITE"] = config
    app.debug = config.DEBUG

    logger.info("Support Tools website version %s starting up", __version__)
    if config.DEBUG:
        logger.info("Debug mode enabled")
        config.log_summary(logger)

    if config.USE_MEMORY:
        if store is None:
            store = MemoryStore()
        if not len(store):
            logger.info("Loading files into memory")
            store.load(config.WEBROOT)
            logger.info("Files loaded into memory")
        logger.info("Serving files from memory")
        app.extensions["memory_store"] = store
    else:
        logger.info("Serving files directly from filesystem")
        app.extensions["memory_store"] = None

    access_log = AccessLog(config.LOG_FILE_PATH).open()
    app.extensions["access_log"] = access_log
    atexit.register(access_log.close)

    @app.before_request
    def start_timer():
        g.request_start_time = time.time()
        g.sanitized_path = sanitize_path(request.path)

    @app.after_request
    def finish_request(response):
        """Access log, metrics, then compression, in that order."""
        if request.blueprint == bp_healthcheck.name:
            return response

        access_log.write(format_access_line(request, response))

        duration = time.time() - g.request_start_time
        logger.debug(f"Request for {g.sanitized_path} processed in {duration:f} seconds")
        record_metrics(g.sanitized_path, duration, response.status_code)

        return gzip_response(request, response)

    _install_error_handlers(app)
    app.register_blueprint(bp_healthcheck, url_prefix='/')
    app.register_blueprint(bp_site, url_prefix='/')
    logger.info(f"Serving {config.WEBROOT} on HTTP port: {config.PORT}")
    return app

def create_metrics_app(config: Optional[Config] = None) -> Flask:
    """Side app for the metrics port: /metrics, /healthz and /version only."""
    config = config or Config()
    app = Flask(f"{__name__}.metrics", static_folder=None)
    app.config["SITE"] = config
    app.register_blueprint(bp_healthcheck, url_prefix='/')
    logger.info(f"Metrics server listening on port {config.METRICS_PORT}")
    return app
