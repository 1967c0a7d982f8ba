# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

# NOTE: Don't change this file. It's for the sole purpose of running the Flask apps, defined in the
# website/* directory. (Specifically, website/__init__.py)

import threading
from werkzeug.serving import make_server
from website import create_app, create_metrics_app
from website.config import Config

config = Config()
app = create_app(config)

metrics_server = make_server("0.0.0.0", config.METRICS_PORT, create_metrics_app(config), threaded=True)
threading.Thread(target=metrics_server.serve_forever, daemon=True, name="MetricsServer").start()

app.run("0.0.0.0", config.PORT, debug=config.DEBUG, use_reloader=False)
