import multiprocessing
import os
import threading
# Gunicorn config for the website
# Run with: gunicorn -c gunicorn.conf.py "website:create_app()"

bind = os.getenv("GUNICORN_BIND", f"0.0.0.0:{os.getenv('PORT', '8080')}")
workers = int(os.getenv("GUNICORN_WORKERS", multiprocessing.cpu_count() * 2 + 1))
worker_class = "sync"
accesslog = None  # the app writes its own access log to LOG_FILE_PATH
errorlog = "-"   # log to stdout
loglevel = os.getenv("GUNICORN_LOGLEVEL", "info")
proc_name = "website_gunicorn"

logger_class = "gunicorn.glogging.Logger"

# Load the web root once in the master; workers share the pages copy-on-write
preload_app = os.getenv("USE_MEMORY", "false").lower() in ("1", "true", "yes", "on")


def when_ready(server):
    # One metrics listener for the whole pod, owned by the master.
    # Set PROMETHEUS_MULTIPROC_DIR so it can read the workers' samples.
    from werkzeug.serving import make_server
    from website import create_metrics_app

    port = int(os.getenv("METRICS_PORT", "9090"))
    metrics_server = make_server("0.0.0.0", port, create_metrics_app(), threaded=True)
    threading.Thread(target=metrics_server.serve_forever, daemon=True, name="MetricsServer").start()
    server.log.info(f"Metrics server started on port {port}")


def post_fork(server, worker):
    os.environ["GUNICORN_WORKER_ID"] = str(worker.age)
    server.log.info(f"Worker spawned (pid: {worker.pid})")


def child_exit(server, worker):
    if os.getenv("PROMETHEUS_MULTIPROC_DIR"):
        from prometheus_client import multiprocess
        multiprocess.mark_process_dead(worker.pid)
