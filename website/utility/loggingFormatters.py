# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

import logging
from os import getenv, getpid

class MultiLineFormatter(logging.Formatter):
    """Logging formatter that repeats the record prefix on every line of a multi-line message.

    Config dumps and tracebacks otherwise lose the worker/level prefix after
    the first line, which breaks grepping the container logs.
    """
    def format(self, record):
        message = super().format(record)

        if "\n" in record.getMessage():
            lines = []
            for line in record.getMessage().splitlines():
                new_record = logging.LogRecord(
                    record.name, record.levelno, record.pathname,
                    record.lineno, line, None, None,
                    func=record.funcName
                )
                # Filters have already run on the original record
                new_record.worker_id = getattr(record, "worker_id", f"PID {getpid()}")
                lines.append(super().format(new_record))

            # Keep the traceback, if any, at the end
            if record.exc_info or record.exc_text:
                lines.append(self.formatException(record.exc_info) if record.exc_info else record.exc_text)
            return "\n".join(lines)
        return message

class GunicornWorkerFilter(logging.Filter):
    """Filter to add the Gunicorn worker ID to log records."""

    def filter(self, record):
        worker_id = getenv("GUNICORN_WORKER_ID", "unknown")

        if worker_id != "unknown":
            record.worker_id = "worker" + worker_id
        else:
            record.worker_id = f"PID {getpid()}"
        return True

def sanitize_log_field(value: str) -> str:
    """Escape line breaks and tabs so request data cannot forge log lines."""
    return value.replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t")
