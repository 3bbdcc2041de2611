import datetime
import logging
import time
from logging import LogRecord
from logging.config import dictConfig
from os import getpid
from threading import get_ident as get_thread_ident
from typing import Any, cast

from flask import Flask, Response, current_app, request
from pythonjsonlogger.core import LogData
from pythonjsonlogger.json import JsonFormatter as BaseJSONFormatter

UNLOGGED_PATHS = frozenset({"/healthcheck"})


def _common_request_extra_log_context() -> dict[str, Any]:
    context: dict[str, Any] = {
        "method": request.method,
        "url": request.url,
        "endpoint": request.endpoint,
        # `process` and `thread` already exist on LogRecord, so these are suffixed to stop LogRecord complaining
        # about `extra` overwriting them.
        "process_": getpid(),
        # stringified as json can't represent every thread ident accurately
        "thread_": str(get_thread_ident()),
    }
    # ids from the URL only; request bodies are never logged
    for key in ("client_id", "grant_id"):
        if request.view_args and key in request.view_args:
            context[key] = request.view_args[key]
    return context


def get_default_logging_config(app: Flask) -> dict[str, Any]:
    log_level = app.config["LOG_LEVEL"]
    formatter = app.config["LOG_FORMATTER"]

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "reject_mutable_data_structures": {
                "()": "grant_tracker.logging.RejectMutableDataStructuresFilter",
            },
        },
        "formatters": {
            "plaintext": {
                "()": "logging.Formatter",
                "fmt": "%(asctime)s %(levelname)s - %(message)s - from %(funcName)s() in %(filename)s:%(lineno)d",
            },
            "json": {
                "()": "grant_tracker.logging.JSONFormatter",
                "fmt": "%(name)s %(levelname)s - %(message)s - from %(funcName)s in %(pathname)s:%(lineno)d",
            },
        },
        "handlers": {
            "null": {
                "class": "logging.NullHandler",
            },
            "default": {
                "filters": ["reject_mutable_data_structures"],
                "formatter": formatter,
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "": {
                "handlers": ["null"],
            },
            "werkzeug": {
                "disabled": True,
            },
            app.name: {
                "handlers": ["default"],
                "level": log_level,
            },
        },
    }


def init_app(app: Flask, log_config: dict[str, Any] | None = None) -> None:
    log_config = log_config or get_default_logging_config(app)
    dictConfig(log_config)
    attach_request_loggers(app)


def attach_request_loggers(app: Flask) -> None:
    @app.before_request
    def before_request() -> None:
        # annotated onto request rather than flask.g; these shouldn't leak into a request-less app context
        request.before_request_real_time = time.perf_counter()  # type: ignore[attr-defined]
        request.before_request_process_time = time.process_time()  # type: ignore[attr-defined]

        if request.path not in UNLOGGED_PATHS:
            current_app.logger.debug(
                "--- %(method)s %(url)s",
                _common_request_extra_log_context(),
                extra=_common_request_extra_log_context(),
            )

    @app.after_request
    def after_request(response: Response) -> Response:
        if request.path not in UNLOGGED_PATHS:
            log_data = {
                "status": response.status_code,
                "duration_real": (
                    (time.perf_counter() - cast(float, request.before_request_real_time))
                    if hasattr(request, "before_request_real_time")
                    else None
                ),
                "duration_process": (
                    (time.process_time() - cast(float, request.before_request_process_time))
                    if hasattr(request, "before_request_process_time")
                    else None
                ),
                **_common_request_extra_log_context(),
            }
            current_app.logger.info(
                "%(status)s %(method)s %(url)s - [real:%(duration_real).2fs] [process:%(duration_process).2fs]",
                log_data,
                extra=log_data,
            )
        return response


class RejectMutableDataStructuresFilter(logging.Filter):
    def filter(self, record: LogRecord) -> LogRecord:
        logging_msg_args: dict[str, Any] | None
        if isinstance(record.args, tuple):
            logging_msg_args = record.args[0] if len(record.args) > 0 else None  # type: ignore[assignment]
        else:
            logging_msg_args = record.args  # type: ignore[assignment]

        if not logging_msg_args or not isinstance(logging_msg_args, dict):
            return record

        for _k, v in logging_msg_args.items():
            if not isinstance(v, str | int | float | bool | None | datetime.date | datetime.datetime):
                # Client records carry contact details and internal notes. Only ids, counts, statuses and dates may be
                # interpolated into log messages, so a whole record or request body can't be logged by accident.
                raise ValueError(f"Attempt to log data type `{type(v)}` rejected by security policy.")
        return record


class JSONFormatter(BaseJSONFormatter):
    def formatTime(self, record: LogRecord, datefmt: str | None = None) -> str:
        ct = self.converter(record.created)
        if datefmt:
            s = time.strftime(datefmt, ct)
        else:
            s = (
                datetime.datetime.fromtimestamp(record.created, datetime.timezone.utc)
                .astimezone()
                .isoformat(sep=" ", timespec="milliseconds")
            )
        return s

    def process_log_record(self, log_record: LogData) -> LogData:
        if "asctime" in log_record:
            log_record["time"] = log_record.pop("asctime")

        log_record["logType"] = "application"

        return log_record
