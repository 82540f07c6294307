#!/usr/bin/env python3
"""
Demonstration of hierarchical loggers with a loguru console sink.

Records are plain values handed to subscribers; this script forwards the
root's records to loguru so they show up on stderr with colours.

    HIERLOG_ROOT_LEVEL=DEBUG python examples/hierarchy_demo.py
"""

import sys

from loguru import logger

from hierlog import ERROR, WARN, LogRecord, get_logger, get_root_logger, set_hierarchical_logging

# hierlog level name -> loguru level name
LOGURU_LEVELS = {"VERBOSE": "TRACE", "DEBUG": "DEBUG", "INFO": "INFO", "WARN": "WARNING", "ERROR": "ERROR"}


def to_loguru(record: LogRecord) -> None:
    """Forward a record to loguru, keeping the hierarchical logger name."""
    level = LOGURU_LEVELS.get(record.level.name, "INFO")
    logger.bind(hierlog_name=record.logger_name or "<root>").log(level, record.message)


def main():
    logger.remove()
    logger.add(
        sys.stderr,
        level="TRACE",
        format="<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
        "<cyan>{extra[hierlog_name]}</cyan> - <level>{message}</level>",
    )

    root = get_root_logger()
    subscription = root.subscribe_records(to_loguru)

    set_hierarchical_logging(True)
    db = get_logger("app.db")
    pool = get_logger("app.db.pool")
    http = get_logger("app.http")

    db.level = WARN
    http.info("listening on :8080")
    pool.info(lambda: "pool stats (never built: app.db is at WARN)")
    pool.warn("pool exhausted, waiting")

    try:
        {}["missing"]
    except KeyError as exc:
        db.log(ERROR, "lookup failed", exc, exc.__traceback__)

    subscription.cancel()


if __name__ == "__main__":
    main()
