"""Logging setup for eqcalc.

Modules obtain loggers with :func:`get_logger`; nothing is configured on
import. The CLI calls :func:`setup_logging` once with the level chosen on the
command line.
"""

from __future__ import annotations

import logging

PACKAGE_LOGGER = "eqcalc_pkg"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the package logger (e.g. ``solver.system``)."""
    if name.startswith(PACKAGE_LOGGER):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")


def setup_logging(level: str = "INFO", log_file: str | None = None) -> logging.Logger:
    """Attach stream (and optional file) handlers to the package logger.

    Calling it again replaces the handlers installed by a previous call, so the
    REPL can switch levels without duplicating output.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    for handler in list(logger.handlers):
        if getattr(handler, "_eqcalc_handler", False):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        handler._eqcalc_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    logger.propagate = False
    return logger
