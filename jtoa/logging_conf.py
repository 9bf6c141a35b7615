#!/usr/bin/env python3
# jtoa/logging_conf.py
"""
Central logging setup for jtoa.
Console output goes to stderr; an optional rotating file log mirrors it.
"""

import logging
from logging.handlers import RotatingFileHandler

from jtoa.config import Config

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def setup_logging(cfg: Config, verbose: bool = False) -> None:
    level_name = cfg["logging"].get("level", "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)
    # fatal errors always reach stderr
    level = min(level, logging.ERROR)
    if verbose:
        level = min(level, logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)

    log_file = cfg["logging"].get("file")
    if log_file:
        handler = RotatingFileHandler(
            log_file,
            maxBytes=int(cfg["logging"].get("rotate_bytes", 5 * 1024 * 1024)),
            backupCount=int(cfg["logging"].get("rotate_keep", 3)),
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(handler)

    # Pillow logs every plugin probe at DEBUG.
    logging.getLogger("PIL").setLevel(max(level, logging.INFO))
