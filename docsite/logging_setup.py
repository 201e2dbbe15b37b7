import logging
import os
from logging.handlers import RotatingFileHandler

FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_FILE_ENV = "DOCSITE_LOG_FILE"


def _has_handler(logger, tag):
    return any(getattr(h, "_docsite_tag", "") == tag for h in logger.handlers)


def configure_logging(verbose=False, log_file=None):
    logger = logging.getLogger("docsite")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    if not _has_handler(logger, "console"):
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter(FORMAT))
        h._docsite_tag = "console"
        logger.addHandler(h)

    log_file = log_file or os.environ.get(LOG_FILE_ENV)
    if log_file and not _has_handler(logger, "file"):
        fh = RotatingFileHandler(log_file, maxBytes=5_000_000, backupCount=5, encoding="utf-8")
        fh.setFormatter(logging.Formatter(FORMAT))
        fh._docsite_tag = "file"
        logger.addHandler(fh)
    return logger
