import logging
import logging.handlers
import multiprocessing as mp
from typing import Optional

LOGGER_NAME = "kyros"

def get_logger(suffix: Optional[str] = None) -> logging.Logger:
    name = LOGGER_NAME if not suffix else f"{LOGGER_NAME}.{suffix}"
    return logging.getLogger(name)

def _formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(processName)s %(levelname)s %(name)s - %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

def _reset_handlers(logger: logging.Logger) -> None:
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

def configure_logging(
    *,
    level: int = logging.INFO,
    console: bool = True,
    log_file: Optional[str] = None,
    rotate_bytes: int = 1024 * 1024,
    rotate_count: int = 3,
) -> logging.Logger:
    """Install console and optional rotating-file handlers on the package logger."""
    logger = get_logger()
    logger.setLevel(level)
    logger.propagate = False
    _reset_handlers(logger)
    fmt = _formatter()
    if console:
        ch = logging.StreamHandler()
        ch.setLevel(level)
        ch.setFormatter(fmt)
        logger.addHandler(ch)
    if log_file:
        fh = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=rotate_bytes, backupCount=rotate_count, encoding="utf-8"
        )
        fh.setLevel(level)
        fh.setFormatter(fmt)
        logger.addHandler(fh)
    return logger

def create_log_queue() -> mp.Queue:
    return mp.Queue(-1)

def start_queue_listener(queue: mp.Queue, logger: logging.Logger) -> logging.handlers.QueueListener:
    listener = logging.handlers.QueueListener(queue, *logger.handlers, respect_handler_level=True)
    listener.start()
    return listener

def configure_worker_logging(queue: Optional[mp.Queue], level: int = logging.INFO) -> None:
    # Pool workers forward records to the parent's listener; with no queue they stay quiet.
    logger = get_logger()
    logger.setLevel(level)
    logger.propagate = False
    _reset_handlers(logger)
    if queue is None:
        logger.addHandler(logging.NullHandler())
        return
    qh = logging.handlers.QueueHandler(queue)
    qh.setLevel(level)
    logger.addHandler(qh)
