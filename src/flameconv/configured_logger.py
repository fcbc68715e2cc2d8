import logging
import sys

# LogLevel type since logging lib doesn't define its own enum/type for it
LogLevel = int


def new_logger(name: str,
               level: LogLevel = logging.INFO,
               stream=None) -> logging.Logger:
    """
    Create a logger writing `[time] LEVEL: message` lines to one stream.

    :param name: The name of the logger.
    :param level: The logging level. Defaults to INFO.
    :param stream: Where to write. Defaults to stderr, stdout carries the converted profile.
    :return: The configured logger.
    """
    log = logging.getLogger(name)
    log.setLevel(level)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(
        logging.Formatter('[%(asctime)s] %(levelname)s: %(message)s',
                          '%Y-%m-%d %H:%M:%S'))

    log.handlers = [handler]
    log.propagate = False
    return log


def set_level(level: LogLevel) -> None:
    logger.setLevel(level)


logger = new_logger("flameconv")
