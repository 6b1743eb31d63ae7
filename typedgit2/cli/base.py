import logging
import sys

DEBUG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def setup_logging(log_level: int):
    handlers = []

    # Messages at level INFO or lower go to stdout
    info_handler = logging.StreamHandler(stream=sys.stdout)
    info_handler.setLevel(log_level)
    info_handler.addFilter(lambda record: record.levelno <= logging.INFO)  # pragma: no cover
    handlers.append(info_handler)

    # Everything else goes to stderr
    logging.lastResort.addFilter(lambda record: record.levelno > logging.INFO)  # pragma: no cover
    handlers.append(logging.lastResort)

    # Debug output traces every libgit2 call, show where it comes from.
    if log_level <= logging.DEBUG:
        formatter = logging.Formatter(DEBUG_FORMAT)
    else:
        formatter = logging.Formatter("%(message)s")

    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=log_level, handlers=handlers)
