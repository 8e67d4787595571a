import logging
import sys

from config import LOG_LEVEL, SQL_LOG_LEVEL

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging() -> None:
    root = logging.getLogger()
    root.setLevel(LOG_LEVEL)

    # Clear existing handlers (uvicorn reload calls this again)
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(LOG_LEVEL)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(LOG_LEVEL)
    logging.getLogger("sqlalchemy.engine").setLevel(SQL_LOG_LEVEL)
