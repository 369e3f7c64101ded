# utils/logger.py
import logging
import sys
from config.paths import LOG_PATH
from config.settings import LOG_LEVEL

LOG_PATH.parent.mkdir(parents=True, exist_ok=True)

logger = logging.getLogger("crew_scheduler")
logger.setLevel(LOG_LEVEL)
logger.propagate = False

# handlers are attached once, on first import
if not logger.handlers:
    # full records go to the run log
    file_handler = logging.FileHandler(LOG_PATH, encoding="utf-8")
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(file_handler)

    # short form on stdout for container logs
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(stream_handler)


def get_logger(name: str) -> logging.Logger:
    """Child of the `crew_scheduler` logger, e.g. `crew_scheduler.scheduler.store`."""
    return logger.getChild(name)
