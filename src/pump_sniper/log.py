import logging
import sys
import time
from pathlib import Path
from typing import Optional

LOGGER_NAME = "pump_sniper"


class UTCFormatter(logging.Formatter):
    converter = time.gmtime


def configure_logging(level: str = "INFO", log_file: Optional[Path] = None) -> logging.Logger:
    log = logging.getLogger(LOGGER_NAME)
    log.setLevel(level)
    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()

    fmt = UTCFormatter(
        fmt="%(asctime)sZ %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    for h in handlers:
        h.setFormatter(fmt)
        log.addHandler(h)
    return log
