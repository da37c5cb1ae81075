from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, NoReturn, Optional, Union

LOG_FORMAT = "{asctime} [{levelname[0]}] {name} : {message}"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class Logger(logging.Logger):
    def add_file_handler(self, path: Union[str, Path], level: Optional[int] = None) -> logging.FileHandler:
        """Also write this logger's records to a file. The parent directory must exist."""
        handler = logging.FileHandler(path, encoding="utf8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT, style="{"))
        handler.setLevel(level if level is not None else self.level)
        self.addHandler(handler)
        return handler

    def exit(self, msg: str, *args: Any, code: int = 1, **kwargs: Any) -> NoReturn:
        """Log a message at CRITICAL level and then exit the program."""
        self.critical(msg, *args, **kwargs)
        sys.exit(code)


def getLogger(name: Optional[str] = None, level: int = logging.NOTSET) -> Logger:
    """
    Get a tracklang Logger by name.

    Loggers are created through the logging module's manager, so the same name
    always returns the same Logger. Names are placed under the `tracklang` Logger
    so its handlers receive every record. A level other than NOTSET overrides the
    current level of that Logger.
    """
    if not name:
        name = "tracklang"
    elif name.split(".")[0] != "tracklang":
        name = f"tracklang.{name}"
    original = logging.getLoggerClass()
    logging.setLoggerClass(Logger)
    try:
        log = logging.getLogger(name)
    finally:
        logging.setLoggerClass(original)
    if not isinstance(log, Logger):
        raise TypeError(f"Logger {name!r} was already created as a {type(log).__name__}, not a tracklang Logger")
    if level != logging.NOTSET:
        log.setLevel(level)
    return log
